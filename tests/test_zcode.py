"""
Tests for Z-Code encoding.

Z-Code bit weights:
    L=32, S=16, SDB=8, WOSB=4, VOSB=2, SDVOSB=1
"""

import itertools

import pytest
from qreval.zcode import (
    ZCODE_OPTIONS,
    InvalidClassification,
    InvalidZCode,
    ZCodeError,
    decode_zcode,
    encode_zcode,
    format_zcode_binary,
    is_valid_zcode,
    zcode_labels,
)


class TestEncodeSingleClassification:
    """Single classifications and their required S."""

    def test_large_business(self):
        assert encode_zcode(["L"]) == 32

    def test_small_business(self):
        assert encode_zcode(["S"]) == 16

    def test_small_disadvantaged(self):
        assert encode_zcode(["S", "SDB"]) == 24

    def test_woman_owned(self):
        assert encode_zcode(["S", "WOSB"]) == 20

    def test_veteran_owned(self):
        assert encode_zcode(["S", "VOSB"]) == 18

    def test_service_disabled_veteran_adds_vosb(self):
        """SDVOSB implies VOSB: 16 + 2 + 1."""
        assert encode_zcode(["S", "SDVOSB"]) == 19


class TestEncodeMultipleClassifications:

    def test_s_wosb_vosb(self):
        assert encode_zcode(["S", "WOSB", "VOSB"]) == 22

    def test_all_small_classifications(self):
        assert encode_zcode(["S", "SDB", "WOSB", "VOSB", "SDVOSB"]) == 31

    def test_empty_selection(self):
        assert encode_zcode([]) == 0

    def test_order_independent(self):
        assert encode_zcode(["VOSB", "S", "WOSB"]) == encode_zcode(["S", "WOSB", "VOSB"]) == 22

    def test_duplicates_ignored(self):
        assert encode_zcode(["S", "S", "WOSB", "WOSB"]) == 20

    def test_accepts_any_iterable(self):
        assert encode_zcode({"S", "SDB"}) == 24
        assert encode_zcode(("L",)) == 32

    def test_bare_string_rejected(self):
        """A single string is not split into one-letter codes."""
        with pytest.raises(TypeError):
            encode_zcode("SDB")

    def test_unknown_codes_ignored(self):
        assert encode_zcode(["S", "HUBZONE"]) == 16


class TestBusinessRules:
    """Rule violations raise InvalidClassification."""

    def test_large_and_small_exclusive(self):
        with pytest.raises(InvalidClassification, match="L and S are mutually exclusive"):
            encode_zcode(["L", "S"])

    @pytest.mark.parametrize("code", ["SDB", "WOSB", "VOSB", "SDVOSB"])
    def test_requires_small(self, code):
        with pytest.raises(InvalidClassification, match=f"{code} requires S to be selected") as exc:
            encode_zcode([code])
        assert exc.value.code == code

    def test_requires_small_even_with_large(self):
        with pytest.raises(InvalidClassification, match="WOSB requires S"):
            encode_zcode(["L", "WOSB"])

    def test_exclusivity_checked_first(self):
        with pytest.raises(InvalidClassification, match="mutually exclusive"):
            encode_zcode(["SDB", "L", "S"])

    def test_first_missing_prerequisite_reported(self):
        """Prerequisites are checked in the order SDB, WOSB, VOSB, SDVOSB."""
        with pytest.raises(InvalidClassification) as exc:
            encode_zcode(["SDVOSB", "VOSB", "WOSB"])
        assert exc.value.code == "WOSB"

    def test_sdvosb_derivation_does_not_rescue_missing_small(self):
        with pytest.raises(InvalidClassification, match="SDVOSB requires S"):
            encode_zcode(["SDVOSB"])

    def test_reason_attribute(self):
        with pytest.raises(InvalidClassification) as exc:
            encode_zcode(["L", "S"])
        assert exc.value.reason == "L and S are mutually exclusive"
        assert exc.value.code is None

    def test_errors_are_value_errors(self):
        assert issubclass(InvalidClassification, ZCodeError)
        assert issubclass(InvalidZCode, ValueError)


class TestDecode:

    def test_decode_large(self):
        assert decode_zcode(32) == ["L"]

    def test_decode_small(self):
        assert decode_zcode(16) == ["S"]

    def test_decode_zero(self):
        assert decode_zcode(0) == []

    def test_decode_canonical_order(self):
        assert decode_zcode(22) == ["S", "WOSB", "VOSB"]
        assert decode_zcode(63) == ["L", "S", "SDB", "WOSB", "VOSB", "SDVOSB"]

    def test_decode_integral_float(self):
        assert decode_zcode(22.0) == ["S", "WOSB", "VOSB"]

    def test_decode_includes_derived_vosb(self):
        decoded = decode_zcode(encode_zcode(["S", "SDVOSB"]))
        assert "VOSB" in decoded
        assert "SDVOSB" in decoded

    def test_reversible(self):
        original = ["S", "WOSB", "VOSB"]
        assert sorted(decode_zcode(encode_zcode(original))) == sorted(original)

    @pytest.mark.parametrize("bad", [64, -1, 3.14, "22", None, True])
    def test_rejects_invalid(self, bad):
        with pytest.raises(InvalidZCode, match="Invalid Z-Code"):
            decode_zcode(bad)


class TestIsValid:

    def test_range(self):
        assert is_valid_zcode(0) is True
        assert is_valid_zcode(22) is True
        assert is_valid_zcode(63) is True
        assert is_valid_zcode(-1) is False
        assert is_valid_zcode(64) is False
        assert is_valid_zcode(3.14) is False

    def test_non_numbers(self):
        assert is_valid_zcode("16") is False
        assert is_valid_zcode(None) is False
        assert is_valid_zcode(False) is False


def _legal_selections():
    codes = [option.code for option in ZCODE_OPTIONS]
    for size in range(len(codes) + 1):
        for combo in itertools.combinations(codes, size):
            selected = set(combo)
            if {"L", "S"} <= selected:
                continue
            if selected & {"SDB", "WOSB", "VOSB", "SDVOSB"} and "S" not in selected:
                continue
            yield selected


def test_every_legal_selection_encodes_to_valid_zcode():
    for selected in _legal_selections():
        zcode = encode_zcode(selected)
        assert is_valid_zcode(zcode)
        expected = set(selected)
        if "SDVOSB" in expected:
            expected.add("VOSB")
        assert set(decode_zcode(zcode)) == expected


class TestDisplayHelpers:

    def test_labels(self):
        assert zcode_labels(22) == [
            "Small Business",
            "Woman-Owned Small Business",
            "Veteran-Owned Small Business",
        ]

    def test_labels_empty(self):
        assert zcode_labels(0) == []

    def test_labels_invalid(self):
        with pytest.raises(InvalidZCode):
            zcode_labels(99)

    def test_binary(self):
        assert format_zcode_binary(22) == "010110"
        assert format_zcode_binary(0) == "000000"
        assert format_zcode_binary(63) == "111111"

    def test_binary_invalid(self):
        with pytest.raises(InvalidZCode):
            format_zcode_binary(-3)
