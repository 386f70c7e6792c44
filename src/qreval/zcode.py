"""
Z-Code encoding of socioeconomic business classifications.

A Z-Code packs the classifications selected by a supplier into a 6-bit
integer, one bit per classification:

    L      32  Large Business
    S      16  Small Business
    SDB     8  Small Disadvantaged Business
    WOSB    4  Woman-Owned Small Business
    VOSB    2  Veteran-Owned Small Business
    SDVOSB  1  Service-Disabled Veteran-Owned Small Business

Example: S + WOSB + VOSB = 0b010110 = 22

Business rules enforced on encode, in this order:
    1. L and S are mutually exclusive
    2. SDB, WOSB, VOSB and SDVOSB each require S
    3. SDVOSB implies VOSB (added automatically)
"""

from __future__ import annotations

import logging
import numbers
from dataclasses import dataclass
from typing import Iterable, List, Optional

logger = logging.getLogger(__name__)

ZCODE_MAX = 63


class ZCodeError(ValueError):
    """Base class for Z-Code errors."""
    pass


class InvalidClassification(ZCodeError):
    """
    Raised when a classification selection breaks a business rule.

    This is a user-facing validation error: the form layer should show
    `reason` next to the classification checkboxes.
    """

    def __init__(self, reason: str, code: Optional[str] = None):
        super().__init__(reason)
        self.reason = reason
        self.code = code


class InvalidZCode(ZCodeError):
    """Raised when a stored Z-Code is not an integer in [0, 63]."""
    pass


@dataclass(frozen=True)
class ZCodeOption:
    code: str
    label: str
    weight: int


ZCODE_OPTIONS = (
    ZCodeOption("L", "Large Business", 32),
    ZCodeOption("S", "Small Business", 16),
    ZCodeOption("SDB", "Small Disadvantaged Business", 8),
    ZCodeOption("WOSB", "Woman-Owned Small Business", 4),
    ZCodeOption("VOSB", "Veteran-Owned Small Business", 2),
    ZCodeOption("SDVOSB", "Service-Disabled Veteran-Owned Small Business", 1),
)

_WEIGHTS = {option.code: option.weight for option in ZCODE_OPTIONS}

# Classifications that only apply to small businesses, in check order.
_REQUIRES_SMALL = ("SDB", "WOSB", "VOSB", "SDVOSB")


def encode_zcode(selected_codes: Iterable[str]) -> int:
    """
    Encode classification codes into a Z-Code integer.

    Args:
        selected_codes: Classification codes, any order, duplicates ignored

    Returns:
        Z-Code integer in [0, 63]

    Raises:
        InvalidClassification: If L and S are both selected, or a
            small-business classification is selected without S
        TypeError: If selected_codes is a single string instead of a collection
    """
    if isinstance(selected_codes, str):
        raise TypeError("selected_codes must be a collection of codes, not a string")
    codes = set(selected_codes)

    if "L" in codes and "S" in codes:
        raise InvalidClassification("L and S are mutually exclusive")

    for code in _REQUIRES_SMALL:
        if code in codes and "S" not in codes:
            raise InvalidClassification(f"{code} requires S to be selected", code=code)

    # Every service-disabled veteran-owned business is veteran-owned.
    if "SDVOSB" in codes:
        codes.add("VOSB")

    zcode = 0
    for code in codes:
        weight = _WEIGHTS.get(code)
        if weight is None:
            logger.warning("Ignoring unknown classification code %r", code)
            continue
        zcode |= weight
    return zcode


def is_valid_zcode(zcode: object) -> bool:
    """True if `zcode` is an integer in [0, 63]. Never raises."""
    if isinstance(zcode, bool):
        return False
    if isinstance(zcode, numbers.Integral):
        return 0 <= zcode <= ZCODE_MAX
    if isinstance(zcode, float) and zcode.is_integer():
        return 0 <= zcode <= ZCODE_MAX
    return False


def _checked(zcode: object) -> int:
    if not is_valid_zcode(zcode):
        raise InvalidZCode(f"Invalid Z-Code: {zcode!r}")
    return int(zcode)


def decode_zcode(zcode: object) -> List[str]:
    """
    Decode a Z-Code integer into classification codes.

    Returns:
        Codes in canonical order: L, S, SDB, WOSB, VOSB, SDVOSB

    Raises:
        InvalidZCode: If zcode is not an integer in [0, 63]
    """
    value = _checked(zcode)
    return [option.code for option in ZCODE_OPTIONS if value & option.weight]


def zcode_labels(zcode: object) -> List[str]:
    """Human-readable labels for a Z-Code, in canonical order."""
    value = _checked(zcode)
    return [option.label for option in ZCODE_OPTIONS if value & option.weight]


def format_zcode_binary(zcode: object) -> str:
    """Six-digit binary form, e.g. 22 -> "010110"."""
    return format(_checked(zcode), "06b")
