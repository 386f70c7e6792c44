"""
Serialization helpers for questionnaire objects (Questionnaire, Question,
SkipLogicRule, responses, results).

Provides JSON/YAML round-trip via an intermediate dict representation that
uses the camelCase wire keys shared with the rest of the platform
(`skipLogic`, `triggerQid`, `targetQid`, `responseValue`, ...).

Decoding is also where rule configuration is validated: structurally
impossible rules raise SkipLogicConfigError here, so the evaluator only
ever sees well-formed objects.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, Mapping, Optional

import yaml

from qreval.model import (
    CompoundCondition,
    ConditionOperator,
    LogicOperator,
    Question,
    Questionnaire,
    Response,
    ResponseMap,
    RuleCondition,
    SingleCondition,
    SkipLogicResult,
    SkipLogicRule,
    SkipLogicType,
)

logger = logging.getLogger(__name__)

_SINGLE_KEYS = ("triggerQid", "operator", "value")
_QID_RE = re.compile(r"^\s*-?[0-9]+\s*$")


class SkipLogicConfigError(Exception):
    """Raised when a skip-logic rule cannot be decoded."""
    pass


def _qid(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise SkipLogicConfigError(f"{field_name} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _QID_RE.match(value):
        return int(value)
    raise SkipLogicConfigError(f"{field_name} must be an integer, got {value!r}")


def _operator_from_wire(value: Any) -> ConditionOperator | str:
    try:
        return ConditionOperator(value)
    except ValueError:
        # Kept raw so the evaluator can fail closed on it.
        logger.warning("Unknown skip-logic operator %r in configuration", value)
        return str(value)


def _operator_to_wire(op: ConditionOperator | str) -> str:
    return op.value if isinstance(op, ConditionOperator) else op


def condition_to_dict(c: SingleCondition) -> Dict[str, Any]:
    return {
        "triggerQid": c.trigger_qid,
        "operator": _operator_to_wire(c.operator),
        "value": c.value,
    }


def condition_from_dict(d: Mapping[str, Any]) -> SingleCondition:
    if not isinstance(d, Mapping):
        raise SkipLogicConfigError(f"Condition must be a mapping, got {type(d).__name__}")
    missing = [key for key in ("triggerQid", "operator") if d.get(key) is None]
    if missing:
        raise SkipLogicConfigError(f"Condition is missing {', '.join(missing)}")
    value = d.get("value")
    return SingleCondition(
        trigger_qid=_qid(d["triggerQid"], "triggerQid"),
        operator=_operator_from_wire(d["operator"]),
        value="" if value is None else value,
    )


def rule_to_dict(rule: SkipLogicRule | None) -> Dict[str, Any] | None:
    if rule is None:
        return None
    d: Dict[str, Any] = {"type": rule.type.value}
    if isinstance(rule.condition, SingleCondition):
        d.update(condition_to_dict(rule.condition))
    elif isinstance(rule.condition, CompoundCondition):
        d["conditions"] = [condition_to_dict(c) for c in rule.condition.conditions]
        d["logic"] = rule.condition.logic.value
    if rule.target_qid is not None:
        d["targetQid"] = rule.target_qid
    return d


def rule_from_dict(d: Any) -> SkipLogicRule | None:
    """
    Decode a wire-format rule.

    The single-condition form is used only when triggerQid, operator and
    value are all present. A rule with neither form populated decodes to
    a no-op rule (condition=None).

    Raises:
        SkipLogicConfigError: For an unknown type or logic, or when both
            the single and the compound form are populated
    """
    if d is None:
        return None
    if not isinstance(d, Mapping):
        raise SkipLogicConfigError(f"Skip logic must be a mapping, got {type(d).__name__}")

    try:
        rule_type = SkipLogicType(d.get("type"))
    except ValueError:
        raise SkipLogicConfigError(f"Unknown skip logic type: {d.get('type')!r}")

    has_single = all(d.get(key) is not None for key in _SINGLE_KEYS)
    raw_conditions = d.get("conditions") or []
    if not isinstance(raw_conditions, (list, tuple)):
        raise SkipLogicConfigError(
            f"conditions must be a list, got {type(raw_conditions).__name__}"
        )
    has_compound = len(raw_conditions) > 0

    if has_single and has_compound:
        raise SkipLogicConfigError(
            "Skip logic cannot define both a single condition and a conditions list"
        )

    condition: Optional[RuleCondition] = None
    if has_single:
        condition = condition_from_dict(d)
    elif has_compound:
        logic_value = d.get("logic") or LogicOperator.AND.value
        try:
            logic = LogicOperator(str(logic_value).upper())
        except ValueError:
            raise SkipLogicConfigError(f"Unknown skip logic combinator: {logic_value!r}")
        condition = CompoundCondition(
            conditions=tuple(condition_from_dict(c) for c in raw_conditions),
            logic=logic,
        )

    target = d.get("targetQid")
    return SkipLogicRule(
        type=rule_type,
        condition=condition,
        target_qid=_qid(target, "targetQid") if target is not None else None,
    )


def question_to_dict(q: Question) -> Dict[str, Any]:
    return {"qid": q.qid, "text": q.text, "skipLogic": rule_to_dict(q.skip_logic)}


def question_from_dict(d: Mapping[str, Any]) -> Question:
    return Question(
        qid=_qid(d["qid"], "qid"),
        skip_logic=rule_from_dict(d.get("skipLogic")),
        text=d.get("text", "") or "",
    )


def responses_to_dict(responses: ResponseMap) -> Dict[int, Dict[str, Any]]:
    return {qid: {"responseValue": r.response_value} for qid, r in responses.items()}


def responses_from_dict(d: Mapping[Any, Any]) -> Dict[int, Response]:
    """Decode a response map; string keys (as produced by JSON) become ints."""
    responses = {}
    for qid, entry in d.items():
        if not isinstance(entry, Mapping) or "responseValue" not in entry:
            raise SkipLogicConfigError(f"Response for question {qid!r} has no responseValue")
        responses[_qid(qid, "qid")] = Response(response_value=entry["responseValue"])
    return responses


def result_to_dict(result: SkipLogicResult) -> Dict[str, Any]:
    return {"visible": result.visible, "skipTo": result.skip_to}


def questionnaire_to_dict(q: Questionnaire) -> Dict[str, Any]:
    return {
        "name": q.name,
        "questions": [question_to_dict(question) for question in q.questions],
        "metadata": q.metadata,
    }


def questionnaire_from_dict(d: Mapping[str, Any]) -> Questionnaire:
    q = Questionnaire(name=d.get("name", ""))
    q.questions = [question_from_dict(question) for question in d.get("questions", [])]
    q.metadata = d.get("metadata", {}) or {}
    return q


def questionnaire_to_json(q: Questionnaire) -> str:
    return json.dumps(questionnaire_to_dict(q), sort_keys=True)


def questionnaire_from_json(s: str) -> Questionnaire:
    d = json.loads(s)
    return questionnaire_from_dict(d)


def questionnaire_to_yaml(q: Questionnaire) -> str:
    return yaml.safe_dump(questionnaire_to_dict(q))


def questionnaire_from_yaml(s: str) -> Questionnaire:
    d = yaml.safe_load(s)
    return questionnaire_from_dict(d)
