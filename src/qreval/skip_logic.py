"""
Skip-logic evaluation.

Decides, for one question and the responses collected so far, whether the
question is shown and whether answering it redirects navigation.

Evaluation is pure: the same (question, responses) pair always gives the
same result, and the response map is never modified. Malformed rules
degrade to "visible, no skip" rather than raising.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from qreval.model import (
    END_SECTION,
    CompoundCondition,
    ConditionOperator,
    LogicOperator,
    Question,
    ResponseMap,
    ResponseValue,
    SingleCondition,
    SkipLogicResult,
    SkipLogicRule,
    SkipLogicType,
)

logger = logging.getLogger(__name__)

DEFAULT_RESULT = SkipLogicResult(visible=True, skip_to=None)


def _as_text(value: ResponseValue) -> str:
    """String form used for comparisons; 1, 1.0 and "1" all become "1"."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _coerce_operator(operator: Union[ConditionOperator, str]) -> Optional[ConditionOperator]:
    if isinstance(operator, ConditionOperator):
        return operator
    try:
        return ConditionOperator(operator)
    except ValueError:
        return None


def evaluate_condition(
    actual_value: Optional[ResponseValue],
    operator: Union[ConditionOperator, str],
    expected_value: Optional[ResponseValue] = None,
) -> bool:
    """
    Evaluate one comparison against an answer.

    Args:
        actual_value: The stored answer, or None if never answered
        operator: ConditionOperator or its wire spelling ("=", "!=", ...)
        expected_value: Value to compare against (ignored for "empty")

    Returns:
        True if the condition holds. Unknown operators and unanswered
        triggers (for every operator except "empty") give False.
    """
    op = _coerce_operator(operator)
    if op is None:
        logger.warning("Unknown skip-logic operator %r, condition treated as false", operator)
        return False

    if op is ConditionOperator.EMPTY:
        return actual_value is None or actual_value == ""

    if actual_value is None:
        return False

    actual = _as_text(actual_value)
    expected = _as_text("" if expected_value is None else expected_value)

    if op is ConditionOperator.EQUALS:
        return actual == expected
    if op is ConditionOperator.NOT_EQUALS:
        return actual != expected
    # CONTAINS: substring match, covers comma-joined multi-select answers
    return expected in actual


def _lookup(responses: ResponseMap, qid: int) -> Optional[ResponseValue]:
    response = responses.get(qid)
    if response is None:
        return None
    return response.response_value


def _single_met(condition: SingleCondition, responses: ResponseMap) -> bool:
    return evaluate_condition(
        _lookup(responses, condition.trigger_qid),
        condition.operator,
        condition.value,
    )


def _dispatch(rule: SkipLogicRule, condition_met: bool) -> SkipLogicResult:
    if rule.type is SkipLogicType.SHOW_IF:
        return SkipLogicResult(visible=condition_met, skip_to=None)
    if rule.type is SkipLogicType.HIDE_IF:
        return SkipLogicResult(visible=not condition_met, skip_to=None)
    if rule.type is SkipLogicType.SKIP_TO_QUESTION:
        # qid 0 counts as no target.
        target = rule.target_qid if condition_met and rule.target_qid else None
        return SkipLogicResult(visible=True, skip_to=target)
    if rule.type is SkipLogicType.SKIP_TO_END:
        return SkipLogicResult(visible=True, skip_to=END_SECTION if condition_met else None)
    return DEFAULT_RESULT


def evaluate_skip_logic(question: Question, responses: ResponseMap) -> SkipLogicResult:
    """
    Evaluate a question's skip-logic rule against the collected responses.

    A question without a rule, or with a rule that carries no usable
    condition, is visible and never redirects.

    SkipToQuestion and SkipToEnd never hide the question itself; they only
    report where navigation should go once it has been answered.
    """
    rule = question.skip_logic
    if rule is None:
        return DEFAULT_RESULT

    condition = rule.condition
    if isinstance(condition, SingleCondition):
        condition_met = _single_met(condition, responses)
    elif isinstance(condition, CompoundCondition) and condition.conditions:
        results = [_single_met(c, responses) for c in condition.conditions]
        if condition.logic is LogicOperator.OR:
            condition_met = any(results)
        else:
            condition_met = all(results)
    else:
        return DEFAULT_RESULT

    result = _dispatch(rule, condition_met)
    logger.debug(
        "Question %s: %s condition met=%s -> visible=%s skip_to=%s",
        question.qid, rule.type.value, condition_met, result.visible, result.skip_to,
    )
    return result
