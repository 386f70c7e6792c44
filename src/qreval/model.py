"""
Core Questionnaire Model Objects

Defines the data structures consumed by the skip-logic evaluator:
    - Questions (with optional skip-logic rules)
    - Skip-logic rules and their conditions
    - Responses (answered values keyed by question id)
    - Evaluation results
    - Questionnaires (ordered root container)

ARCHITECTURAL RULE:
    These objects:
        - Know nothing about storage, import or rendering
        - Are immutable where they describe configuration
        - Are fully serializable (see qreval.serialization)
        - Represent structure, not behavior
"""

from abc import ABC
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Optional, Tuple, Union


END_SECTION = "END_SECTION"
"""Sentinel skip target meaning "jump past the last question of the section"."""


ResponseValue = Union[str, int, float]
SkipTarget = Union[int, str, None]


class SkipLogicType(Enum):
    """
    The action a skip-logic rule performs when its condition is met.

    ShowIf / HideIf control the question's own visibility.
    SkipToQuestion / SkipToEnd leave the question visible and only
    affect where navigation goes after it is answered.
    """

    SHOW_IF = "ShowIf"
    HIDE_IF = "HideIf"
    SKIP_TO_QUESTION = "SkipToQuestion"
    SKIP_TO_END = "SkipToEnd"


class ConditionOperator(Enum):
    """
    Comparison operators available to a skip-logic condition.

    Keep this minimal. Every operator here must be meaningful
    for both numeric-coded and text-coded answers.
    """

    EQUALS = "="
    NOT_EQUALS = "!="
    CONTAINS = "contains"
    EMPTY = "empty"


class LogicOperator(Enum):
    """How the conditions of a compound rule are combined."""

    AND = "AND"
    OR = "OR"


class RuleCondition(ABC):
    """
    Base class for the condition carried by a skip-logic rule.

    A rule holds exactly one of:
        - SingleCondition (one trigger question)
        - CompoundCondition (several conditions joined by AND/OR)

    This class is structure only. Evaluation lives in qreval.skip_logic.
    """
    pass


@dataclass(frozen=True)
class SingleCondition(RuleCondition):
    """
    Compares the answer of one trigger question against a value.

    Example:
        "show if question 1 was answered Yes"

    Becomes:
        SingleCondition(trigger_qid=1, operator=ConditionOperator.EQUALS, value="1")

    Properties:
        trigger_qid: qid of the question whose answer is inspected
        operator: ConditionOperator, or the raw operator string when the
            configuration names an operator this package does not know
        value: Expected value (ignored by the empty operator)
    """

    trigger_qid: int
    operator: Union[ConditionOperator, str]
    value: ResponseValue = ""


@dataclass(frozen=True)
class CompoundCondition(RuleCondition):
    """
    Several single conditions combined with AND or OR.

    Properties:
        conditions: Ordered conditions, each evaluated independently
        logic: AND requires every condition, OR requires at least one

    IMPORTANT:
        An empty conditions tuple is allowed and makes the rule a no-op.
    """

    conditions: Tuple[SingleCondition, ...] = ()
    logic: LogicOperator = LogicOperator.AND


@dataclass(frozen=True)
class SkipLogicRule:
    """
    Conditional-display rule attached to a question.

    Properties:
        type:
            SkipLogicType discriminant
        condition:
            SingleCondition or CompoundCondition.
            If None: the rule is a no-op (always visible, never skips)
        target_qid:
            Destination question, used only by SkipToQuestion

    ARCHITECTURAL RULE:
        A rule cannot hold a single and a compound condition at the same
        time. Configuration that tries to is rejected while decoding.
    """

    type: SkipLogicType
    condition: Optional[RuleCondition] = None
    target_qid: Optional[int] = None


@dataclass(frozen=True)
class Question:
    """
    A questionnaire question as seen by the evaluator.

    Properties:
        qid: Unique within a questionnaire, immutable once published
        skip_logic: Optional SkipLogicRule; None means always shown
        text: Human-readable question text (documentation only)
    """

    qid: int
    skip_logic: Optional[SkipLogicRule] = None
    text: str = ""


@dataclass(frozen=True)
class Response:
    """A stored answer. Multi-select answers are comma-joined strings."""

    response_value: ResponseValue


ResponseMap = Mapping[int, Response]


@dataclass(frozen=True)
class SkipLogicResult:
    """
    Outcome of evaluating one question.

    Properties:
        visible: Whether the question is presented and counted
        skip_to: Target qid, END_SECTION, or None when navigation
            simply continues with the next question
    """

    visible: bool
    skip_to: SkipTarget = None


@dataclass
class Questionnaire:
    """
    Ordered root container for a questionnaire section.

    Question order is the navigation order.

    INVARIANTS:
        - qids are unique
        - skip targets and triggers should reference existing qids
          (checked by qreval.analyzer, not enforced here)
    """

    name: str
    questions: List[Question] = field(default_factory=list)
    metadata: Dict[str, str] = field(default_factory=dict)

    def get_question(self, qid: int) -> Optional[Question]:
        """
        Retrieve a question by qid.

        Returns:
            Question object or None if not found
        """
        for question in self.questions:
            if question.qid == qid:
                return question
        return None

    def index_of(self, qid: int) -> Optional[int]:
        """Position of a question in navigation order, or None."""
        for index, question in enumerate(self.questions):
            if question.qid == qid:
                return index
        return None
