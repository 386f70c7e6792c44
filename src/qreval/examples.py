"""
Example questionnaire section for demos and tests.

Builds a small federal compliance attestation section that uses every
skip-logic rule type:

    1  Do you hold a current SAM registration?            (Yes=1 / No=0)
    2  Registration expiry date                           ShowIf 1 = 1
    3  Do you handle Controlled Unclassified Information? (Yes=1 / No=0 / NA=2)
    4  Socioeconomic classification (Z-Code)              SkipToQuestion 9 if 3 = 0
    5  Which CUI categories?  (multi-select)              ShowIf 3 = 1
    6  Export-controlled CUI handling plan                ShowIf 5 contains EXPT AND 3 = 1
    7  NIST SP 800-171 self-assessment score             HideIf 3 = 2
    8  Do you subcontract CUI work?                       SkipToEnd if 8 = 0
    9  Subcontractor flow-down attestation                ShowIf 8 = 1 OR 3 = 0
"""
from qreval.model import (
    CompoundCondition,
    ConditionOperator,
    LogicOperator,
    Question,
    Questionnaire,
    SingleCondition,
    SkipLogicRule,
    SkipLogicType,
)


def _equals(trigger_qid: int, value) -> SingleCondition:
    return SingleCondition(trigger_qid=trigger_qid, operator=ConditionOperator.EQUALS, value=value)


def build_example_questionnaire() -> Questionnaire:
    questionnaire = Questionnaire(name="Federal Compliance Attestation")
    questionnaire.metadata = {"section": "CUI", "source": "examples"}

    questionnaire.questions = [
        Question(qid=1, text="Do you hold a current SAM registration?"),
        Question(
            qid=2,
            text="Registration expiry date",
            skip_logic=SkipLogicRule(type=SkipLogicType.SHOW_IF, condition=_equals(1, "1")),
        ),
        Question(qid=3, text="Do you handle Controlled Unclassified Information?"),
        Question(
            qid=4,
            text="Socioeconomic classification",
            skip_logic=SkipLogicRule(
                type=SkipLogicType.SKIP_TO_QUESTION,
                condition=_equals(3, "0"),
                target_qid=9,
            ),
        ),
        Question(
            qid=5,
            text="Which CUI categories do you handle?",
            skip_logic=SkipLogicRule(type=SkipLogicType.SHOW_IF, condition=_equals(3, "1")),
        ),
        Question(
            qid=6,
            text="Export-controlled CUI handling plan",
            skip_logic=SkipLogicRule(
                type=SkipLogicType.SHOW_IF,
                condition=CompoundCondition(
                    conditions=(
                        SingleCondition(5, ConditionOperator.CONTAINS, "EXPT"),
                        _equals(3, "1"),
                    ),
                    logic=LogicOperator.AND,
                ),
            ),
        ),
        Question(
            qid=7,
            text="NIST SP 800-171 self-assessment score",
            skip_logic=SkipLogicRule(type=SkipLogicType.HIDE_IF, condition=_equals(3, 2)),
        ),
        Question(
            qid=8,
            text="Do you subcontract CUI work?",
            skip_logic=SkipLogicRule(type=SkipLogicType.SKIP_TO_END, condition=_equals(8, "0")),
        ),
        Question(
            qid=9,
            text="Subcontractor flow-down attestation",
            skip_logic=SkipLogicRule(
                type=SkipLogicType.SHOW_IF,
                condition=CompoundCondition(
                    conditions=(_equals(8, "1"), _equals(3, "0")),
                    logic=LogicOperator.OR,
                ),
            ),
        ),
    ]

    return questionnaire
