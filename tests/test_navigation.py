"""
Tests for navigation helpers.

Uses the example attestation section (see qreval.examples) and a few
hand-built questionnaires for the edge cases.
"""

import logging

import pytest
from qreval.examples import build_example_questionnaire
from qreval.model import (
    END_SECTION,
    Question,
    Response,
    SingleCondition,
    SkipLogicRule,
    SkipLogicType,
)
from qreval.navigation import (
    calculate_progress,
    is_answered,
    navigable_questions,
    next_question,
)


@pytest.fixture
def questions():
    return build_example_questionnaire().questions


def qids(path):
    return [q.qid for q in path]


def skip_to(qid, trigger_qid, value, target_qid):
    return Question(
        qid=qid,
        skip_logic=SkipLogicRule(
            type=SkipLogicType.SKIP_TO_QUESTION,
            condition=SingleCondition(trigger_qid, "=", value),
            target_qid=target_qid,
        ),
    )


class TestIsAnswered:

    def test_missing(self):
        assert is_answered(None) is False

    def test_empty_string(self):
        assert is_answered(Response("")) is False

    def test_zero(self):
        assert is_answered(Response(0)) is True

    def test_text(self):
        assert is_answered(Response("AA,BB")) is True


class TestNavigableQuestions:

    def test_no_responses(self, questions):
        assert qids(navigable_questions(questions, {})) == [1, 3, 4, 7, 8]

    def test_everything_applies(self, questions):
        responses = {
            1: Response("1"),
            3: Response("1"),
            5: Response("EXPT,PRVCY"),
            8: Response("1"),
        }
        assert qids(navigable_questions(questions, responses)) == [1, 2, 3, 4, 5, 6, 7, 8, 9]

    def test_skip_to_question_jumps_forward(self, questions):
        responses = {1: Response("0"), 3: Response("0")}
        assert qids(navigable_questions(questions, responses)) == [1, 3, 4, 9]

    def test_skip_to_end_stops_section(self, questions):
        responses = {1: Response("1"), 3: Response(2), 8: Response("0")}
        assert qids(navigable_questions(questions, responses)) == [1, 2, 3, 4, 8]

    def test_unknown_target_continues_in_order(self, caplog):
        questions = [skip_to(1, 1, "1", 42), Question(qid=2)]
        with caplog.at_level(logging.WARNING, logger="qreval.navigation"):
            path = navigable_questions(questions, {1: Response("1")})
        assert qids(path) == [1, 2]
        assert "unknown question 42" in caplog.text

    def test_backward_target_ignored(self):
        questions = [Question(qid=1), skip_to(2, 2, "1", 1), Question(qid=3)]
        assert qids(navigable_questions(questions, {2: Response("1")})) == [1, 2, 3]

    def test_empty_questionnaire(self):
        assert navigable_questions([], {}) == []


class TestNextQuestion:

    def test_sequential(self, questions):
        assert next_question(questions, {}, 1) == 3

    def test_after_skip(self, questions):
        responses = {1: Response("0"), 3: Response("0")}
        assert next_question(questions, responses, 4) == 9

    def test_end_section(self, questions):
        responses = {8: Response("0")}
        assert next_question(questions, responses, 8) == END_SECTION

    def test_last_question(self, questions):
        responses = {8: Response("1")}
        assert next_question(questions, responses, 9) is None

    def test_hidden_current_question(self, questions):
        assert next_question(questions, {}, 2) is None


class TestProgress:

    def test_no_answers(self, questions):
        assert calculate_progress(questions, {}) == 0

    def test_partial(self, questions):
        responses = {1: Response("0"), 3: Response("0")}
        # Path is [1, 3, 4, 9], two answered
        assert calculate_progress(questions, responses) == 50

    def test_hidden_questions_not_counted(self, questions):
        responses = {1: Response("1"), 3: Response(2), 8: Response("0")}
        # Path is [1, 2, 3, 4, 8], three answered
        assert calculate_progress(questions, responses) == 60

    def test_rounds_half_up(self):
        questions = [Question(qid=i) for i in range(1, 9)]
        responses = {1: Response("x")}
        # 1/8 = 12.5%
        assert calculate_progress(questions, responses) == 13

    def test_complete(self):
        questions = [Question(qid=1), Question(qid=2)]
        assert calculate_progress(questions, {1: Response("a"), 2: Response(0)}) == 100

    def test_empty_questionnaire(self):
        assert calculate_progress([], {}) == 0
