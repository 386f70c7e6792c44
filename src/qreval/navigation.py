"""
Navigation helpers built on skip-logic evaluation.

These functions show how a navigation controller turns per-question
results into the path a respondent actually walks:

    - invisible questions are left out
    - SkipToQuestion jumps forward, skipping the questions in between
    - SkipToEnd stops the section after the current question

Everything is recomputed from scratch on each call. There is no cursor
state to keep in sync with the responses.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, List, Optional, Sequence, Tuple

from qreval.model import END_SECTION, Question, Response, ResponseMap, SkipTarget
from qreval.skip_logic import evaluate_skip_logic

logger = logging.getLogger(__name__)


def is_answered(response: Optional[Response]) -> bool:
    """An answer counts once it holds something other than None or ""."""
    if response is None:
        return False
    return response.response_value is not None and response.response_value != ""


def _walk(questions: Sequence[Question], responses: ResponseMap) -> List[Tuple[Question, SkipTarget]]:
    """Return (question, skip_to) pairs along the navigable path."""
    positions: Dict[int, int] = {q.qid: i for i, q in enumerate(questions)}
    path = []
    index = 0
    while index < len(questions):
        question = questions[index]
        result = evaluate_skip_logic(question, responses)
        if not result.visible:
            index += 1
            continue

        path.append((question, result.skip_to))

        if result.skip_to == END_SECTION:
            break
        if result.skip_to is not None:
            target = positions.get(result.skip_to)
            if target is None:
                logger.warning(
                    "Question %s skips to unknown question %s, continuing in order",
                    question.qid, result.skip_to,
                )
            elif target <= index:
                logger.warning(
                    "Question %s skips backwards to question %s, continuing in order",
                    question.qid, result.skip_to,
                )
            else:
                index = target
                continue
        index += 1
    return path


def navigable_questions(questions: Sequence[Question], responses: ResponseMap) -> List[Question]:
    """
    Questions the respondent will see, in order, given the current responses.

    Skip targets that are unknown or not strictly ahead of the question
    are ignored, so the walk always terminates.
    """
    return [question for question, _ in _walk(questions, responses)]


def next_question(
    questions: Sequence[Question],
    responses: ResponseMap,
    current_qid: int,
) -> SkipTarget:
    """
    The qid to show after `current_qid`.

    Returns:
        The next qid on the navigable path, END_SECTION if the current
        question ends the section, or None if the current question is the
        last one or is not on the path.
    """
    path = _walk(questions, responses)
    for position, (question, skip_to) in enumerate(path):
        if question.qid != current_qid:
            continue
        if skip_to == END_SECTION:
            return END_SECTION
        if position + 1 < len(path):
            return path[position + 1][0].qid
        return None
    return None


def calculate_progress(questions: Sequence[Question], responses: ResponseMap) -> int:
    """
    Percentage of navigable questions that have an answer, 0-100.

    Hidden and skipped questions do not count toward the total.
    """
    path = navigable_questions(questions, responses)
    if not path:
        return 0
    answered = sum(1 for question in path if is_answered(responses.get(question.qid)))
    return int(math.floor(answered * 100 / len(path) + 0.5))
