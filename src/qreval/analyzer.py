"""
Questionnaire Analyzer: configuration diagnostics for skip logic.

This module provides lightweight analysis of Questionnaire objects:
    - Rule inventory (types, condition counts)
    - Trigger and skip-target reference checks
    - Ordering problems (forward triggers, backward skips)
    - Unknown operators and incomplete rules
    - Coverage metrics and warning flags

IMPORTANT: This is read-only. It does NOT modify the questionnaire.
Malformed rules still evaluate safely; this report is how they get found.
"""

from __future__ import annotations

import argparse
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Set

from qreval.model import (
    CompoundCondition,
    ConditionOperator,
    Questionnaire,
    SingleCondition,
    SkipLogicType,
)


def _conditions_of(rule) -> List[SingleCondition]:
    if isinstance(rule.condition, SingleCondition):
        return [rule.condition]
    if isinstance(rule.condition, CompoundCondition):
        return list(rule.condition.conditions)
    return []


@dataclass
class QuestionnaireReport:
    """Analysis report for a questionnaire."""

    questionnaire_name: str
    total_questions: int = 0
    questions_with_skip_logic: int = 0
    skip_logic_coverage_percent: float = 0.0

    # Rule inventory
    rule_type_counts: Dict[str, int] = field(default_factory=dict)
    trigger_usage: Dict[int, int] = field(default_factory=dict)
    max_conditions_per_rule: int = 0

    # Reference problems
    duplicate_qids: Set[int] = field(default_factory=set)
    undefined_triggers: Set[int] = field(default_factory=set)
    undefined_targets: Set[int] = field(default_factory=set)
    self_triggered: Set[int] = field(default_factory=set)
    forward_triggers: Set[int] = field(default_factory=set)   # Trigger placed after the question
    backward_skips: Set[int] = field(default_factory=set)     # Target at or before the question

    # Rule problems
    missing_targets: Set[int] = field(default_factory=set)
    unknown_operators: Dict[int, List[str]] = field(default_factory=dict)
    incomplete_rules: Set[int] = field(default_factory=set)

    warnings: List[str] = field(default_factory=list)

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)


def _fmt(qids) -> str:
    return ", ".join(str(q) for q in sorted(qids))


def analyze_questionnaire(questionnaire: Questionnaire) -> QuestionnaireReport:
    """
    Analyze the skip-logic configuration of a questionnaire.

    Returns a QuestionnaireReport with metrics and warnings.
    """
    report = QuestionnaireReport(questionnaire_name=questionnaire.name)
    report.total_questions = len(questionnaire.questions)

    positions: Dict[int, int] = {}
    for index, question in enumerate(questionnaire.questions):
        if question.qid in positions:
            report.duplicate_qids.add(question.qid)
        else:
            positions[question.qid] = index

    rule_types: Dict[str, int] = defaultdict(int)
    trigger_usage: Dict[int, int] = defaultdict(int)

    for index, question in enumerate(questionnaire.questions):
        rule = question.skip_logic
        if rule is None:
            continue
        report.questions_with_skip_logic += 1
        rule_types[rule.type.value] += 1

        # =====================================================================
        # CONDITIONS
        # =====================================================================

        conditions = _conditions_of(rule)
        if not conditions:
            report.incomplete_rules.add(question.qid)
        report.max_conditions_per_rule = max(report.max_conditions_per_rule, len(conditions))

        for condition in conditions:
            trigger = condition.trigger_qid
            trigger_usage[trigger] += 1
            if trigger == question.qid:
                # Skip rules may trigger on their own question's answer.
                if rule.type in (SkipLogicType.SHOW_IF, SkipLogicType.HIDE_IF):
                    report.self_triggered.add(question.qid)
            elif trigger not in positions:
                report.undefined_triggers.add(trigger)
            elif positions[trigger] > index:
                report.forward_triggers.add(question.qid)
            if not isinstance(condition.operator, ConditionOperator):
                report.unknown_operators.setdefault(question.qid, []).append(str(condition.operator))

        # =====================================================================
        # SKIP TARGETS
        # =====================================================================

        if rule.type is SkipLogicType.SKIP_TO_QUESTION:
            target = rule.target_qid
            if not target:
                report.missing_targets.add(question.qid)
            elif target not in positions:
                report.undefined_targets.add(target)
            elif positions[target] <= index:
                report.backward_skips.add(question.qid)

    report.rule_type_counts = dict(rule_types)
    report.trigger_usage = dict(trigger_usage)

    if report.total_questions > 0:
        report.skip_logic_coverage_percent = (
            report.questions_with_skip_logic / report.total_questions
        ) * 100

    # =========================================================================
    # WARNING FLAGS
    # =========================================================================

    if report.duplicate_qids:
        report.add_warning(f"Duplicate question ids: {_fmt(report.duplicate_qids)}")
    if report.undefined_triggers:
        report.add_warning(f"Undefined trigger questions: {_fmt(report.undefined_triggers)}")
    if report.undefined_targets:
        report.add_warning(f"Undefined skip targets: {_fmt(report.undefined_targets)}")
    if report.self_triggered:
        report.add_warning(f"Visibility depends on the question's own answer: {_fmt(report.self_triggered)}")
    if report.forward_triggers:
        report.add_warning(
            f"Questions depending on later questions: {_fmt(report.forward_triggers)}"
        )
    if report.backward_skips:
        report.add_warning(f"Backward skips (ignored during navigation): {_fmt(report.backward_skips)}")
    if report.missing_targets:
        report.add_warning(f"SkipToQuestion without target: {_fmt(report.missing_targets)}")
    if report.unknown_operators:
        report.add_warning(
            f"Unknown operators (conditions evaluate false): {_fmt(report.unknown_operators)}"
        )
    if report.incomplete_rules:
        report.add_warning(f"Rules without conditions (no effect): {_fmt(report.incomplete_rules)}")

    return report


def format_report(report: QuestionnaireReport) -> str:
    lines = [
        f"Questionnaire: {report.questionnaire_name}",
        f"  Questions:            {report.total_questions}",
        f"  With skip logic:      {report.questions_with_skip_logic} "
        f"({report.skip_logic_coverage_percent:.1f}%)",
        f"  Max conditions/rule:  {report.max_conditions_per_rule}",
    ]
    for rule_type, count in sorted(report.rule_type_counts.items()):
        lines.append(f"    {rule_type}: {count}")
    if report.warnings:
        lines.append("  Warnings:")
        lines.extend(f"    - {w}" for w in report.warnings)
    else:
        lines.append("  No warnings")
    return "\n".join(lines)


if __name__ == '__main__':
    from qreval.serialization import questionnaire_from_json, questionnaire_from_yaml

    parser = argparse.ArgumentParser(description='Check skip-logic configuration of a questionnaire')
    parser.add_argument('questionnaire', help='Path to questionnaire definition (.yaml, .yml or .json)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    with open(args.questionnaire, encoding='utf-8') as fh:
        content = fh.read()
    if args.questionnaire.endswith('.json'):
        questionnaire = questionnaire_from_json(content)
    else:
        questionnaire = questionnaire_from_yaml(content)

    print(format_report(analyze_questionnaire(questionnaire)))
