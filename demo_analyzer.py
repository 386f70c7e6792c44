"""
Demo: Walk the example attestation section and print the analysis report.
"""

import logging

from qreval.analyzer import analyze_questionnaire, format_report
from qreval.examples import build_example_questionnaire
from qreval.model import Response
from qreval.navigation import calculate_progress, navigable_questions
from qreval.serialization import questionnaire_to_yaml
from qreval.zcode import InvalidClassification, encode_zcode, zcode_labels


SCENARIOS = {
    "No answers yet": {},
    "No CUI handled": {1: Response("0"), 3: Response("0")},
    "CUI with export control": {
        1: Response("1"),
        3: Response("1"),
        5: Response("EXPT,PRVCY"),
        8: Response("0"),
    },
}


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    questionnaire = build_example_questionnaire()

    print()
    print("=" * 70)
    print(format_report(analyze_questionnaire(questionnaire)))
    print("=" * 70)
    print()

    for title, responses in SCENARIOS.items():
        path = navigable_questions(questionnaire.questions, responses)
        print(f"{title}:")
        print(f"  Path:     {[q.qid for q in path]}")
        print(f"  Progress: {calculate_progress(questionnaire.questions, responses)}%")
    print()

    for selection in (["S", "WOSB", "VOSB"], ["S", "SDVOSB"], ["L", "S"]):
        try:
            zcode = encode_zcode(selection)
        except InvalidClassification as e:
            print(f"Z-Code {selection}: rejected ({e.reason})")
            continue
        print(f"Z-Code {selection}: {zcode} -> {', '.join(zcode_labels(zcode))}")
    print()

    with open("example_questionnaire_output.yaml", "w") as f:
        f.write(questionnaire_to_yaml(questionnaire))
    print("Questionnaire exported to example_questionnaire_output.yaml")
