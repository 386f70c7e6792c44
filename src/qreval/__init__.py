"""
Questionnaire Response Evaluation (qreval) Package

The pure evaluation core of the compliance-questionnaire platform.

ARCHITECTURAL GUARANTEE:
------------------------
This package contains ZERO knowledge of:
    - Databases and persistence
    - Spreadsheet import
    - Authentication or sessions
    - UI rendering

It defines two independent, side-effect-free components:
    - Skip-logic evaluation (question visibility and navigation jumps)
    - Z-Code encoding of socioeconomic business classifications

Responses are always passed in explicitly. Nothing here holds state.
"""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
