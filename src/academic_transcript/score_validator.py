#!/usr/bin/env python3
"""
Score Validator
Normalizes raw semester score input into the 0-100 range.

Entry tooling favors uninterrupted typing over strict errors, so malformed
input becomes 0 and out-of-range input is clamped instead of rejected.
"""

import math
import numbers
import re
from typing import Any

from .data_models import MAX_SCORE, MIN_SCORE

# Leading number in text input ("85", " 92.5 ", "7e1", "88abc")
NUMERIC_PREFIX = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")


def clamp_score(value: float) -> float:
    return max(MIN_SCORE, min(MAX_SCORE, value))


def parse_score(raw: Any) -> float:
    """
    Parse raw input into a number

    Returns 0.0 for anything that is not a number. Values beyond the float
    range come back as +/-inf so clamping pins them to a bound.
    """
    if raw is None or isinstance(raw, bool):
        return 0.0

    if isinstance(raw, numbers.Real):
        text = None
    else:
        match = NUMERIC_PREFIX.match(str(raw))
        if not match:
            return 0.0
        text = match.group(1)

    try:
        numeric = float(raw if text is None else text)
    except OverflowError:
        # Only integers too large for a float get here
        numeric = math.inf if raw > 0 else -math.inf
    except ValueError:
        return 0.0

    if math.isnan(numeric):
        return 0.0
    return numeric


def validate_score(raw: Any) -> float:
    """Parse and clamp a raw semester score to [0, 100]"""
    return clamp_score(parse_score(raw))
