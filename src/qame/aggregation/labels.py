"""Descriptive labels for mean ratings.

Breakpoints are half-open: a mean of exactly 4.50 is Outstanding,
4.49 is Very Satisfactory. A mean of 0 means no ratings were given.
"""

from __future__ import annotations

import math
from typing import Literal

OUTSTANDING_FLOOR = 4.50
VERY_SATISFACTORY_FLOOR = 3.50
SATISFACTORY_FLOOR = 2.50
UNSATISFACTORY_FLOOR = 1.50

RatingLabel = Literal[
    "Outstanding",
    "Very Satisfactory",
    "Satisfactory",
    "Unsatisfactory",
    "Poor",
    "No Data",
]


def rating_label(value: float) -> RatingLabel:
    """Classify a mean rating.

    Args:
        value: Mean rating, 0 when there is no data.

    Returns:
        Descriptive label for the value.
    """
    if not math.isfinite(value) or value <= 0:
        return "No Data"
    if value >= OUTSTANDING_FLOOR:
        return "Outstanding"
    if value >= VERY_SATISFACTORY_FLOOR:
        return "Very Satisfactory"
    if value >= SATISFACTORY_FLOOR:
        return "Satisfactory"
    if value >= UNSATISFACTORY_FLOOR:
        return "Unsatisfactory"
    return "Poor"
