"""Boundary coercion for loosely typed store values.

Stored records come back as JSON-ish data: ratings may be strings,
days may be strings or missing. Every helper here returns ``None``
for a value it cannot use instead of raising.
"""

from __future__ import annotations

import math
from typing import Any

from qame.models.domain import DAYS

UNSPECIFIED = "Unspecified"


def coerce_rating(value: Any) -> float | None:
    """Convert a stored rating to a finite float.

    Args:
        value: Raw rating (int, float or numeric string).

    Returns:
        The rating as float, or None if it is not a finite number.
    """
    # bool is an int subclass but never a rating
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def normalize_day(value: Any) -> int | None:
    """Normalize a stored day selection.

    Accepts ints, integral floats and numeric strings ("2", "2.0").

    Returns:
        1, 2 or 3, or None for anything else.
    """
    number = coerce_rating(value)
    if number is None or not number.is_integer():
        return None
    day = int(number)
    return day if day in DAYS else None


def distribution_key(value: Any) -> str:
    """Key used for a categorical distribution bucket: the value as stored."""
    if isinstance(value, str) and value.strip():
        return value
    return UNSPECIFIED


def comment_text(value: Any) -> str | None:
    """Return comment text as submitted, or None if it is blank."""
    if isinstance(value, str) and value.strip():
        return value
    return None
