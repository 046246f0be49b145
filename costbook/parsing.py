"""
Coercion of raw form values into numbers.

Form fields deliver floats, ints or strings (possibly blank). Anything that
does not read as a finite number is reported as missing.
"""

import math
from typing import Optional


def to_number(value) -> Optional[float]:
    """Return value as a finite float, or None if it isn't one."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def to_positive(value) -> Optional[float]:
    number = to_number(value)
    if number is None or number <= 0:
        return None
    return number


def number_or_zero(value) -> float:
    number = to_number(value)
    return 0.0 if number is None else number


def is_blank(text) -> bool:
    return text is None or not str(text).strip()


def next_id(existing_ids, now_ms: int) -> int:
    """Creation-timestamp id, bumped past any id already taken."""
    highest = max(existing_ids, default=None)
    if highest is not None and now_ms <= highest:
        return highest + 1
    return now_ms


def format_number(value: float) -> str:
    """Lossless numeric text: whole values without a trailing .0."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)
