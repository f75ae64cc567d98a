"""Numeric coercion shared by search ranking and negotiation.

Load rates and carrier offers arrive as loosely-typed JSON (numbers,
numeric strings, blanks, garbage). Both helpers follow the rules the
pricing logic was tuned against: anything non-numeric reads as the
fallback, and rounding is half-up rather than Python's banker's rounding.
"""

import math
from typing import Any


def to_number(value: Any, fallback: float = 0.0) -> float:
    """Coerce ``value`` to a finite float, or return ``fallback``.

    >>> to_number("2200")
    2200.0
    >>> to_number("n/a")
    0.0
    """
    if value is None or isinstance(value, bool):
        return fallback
    if isinstance(value, str):
        value = value.strip()
        if value == "":
            return fallback
    try:
        number = float(value)
    except (TypeError, ValueError):
        return fallback
    if not math.isfinite(number):
        return fallback
    return number


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 going up (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)
