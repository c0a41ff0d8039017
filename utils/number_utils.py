"""
Number utilities for user-entered quantities.

Quantities arrive from form inputs as strings, numbers or nothing at all.
They are read the way an integer input field reads them: take the leading
integer, fall back to zero, never go negative, never exceed MAX_QUANTITY.
"""

import math
import re
from typing import Any

# Largest value any quantity may hold
MAX_QUANTITY = 1_000_000_000

_MAX_DIGITS = len(str(MAX_QUANTITY))
_LEADING_INT = re.compile(r"^\s*([+-]?)(\d+)")


def _saturate(value: int) -> int:
    return max(-MAX_QUANTITY, min(MAX_QUANTITY, value))


def parse_int(value: Any) -> int:
    """
    Read an integer the way a form field does.

    - 42 -> 42
    - 12.7 -> 12
    - "12abc" -> 12
    - "abc", "", None, NaN, True -> 0
    - "99999999999999" -> MAX_QUANTITY

    Args:
        value: Raw input value

    Returns:
        Parsed integer (may be negative), saturated at +/- MAX_QUANTITY
    """
    if value is None or isinstance(value, bool):
        return 0

    if isinstance(value, int):
        return _saturate(value)

    if isinstance(value, float):
        if not math.isfinite(value):
            return 0
        return _saturate(int(value))

    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if not match:
            return 0
        sign, digits = match.groups()
        digits = digits.lstrip("0") or "0"
        if len(digits) > _MAX_DIGITS:
            return -MAX_QUANTITY if sign == "-" else MAX_QUANTITY
        return _saturate(int(sign + digits))

    return 0


def clamp_quantity(value: Any) -> int:
    """Parse a quantity and clamp it to 0..MAX_QUANTITY."""
    return max(0, parse_int(value))


def clamp_at_least(value: Any, minimum: int, maximum: int = MAX_QUANTITY) -> int:
    """Parse an integer and keep it within ``minimum``..``maximum``."""
    return min(maximum, max(minimum, parse_int(value)))
