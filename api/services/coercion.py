"""Lenient-but-strict coercion of loosely typed request values.

Clients send numbers both as JSON numbers and as strings. These helpers
accept either, but reject partial parses ("12abc"), booleans and
non-finite values by raising ValueError.
"""

import math
from typing import Any


def is_blank(value: Any) -> bool:
    """None, empty string, or whitespace-only string."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def parse_float(value: Any) -> float:
    if isinstance(value, bool) or value is None:
        raise ValueError(f"not a number: {value!r}")
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        number = float(value.strip())
    else:
        raise ValueError(f"not a number: {value!r}")
    if not math.isfinite(number):
        raise ValueError(f"not a finite number: {value!r}")
    return number


def parse_int_truncating(value: Any) -> int:
    """Parse an integer, truncating fractional input toward zero (7.9 -> 7)."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return math.trunc(parse_float(value))


def parse_positive_int(value: Any) -> int:
    """Parse a whole number > 0. Fractional input is rejected."""
    number = parse_float(value)
    if not number.is_integer() or number <= 0:
        raise ValueError(f"not a positive integer: {value!r}")
    return int(number)
