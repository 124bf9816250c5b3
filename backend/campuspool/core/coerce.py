"""Boundary Coercion — type guards shared by validators and datetime ops.

Invariants:
    - bool is never a number (True would otherwise pass as 1)
    - NaN and infinities are never valid numbers
"""

import math


def is_number(value: object) -> bool:
    """True for finite int/float values, excluding bool."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def is_integral(value: object) -> bool:
    """True for ints and integer-valued floats (2027.0 from JSON)."""
    if not is_number(value):
        return False
    return isinstance(value, int) or float(value).is_integer()


def is_filled_string(value: object) -> bool:
    """True for a non-empty str (whitespace counts as filled)."""
    return isinstance(value, str) and value != ""


def trimmed_length_between(value: object, low: int, high: int) -> bool:
    """Trimmed length of a filled string within [low, high]."""
    if not is_filled_string(value):
        return False
    return low <= len(value.strip()) <= high
