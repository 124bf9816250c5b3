"""User Validators — account fields checked at signup, signin and profile edit.

Invariants:
    - Every predicate is total: non-str input returns False, never raises
    - Email checks operate on the trimmed value (external trimming changes nothing)
    - Password length has no upper bound
"""

import re

from campuspool.core.coerce import is_filled_string

_EMAIL = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
_USERNAME = re.compile(r"[A-Za-z0-9_]+")
_NON_DIGIT = re.compile(r"[^0-9]")

MIN_PASSWORD_LENGTH = 8
DEFAULT_MAX_INPUT_LENGTH = 255


def is_valid_email(value: object) -> bool:
    """local@domain.tld shape, no embedded whitespace."""
    if not is_filled_string(value):
        return False
    return _EMAIL.fullmatch(value.strip()) is not None


def is_valid_password(value: object) -> bool:
    """At least 8 chars with one ASCII uppercase, one lowercase and one digit."""
    if not is_filled_string(value) or len(value) < MIN_PASSWORD_LENGTH:
        return False
    has_upper = any("A" <= ch <= "Z" for ch in value)
    has_lower = any("a" <= ch <= "z" for ch in value)
    has_digit = any("0" <= ch <= "9" for ch in value)
    return has_upper and has_lower and has_digit


def is_university_email(value: object) -> bool:
    if not is_valid_email(value):
        return False
    return value.strip().lower().endswith(".edu")


def is_valid_username(value: object) -> bool:
    """3-20 ASCII letters, digits or underscores after trimming."""
    if not is_filled_string(value):
        return False
    trimmed = value.strip()
    if not 3 <= len(trimmed) <= 20:
        return False
    return _USERNAME.fullmatch(trimmed) is not None


def is_valid_phone_number(value: object) -> bool:
    """10 digits, or 11 when written with a leading "+" country code."""
    if not is_filled_string(value):
        return False
    digits = _NON_DIGIT.sub("", value)
    if value.strip().startswith("+"):
        return len(digits) == 11
    return len(digits) == 10


def sanitize_input(value: object, max_length: int = DEFAULT_MAX_INPUT_LENGTH) -> str:
    """Trim and truncate; anything that is not a filled string becomes ""."""
    if not is_filled_string(value):
        return ""
    return value.strip()[:max(max_length, 0)]
