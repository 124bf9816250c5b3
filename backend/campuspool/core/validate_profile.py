"""Profile Validators — per-field checks plus "is this profile complete" gates.

Invariants:
    - Profiles are plain mappings with snake_case keys (college, major,
      graduation_year, car_model, car_capacity, license_plate, ...)
    - Car details are required only when has_car is true (cross-field rule lives
      here, not in storage)
    - ALLOW_FRACTIONAL_SEATS keeps 4.5 seats valid until product decides otherwise

Design Decisions:
    - One seat-count helper shared with carpool requests: flipping the flag
      switches both validators to integer-only without touching call sites
"""

from collections.abc import Mapping
from datetime import datetime

from campuspool.core.coerce import is_filled_string, is_integral, is_number, trimmed_length_between

# Fractional capacities/passenger counts currently pass validation.
ALLOW_FRACTIONAL_SEATS: bool = True

MAX_GRADUATION_YEARS_AHEAD = 10
DEFAULT_MAX_BIO_LENGTH = 500


def is_valid_seat_count(value: object, low: int, high: int) -> bool:
    """Numeric seat count in [low, high]; integers only when the flag is off."""
    if not is_number(value):
        return False
    if not ALLOW_FRACTIONAL_SEATS and not is_integral(value):
        return False
    return low <= value <= high


def is_valid_college_name(value: object) -> bool:
    return trimmed_length_between(value, 2, 100)


def is_valid_major(value: object) -> bool:
    return trimmed_length_between(value, 2, 50)


def is_valid_car_model(value: object) -> bool:
    return trimmed_length_between(value, 2, 50)


def is_valid_car_color(value: object) -> bool:
    return trimmed_length_between(value, 2, 30)


def is_valid_graduation_year(value: object) -> bool:
    """Whole year from this year through ten years out."""
    if not is_integral(value):
        return False
    current_year = datetime.now().year
    return current_year <= value <= current_year + MAX_GRADUATION_YEARS_AHEAD


def is_valid_car_capacity(value: object) -> bool:
    return is_valid_seat_count(value, 1, 8)


def is_valid_license_plate(value: object) -> bool:
    """2-10 alphanumerics once spaces and hyphens are dropped."""
    if not is_filled_string(value):
        return False
    compact = "".join(ch for ch in value.strip() if not ch.isspace() and ch != "-")
    if not 2 <= len(compact) <= 10:
        return False
    return compact.isascii() and compact.isalnum()


def is_valid_bio(value: object, max_length: int = DEFAULT_MAX_BIO_LENGTH) -> bool:
    if not isinstance(value, str):
        return False
    return len(value) <= max_length


def is_complete_profile_without_car(profile: object) -> bool:
    if not isinstance(profile, Mapping):
        return False
    return (
        is_valid_college_name(profile.get("college"))
        and is_valid_major(profile.get("major"))
        and is_valid_graduation_year(profile.get("graduation_year"))
    )


def is_complete_profile_with_car(profile: object) -> bool:
    if not is_complete_profile_without_car(profile):
        return False
    return (
        is_valid_car_model(profile.get("car_model"))
        and is_valid_car_capacity(profile.get("car_capacity"))
        and is_valid_license_plate(profile.get("license_plate"))
    )


def has_required_car_details(profile: object) -> bool:
    """Drivers must give model, color and capacity; non-drivers pass."""
    if not isinstance(profile, Mapping):
        return False
    if not profile.get("has_car"):
        return True
    return (
        is_valid_car_model(profile.get("car_model"))
        and is_valid_car_color(profile.get("car_color"))
        and is_valid_car_capacity(profile.get("car_capacity"))
    )
