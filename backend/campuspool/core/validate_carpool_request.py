"""Carpool Request Validators — field checks and the composite gate for new posts.

Invariants:
    - is_valid_carpool_request is the single gate a post must pass before storage
    - Request type is matched exactly (case-sensitive, untrimmed)
    - Passenger counts share the seat-count flag with car capacity
    - Dates must be strictly in the future at evaluation time
"""

from collections.abc import Mapping
from datetime import datetime

from campuspool.core.coerce import trimmed_length_between
from campuspool.core.datetime_ops import (
    days_until, parse_clock_time, parse_datetime, resolve_now,
)
from campuspool.core.domain_types import RequestType
from campuspool.core.validate_profile import is_valid_seat_count

VALID_REQUEST_TYPES = frozenset(t.value for t in RequestType)
DEFAULT_MAX_NOTES_LENGTH = 500


def is_valid_destination(value: object) -> bool:
    return trimmed_length_between(value, 3, 200)


def is_valid_future_date(value: object, *, now: datetime | None = None) -> bool:
    parsed = parse_datetime(value)
    if parsed is None:
        return False
    return parsed > resolve_now(now)


def is_valid_time_format(value: object) -> bool:
    return parse_clock_time(value) is not None


def is_valid_passenger_count(value: object) -> bool:
    return is_valid_seat_count(value, 1, 7)


def is_valid_request_type(value: object) -> bool:
    return isinstance(value, str) and value in VALID_REQUEST_TYPES


def is_valid_notes(value: object, max_length: int = DEFAULT_MAX_NOTES_LENGTH) -> bool:
    if not isinstance(value, str):
        return False
    return len(value) <= max_length


def is_valid_carpool_request(request: object, *, now: datetime | None = None) -> bool:
    """Destination, future date, time, seats and type must all be valid."""
    if not isinstance(request, Mapping):
        return False
    return (
        is_valid_destination(request.get("destination"))
        and is_valid_future_date(request.get("date"), now=now)
        and is_valid_time_format(request.get("time"))
        and is_valid_passenger_count(request.get("seats"))
        and is_valid_request_type(request.get("type"))
    )


def get_days_until_carpool(value: object, *, now: datetime | None = None) -> int | None:
    """ceil(days until value); negative for past dates, None when unparseable."""
    return days_until(value, now=now)


def is_urgent_request(value: object, *, now: datetime | None = None) -> bool:
    """Within the next day (0 or 1 days out)."""
    days = get_days_until_carpool(value, now=now)
    return days is not None and 0 <= days <= 1
