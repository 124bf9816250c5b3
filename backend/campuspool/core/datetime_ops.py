"""Date & Time Operations — parsing, display formatting and comparisons against "now".

Invariants:
    - Every function is total: bad input yields "Invalid Date" / "Invalid Time" / False / None
    - "Now" is read per call; every comparison accepts an optional `now` override
    - Inputs are never mutated (datetime is immutable; combine returns a new value)
    - Naive datetimes and date-only strings are read in the host's local time zone
    - A value that cannot be shifted into UTC and local time (year-range edges)
      parses to None, so it is reported like any other bad input

Design Decisions:
    - Month/weekday names are fixed English tuples, not strftime: output must not
      depend on the process locale
    - parse_datetime returns aware datetimes so comparisons with utc "now" never
      mix naive and aware values
"""

import math
import re
from datetime import date, datetime, timedelta, timezone

from campuspool.core.coerce import is_number

INVALID_DATE = "Invalid Date"
INVALID_TIME = "Invalid Time"

_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
_WEEKDAYS = (
    "Monday", "Tuesday", "Wednesday", "Thursday",
    "Friday", "Saturday", "Sunday",
)

# H:MM or HH:MM, 0-23 hours, no seconds
_CLOCK_TIME = re.compile(r"([01]?[0-9]|2[0-3]):([0-5][0-9])")

_ONE_DAY = timedelta(days=1)
_ONE_HOUR = timedelta(hours=1)


def resolve_now(now: datetime | None = None) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    return now if now.tzinfo else now.astimezone()


def parse_datetime(value: object) -> datetime | None:
    """Parse datetime/date/ISO-8601 string into an aware datetime, else None."""
    try:
        if isinstance(value, datetime):
            parsed = value
        elif isinstance(value, date):
            parsed = datetime(value.year, value.month, value.day)
        elif isinstance(value, str) and value.strip():
            parsed = datetime.fromisoformat(value.strip())
        else:
            return None
        if parsed.tzinfo is None:
            parsed = parsed.astimezone()
        # Both shifts must stay inside datetime's year range
        parsed.astimezone(timezone.utc)
        parsed.astimezone()
        return parsed
    except (ValueError, OverflowError, OSError):
        return None


def _parse_local(value: object) -> datetime | None:
    """parse_datetime shifted into the host zone."""
    parsed = parse_datetime(value)
    if parsed is None:
        return None
    try:
        return parsed.astimezone()
    except (OverflowError, OSError):
        return None


def parse_clock_time(value: object) -> tuple[int, int] | None:
    """Parse strict 24h "H:MM"/"HH:MM" into (hour, minute)."""
    if not isinstance(value, str):
        return None
    match = _CLOCK_TIME.fullmatch(value)
    if not match:
        return None
    return int(match.group(1)), int(match.group(2))


def format_date(value: object) -> str:
    """Format as "Jan 15, 2025" in local time."""
    local = _parse_local(value)
    if local is None:
        return INVALID_DATE
    return f"{_MONTHS[local.month - 1]} {local.day}, {local.year}"


def format_time(value: object) -> str:
    """Format 24h "14:30" as 12h "2:30 PM"."""
    clock = parse_clock_time(value)
    if clock is None:
        return INVALID_TIME
    hours, minutes = clock
    period = "PM" if hours >= 12 else "AM"
    if hours == 0:
        display_hours = 12
    elif hours > 12:
        display_hours = hours - 12
    else:
        display_hours = hours
    return f"{display_hours}:{minutes:02d} {period}"


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'}"


def get_relative_time(value: object, *, now: datetime | None = None) -> str:
    """Relative wording: "just now", "5 minutes ago", "in 2 days", else format_date."""
    parsed = parse_datetime(value)
    if parsed is None:
        return INVALID_DATE

    diff = (parsed - resolve_now(now)).total_seconds()
    diff_sec = math.floor(abs(diff))
    diff_min = diff_sec // 60
    diff_hour = diff_min // 60
    diff_day = diff_hour // 24

    is_past = diff < 0
    prefix = "" if is_past else "in "
    suffix = " ago" if is_past else ""

    if diff_sec < 60:
        return "just now" if is_past else "in a moment"
    if diff_min < 60:
        return f"{prefix}{_plural(diff_min, 'minute')}{suffix}"
    if diff_hour < 24:
        return f"{prefix}{_plural(diff_hour, 'hour')}{suffix}"
    if diff_day < 7:
        return f"{prefix}{_plural(diff_day, 'day')}{suffix}"
    return format_date(parsed)


def is_today(value: object, *, now: datetime | None = None) -> bool:
    local = _parse_local(value)
    if local is None:
        return False
    return local.date() == resolve_now(now).astimezone().date()


def is_within_days(value: object, days: object, *, now: datetime | None = None) -> bool:
    """True if value lies between now and now + days (both ends inclusive)."""
    parsed = parse_datetime(value)
    if parsed is None or not is_number(days) or days < 0:
        return False
    diff_days = (parsed - resolve_now(now)) / _ONE_DAY
    return 0 <= diff_days <= days


def is_at_least_hours_ahead(
    value: object, hours: object, *, now: datetime | None = None,
) -> bool:
    parsed = parse_datetime(value)
    if parsed is None or not is_number(hours) or hours < 0:
        return False
    return (parsed - resolve_now(now)) / _ONE_HOUR >= hours


def days_until(value: object, *, now: datetime | None = None) -> int | None:
    """Whole days until value, rounded up; negative for the past, None if unparseable."""
    parsed = parse_datetime(value)
    if parsed is None:
        return None
    return math.ceil((parsed - resolve_now(now)) / _ONE_DAY)


def combine_date_and_time(date_value: object, time_value: object) -> datetime | None:
    """New local datetime on date_value's day at time_value; None if either is invalid."""
    local = _parse_local(date_value)
    clock = parse_clock_time(time_value)
    if local is None or clock is None:
        return None
    hours, minutes = clock
    return local.replace(
        hour=hours, minute=minutes, second=0, microsecond=0,
    )


def get_day_of_week(value: object) -> str:
    local = _parse_local(value)
    if local is None:
        return INVALID_DATE
    return _WEEKDAYS[local.weekday()]
