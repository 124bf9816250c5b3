"""Response Reconciliation — normalize stored carpool responses into one display shape.

Invariants:
    - Stored entries are a tagged union: LegacyResponse (bare user-id string) or
      StructuredResponse ({userId, message, timestamp}); the variant is resolved here
      and nowhere else
    - Order is preserved exactly as stored; the same user may appear many times
    - Read-side projection only: nothing here writes, and new entries are always
      built canonical via build_response_entry
    - Profile name wins over account name; fallback "User" ("Unknown User" for owners)

Design Decisions:
    - Lookups are injected callables (user_id -> mapping | None): the shell prefetches
      rows and passes dict.get, keeping this module free of IO
    - Unrecognized entries are dropped rather than raising: one corrupt row must not
      blank the whole feed
"""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime

from campuspool.core.datetime_ops import resolve_now

DEFAULT_RESPONSE_MESSAGE = "I'm available for this carpool!"
FALLBACK_RESPONDER_NAME = "User"
FALLBACK_OWNER_NAME = "Unknown User"

Lookup = Callable[[str], Mapping | None]


@dataclass(frozen=True)
class LegacyResponse:
    """Old storage format: only the responder's id was kept."""
    user_id: str


@dataclass(frozen=True)
class StructuredResponse:
    """Canonical response record."""
    user_id: str
    message: str | None
    timestamp: str | None

    def to_entry(self) -> dict:
        """Stored/wire form (camelCase keys)."""
        return {
            "userId": self.user_id,
            "message": self.message,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class ResponseView:
    """Canonical response enriched with responder display data."""
    user_id: str
    user_name: str
    user_college: str
    message: str | None
    timestamp: str | None
    has_car: bool


ResponseEntry = LegacyResponse | StructuredResponse


def _iso_now(now: datetime | None) -> str:
    return resolve_now(now).isoformat()


def parse_response_entry(raw: object) -> ResponseEntry | None:
    """Resolve a stored entry to its variant; None for anything unrecognized."""
    if isinstance(raw, str):
        return LegacyResponse(user_id=raw) if raw else None
    if isinstance(raw, Mapping):
        user_id = raw.get("userId")
        if not isinstance(user_id, str) or not user_id:
            return None
        return StructuredResponse(
            user_id=user_id,
            message=raw.get("message"),
            timestamp=raw.get("timestamp"),
        )
    return None


def normalize_response(entry: ResponseEntry, *, now: datetime | None = None) -> StructuredResponse:
    if isinstance(entry, LegacyResponse):
        return StructuredResponse(
            user_id=entry.user_id,
            message=DEFAULT_RESPONSE_MESSAGE,
            timestamp=_iso_now(now),
        )
    return entry


def normalize_responses(
    raw_responses: object, *, now: datetime | None = None,
) -> list[StructuredResponse]:
    """Canonical list in stored order; non-list input yields []."""
    if not isinstance(raw_responses, Iterable) or isinstance(raw_responses, (str, bytes, Mapping)):
        return []
    normalized = []
    for raw in raw_responses:
        entry = parse_response_entry(raw)
        if entry is not None:
            normalized.append(normalize_response(entry, now=now))
    return normalized


def _display_name(
    user: Mapping | None, profile: Mapping | None, fallback: str,
) -> str:
    for source in (profile, user):
        if source and source.get("name"):
            return source["name"]
    return fallback


def resolve_owner_name(user_id: str, get_user: Lookup, get_profile: Lookup) -> str:
    return _display_name(get_user(user_id), get_profile(user_id), FALLBACK_OWNER_NAME)


def reconcile_responses(
    raw_responses: object,
    get_user: Lookup,
    get_profile: Lookup,
    *,
    now: datetime | None = None,
) -> list[ResponseView]:
    """Normalize and enrich stored responses for display."""
    views = []
    for response in normalize_responses(raw_responses, now=now):
        user = get_user(response.user_id)
        profile = get_profile(response.user_id)
        views.append(ResponseView(
            user_id=response.user_id,
            user_name=_display_name(user, profile, FALLBACK_RESPONDER_NAME),
            user_college=(profile or {}).get("college") or "",
            message=response.message,
            timestamp=response.timestamp,
            has_car=bool((profile or {}).get("has_car")),
        ))
    return views


def build_response_entry(
    user_id: str, message: str | None = None, *, now: datetime | None = None,
) -> dict:
    """New stored entry — always the canonical object shape."""
    return StructuredResponse(
        user_id=user_id,
        message=message or DEFAULT_RESPONSE_MESSAGE,
        timestamp=_iso_now(now),
    ).to_entry()
