"""Message Stream Merge — pure list operations behind optimistic sending.

Invariants:
    - Every function returns a new list; inputs are never mutated
    - Optimistic records carry a "temp-" id and the local send time
    - confirm_message replaces the optimistic record in the same position, or just
      drops it when the confirmed id is already listed; no id appears twice
    - merge_server_messages treats the server list as authoritative, keeps only
      optimistic records still in flight whose stored copy has not arrived yet, and
      orders by effective timestamp (stable, so equal timestamps keep arrival order)

Design Decisions:
    - Frozen dataclass over dict: temp/confirmed distinction is a property, not a
      string check scattered through the shell
"""

import uuid
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime

from campuspool.core.datetime_ops import parse_datetime, resolve_now

TEMP_ID_PREFIX = "temp-"


@dataclass(frozen=True)
class ThreadMessage:
    """One message as displayed in a conversation thread."""
    id: str
    conversation_id: str
    sender_id: str
    content: str
    created_at: datetime

    @property
    def is_optimistic(self) -> bool:
        return self.id.startswith(TEMP_ID_PREFIX)

    @classmethod
    def from_wire(cls, data: Mapping) -> "ThreadMessage":
        """Build from API JSON (camelCase keys). Raises ValueError on a bad timestamp."""
        created_at = parse_datetime(data.get("createdAt"))
        if created_at is None:
            raise ValueError(f"message {data.get('id')!r} has no valid createdAt")
        return cls(
            id=str(data["id"]),
            conversation_id=str(data["conversationId"]),
            sender_id=str(data["senderId"]),
            content=data.get("content") or "",
            created_at=created_at,
        )


def make_optimistic_message(
    conversation_id: str,
    sender_id: str,
    content: str,
    *,
    now: datetime | None = None,
) -> ThreadMessage:
    return ThreadMessage(
        id=f"{TEMP_ID_PREFIX}{uuid.uuid4().hex}",
        conversation_id=conversation_id,
        sender_id=sender_id,
        content=content,
        created_at=resolve_now(now),
    )


def append_optimistic(
    messages: list[ThreadMessage], optimistic: ThreadMessage,
) -> list[ThreadMessage]:
    return [*messages, optimistic]


def confirm_message(
    messages: list[ThreadMessage], temp_id: str, confirmed: ThreadMessage,
) -> list[ThreadMessage]:
    """Swap the optimistic record for the server's; unknown temp_id leaves the list as is.

    If a poll already delivered the confirmed record, the optimistic one is
    only dropped so the message never shows twice.
    """
    if any(m.id == confirmed.id for m in messages):
        return discard_message(messages, temp_id)
    return [confirmed if m.id == temp_id else m for m in messages]


def discard_message(messages: list[ThreadMessage], temp_id: str) -> list[ThreadMessage]:
    return [m for m in messages if m.id != temp_id]


def merge_server_messages(
    local: list[ThreadMessage],
    server: list[ThreadMessage],
    in_flight: frozenset[str] = frozenset(),
) -> list[ThreadMessage]:
    """Authoritative server list plus optimistic records listed in in_flight.

    An in-flight record is dropped once the server list holds its stored copy:
    same sender and content, created no earlier than the optimistic send. Each
    server message accounts for at most one optimistic record.
    """
    server_ids = {m.id for m in server}
    claimed: set[str] = set()
    pending = []
    for m in local:
        if not m.is_optimistic or m.id not in in_flight or m.id in server_ids:
            continue
        stored = next(
            (s for s in server if s.id not in claimed and _is_stored_copy(s, m)),
            None,
        )
        if stored is None:
            pending.append(m)
        else:
            claimed.add(stored.id)
    return sorted([*server, *pending], key=lambda m: m.created_at)


def _is_stored_copy(server_message: ThreadMessage, optimistic: ThreadMessage) -> bool:
    return (
        server_message.sender_id == optimistic.sender_id
        and server_message.content == optimistic.content
        and server_message.created_at >= optimistic.created_at
    )
