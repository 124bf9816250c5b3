"""Conversation Keying — one canonical id per unordered pair of users.

Invariants:
    - conversation_key(a, b) == conversation_key(b, a)
    - Key is a pure function of the participant set: no storage lookup needed
    - KEY_SEPARATOR ("__") never appears inside a user id (ids are UUID strings)
    - Status moves only pending -> accepted | denied; re-applying the same status is a no-op

Design Decisions:
    - Sorted join over hashing: keys stay human-readable and reversible
      (participants_of) for the create-on-first-message path
    - Equal ids still produce a key; self-conversations are rejected upstream by
      can_send_message
"""

from collections.abc import Sequence
from datetime import datetime

from campuspool.core.datetime_ops import parse_datetime
from campuspool.core.domain_types import ConversationId, ConversationStatus

KEY_SEPARATOR = "__"


def conversation_key(user_a: object, user_b: object) -> ConversationId:
    first, second = sorted([str(user_a), str(user_b)])
    return ConversationId(f"{first}{KEY_SEPARATOR}{second}")


def participants_of(key: object) -> tuple[str, str] | None:
    """Split a canonical key back into its (sorted) pair."""
    if not isinstance(key, str):
        return None
    parts = key.split(KEY_SEPARATOR)
    if len(parts) != 2 or not all(parts):
        return None
    return parts[0], parts[1]


def other_participant(participants: Sequence[str], viewer_id: str) -> str | None:
    for participant in participants:
        if participant != viewer_id:
            return participant
    return None


def can_transition_status(current: str, target: str) -> bool:
    """pending -> accepted|denied, or a repeat of the current status."""
    if target == current:
        return target in {s.value for s in ConversationStatus}
    return (
        current == ConversationStatus.PENDING.value
        and target in (ConversationStatus.ACCEPTED.value, ConversationStatus.DENIED.value)
    )


def last_activity(created_at: object, last_message_at: object = None) -> datetime | None:
    """Most recent of the last message time, falling back to creation time."""
    return parse_datetime(last_message_at) or parse_datetime(created_at)


def sort_by_last_activity(conversations: list[dict]) -> list[dict]:
    """Newest activity first. Expects "created_at" and optional "last_message_at" keys."""
    def _key(conversation: dict) -> float:
        moment = last_activity(
            conversation.get("created_at"), conversation.get("last_message_at"),
        )
        return moment.timestamp() if moment else float("-inf")

    return sorted(conversations, key=_key, reverse=True)
