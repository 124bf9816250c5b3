"""Inbox Helpers — status filters, unread counts and per-peer grouping for DM lists.

Invariants:
    - Messages are mappings with sender_id, receiver_id, timestamp, status keys
    - Non-list input (or a missing user id) yields an empty result, never raises
    - Elements that are not mappings are skipped
    - Sorting is non-mutating; grouping preserves first-seen peer order
"""

from collections.abc import Mapping

from campuspool.core.datetime_ops import parse_datetime
from campuspool.core.domain_types import MessageStatus


def _records(messages: object) -> list[Mapping]:
    if not isinstance(messages, list):
        return []
    return [m for m in messages if isinstance(m, Mapping)]


def filter_messages_by_status(messages: object, status: str) -> list[dict]:
    return [m for m in _records(messages) if m.get("status") == status]


def get_pending_requests(messages: object, user_id: str) -> list[dict]:
    """Pending messages addressed to user_id."""
    if not user_id:
        return []
    return [
        m for m in _records(messages)
        if m.get("receiver_id") == user_id
        and m.get("status") == MessageStatus.PENDING.value
    ]


def sort_messages_by_timestamp(messages: object) -> list[dict]:
    """Newest first; unparseable timestamps sink to the end."""

    def _key(message: Mapping) -> float:
        moment = parse_datetime(message.get("timestamp"))
        return moment.timestamp() if moment else float("-inf")

    return sorted(_records(messages), key=_key, reverse=True)


def group_messages_by_conversation(messages: object, current_user_id: str) -> dict[str, list[dict]]:
    """Group by the other party of each message."""
    conversations: dict[str, list[dict]] = {}
    if not current_user_id:
        return conversations
    for message in _records(messages):
        if message.get("sender_id") == current_user_id:
            other = message.get("receiver_id")
        else:
            other = message.get("sender_id")
        conversations.setdefault(other, []).append(message)
    return conversations


def count_unread_messages(messages: object, user_id: str) -> int:
    return len(get_pending_requests(messages, user_id))
