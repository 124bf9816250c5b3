"""Message Validators — content, status and who-may-message-whom checks.

Invariants:
    - Content is 1-1000 chars after trimming
    - can_send_message does NOT trim ids: whitespace-only ids pass
    - Self-messaging is always rejected
"""

from campuspool.core.coerce import is_filled_string, trimmed_length_between
from campuspool.core.domain_types import MessageStatus

MAX_MESSAGE_LENGTH = 1000
VALID_MESSAGE_STATUSES = frozenset(s.value for s in MessageStatus)


def is_valid_message_content(value: object) -> bool:
    return trimmed_length_between(value, 1, MAX_MESSAGE_LENGTH)


def is_valid_message_status(value: object) -> bool:
    return isinstance(value, str) and value in VALID_MESSAGE_STATUSES


def sanitize_message_content(value: object) -> str:
    if not is_filled_string(value):
        return ""
    return value.strip()[:MAX_MESSAGE_LENGTH]


def can_send_message(sender_id: object, receiver_id: object) -> bool:
    if not is_filled_string(sender_id) or not is_filled_string(receiver_id):
        return False
    return sender_id != receiver_id
