"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, ConversationId, MessageId, RequestId are opaque strings
    - All valid states encoded as Enums — no raw string matching outside validators
    - ConversationStatus has exactly three states; MessageStatus adds "read"

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)
ConversationId = NewType("ConversationId", str)      # "<a>__<b>", see conversation_keys
MessageId = NewType("MessageId", str)
RequestId = NewType("RequestId", str)


# ─── Enums ───────────────────────────────────────────────────────

class RequestType(str, Enum):
    """Carpool post kind — seeking a ride or offering one."""
    REQUEST = "request"
    OFFER = "offer"


class ConversationStatus(str, Enum):
    """Accept/deny gate on a direct-message conversation."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    DENIED = "denied"


class MessageStatus(str, Enum):
    """Per-message delivery/gate status for inbox views."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    DENIED = "denied"
    READ = "read"


class SendPhase(str, Enum):
    """Lifecycle of one optimistic send."""
    COMPOSING = "composing"
    OPTIMISTIC = "optimistic"
    CONFIRMED = "confirmed"
    FAILED = "failed"
