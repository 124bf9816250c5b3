"""Conversation Schemas — sending messages, accept/deny, and thread listings.

Invariants:
    - Message content must be 1-1000 chars after trimming; stored sanitized
    - Status updates accept only "accepted" or "denied"
"""

from typing import Literal

from pydantic import field_validator

from campuspool.core.validate_message import is_valid_message_content, sanitize_message_content
from campuspool.schemas.common import CamelModel, UtcDatetime


class SendMessageRequest(CamelModel):
    content: str
    other_user_id: str | None = None

    @field_validator("content")
    @classmethod
    def check_content(cls, v: str) -> str:
        if not is_valid_message_content(v):
            raise ValueError("message must be 1-1000 characters")
        return sanitize_message_content(v)


class ConversationStatusUpdate(CamelModel):
    status: Literal["accepted", "denied"]


class MessageOut(CamelModel):
    id: str
    conversation_id: str
    sender_id: str
    content: str
    created_at: UtcDatetime


class SendMessageResponse(CamelModel):
    message: str = "Message sent successfully"
    data: MessageOut


class OtherUser(CamelModel):
    id: str | None
    name: str
    profile_picture: str | None = None


class ConversationOut(CamelModel):
    id: str
    participants: list[str]
    status: str
    created_at: UtcDatetime
    updated_at: UtcDatetime | None = None
    last_message: MessageOut | None = None
    other_user: OtherUser
    last_activity: str
