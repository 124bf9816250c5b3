"""Conversations — keyed direct-message threads with an accept/deny gate.

Invariants:
    - A conversation id always equals conversation_key(participants); the first
      message to a new peer creates the row under that key
    - Only participants may read, post to or change a conversation
    - Status changes go through can_transition_status; illegal moves -> 409
    - Posting to a denied conversation is rejected
    - Listings are newest activity first; denied threads are hidden unless asked

Design Decisions:
    - Participant filter matches the key prefix/suffix in SQL, then re-checks the
      participants list: portable across SQLite and Postgres without JSON operators
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from campuspool.core.conversation_keys import (
    KEY_SEPARATOR,
    can_transition_status,
    conversation_key,
    other_participant,
    sort_by_last_activity,
)
from campuspool.core.datetime_ops import get_relative_time
from campuspool.core.domain_types import ConversationStatus
from campuspool.core.errors import (
    ConflictError, InvalidInputError, PermissionDeniedError, ResourceNotFoundError,
)
from campuspool.core.reconcile_responses import FALLBACK_OWNER_NAME
from campuspool.core.validate_message import can_send_message
from campuspool.models import Conversation, Message
from campuspool.schemas.common import as_utc
from campuspool.schemas.conversation import ConversationOut, MessageOut, OtherUser
from campuspool.services.people_lookup import get_user_or_none, load_people

logger = logging.getLogger(__name__)


async def get_conversation_for(
    db: AsyncSession, conversation_id: str, viewer_id: str,
) -> Conversation:
    result = await db.execute(
        select(Conversation).where(Conversation.id == conversation_id),
    )
    conversation = result.scalar_one_or_none()
    if conversation is None:
        raise ResourceNotFoundError("Conversation", conversation_id)
    if not conversation.includes(viewer_id):
        raise PermissionDeniedError("You are not a participant in this conversation")
    return conversation


async def _latest_message(db: AsyncSession, conversation_id: str) -> Message | None:
    result = await db.execute(
        select(Message)
        .where(Message.conversation_id == conversation_id)
        .order_by(Message.created_at.desc())
        .limit(1),
    )
    return result.scalar_one_or_none()


async def list_conversations(
    db: AsyncSession,
    viewer_id: str,
    *,
    include_denied: bool = False,
    now: datetime | None = None,
) -> list[ConversationOut]:
    result = await db.execute(
        select(Conversation).where(or_(
            Conversation.id.startswith(f"{viewer_id}{KEY_SEPARATOR}", autoescape=True),
            Conversation.id.endswith(f"{KEY_SEPARATOR}{viewer_id}", autoescape=True),
        )),
    )
    conversations = [
        c for c in result.scalars().all()
        if c.includes(viewer_id)
        and (include_denied or c.status != ConversationStatus.DENIED.value)
    ]
    return await _describe_all(db, conversations, viewer_id, now=now)


async def describe(
    db: AsyncSession,
    conversation: Conversation,
    viewer_id: str,
    *,
    now: datetime | None = None,
) -> ConversationOut:
    """Listing entry for one conversation."""
    described = await _describe_all(db, [conversation], viewer_id, now=now)
    return described[0]


async def _describe_all(
    db: AsyncSession,
    conversations: list[Conversation],
    viewer_id: str,
    *,
    now: datetime | None = None,
) -> list[ConversationOut]:
    others = {c.id: other_participant(c.participants, viewer_id) for c in conversations}
    users, profiles = await load_people(db, others.values())

    entries = []
    for conversation in conversations:
        last = await _latest_message(db, conversation.id)
        entries.append({
            "conversation": conversation,
            "last_message": last,
            "created_at": as_utc(conversation.created_at),
            "last_message_at": as_utc(last.created_at) if last else None,
        })

    listing = []
    for entry in sort_by_last_activity(entries):
        conversation = entry["conversation"]
        other_id = others[conversation.id]
        profile = profiles.get(other_id) or {}
        user = users.get(other_id) or {}
        activity = entry["last_message_at"] or entry["created_at"]
        listing.append(ConversationOut(
            id=conversation.id,
            participants=list(conversation.participants),
            status=conversation.status,
            created_at=conversation.created_at,
            updated_at=conversation.updated_at,
            last_message=(
                MessageOut.model_validate(entry["last_message"])
                if entry["last_message"] else None
            ),
            other_user=OtherUser(
                id=other_id,
                name=profile.get("name") or user.get("name") or FALLBACK_OWNER_NAME,
                profile_picture=profile.get("profile_picture"),
            ),
            last_activity=get_relative_time(activity, now=now),
        ))
    return listing


async def list_messages(
    db: AsyncSession, conversation_id: str, viewer_id: str,
) -> list[Message]:
    await get_conversation_for(db, conversation_id, viewer_id)
    result = await db.execute(
        select(Message)
        .where(Message.conversation_id == conversation_id)
        .order_by(Message.created_at.asc()),
    )
    return list(result.scalars().all())


async def _open_conversation(
    db: AsyncSession, conversation_id: str, sender_id: str, other_user_id: str | None,
) -> Conversation:
    if not other_user_id:
        raise InvalidInputError(
            "otherUserId is required to start a conversation", "otherUserId",
        )
    if not can_send_message(sender_id, other_user_id):
        raise InvalidInputError("You cannot message yourself", "otherUserId")
    if conversation_key(sender_id, other_user_id) != conversation_id:
        raise InvalidInputError(
            "Conversation id does not match its participants", "conversationId",
        )
    if await get_user_or_none(db, other_user_id) is None:
        raise ResourceNotFoundError("User", other_user_id)

    conversation = Conversation(
        id=conversation_id,
        participants=[sender_id, other_user_id],
        status=ConversationStatus.PENDING.value,
    )
    db.add(conversation)
    await db.flush()
    logger.info(
        "Conversation opened",
        extra={"user_id": sender_id, "conversation_id": conversation_id},
    )
    return conversation


async def post_message(
    db: AsyncSession,
    conversation_id: str,
    sender_id: str,
    content: str,
    other_user_id: str | None = None,
) -> Message:
    result = await db.execute(
        select(Conversation).where(Conversation.id == conversation_id),
    )
    conversation = result.scalar_one_or_none()
    if conversation is None:
        conversation = await _open_conversation(
            db, conversation_id, sender_id, other_user_id,
        )
    elif not conversation.includes(sender_id):
        raise PermissionDeniedError("You are not a participant in this conversation")
    elif conversation.status == ConversationStatus.DENIED.value:
        raise ConflictError("This conversation was declined", "CONVERSATION_DENIED")

    message = Message(
        conversation_id=conversation_id, sender_id=sender_id, content=content,
    )
    db.add(message)
    conversation.updated_at = datetime.now(timezone.utc)
    await db.commit()
    await db.refresh(message)
    return message


async def set_status(
    db: AsyncSession, conversation_id: str, viewer_id: str, status: str,
) -> Conversation:
    conversation = await get_conversation_for(db, conversation_id, viewer_id)
    if not can_transition_status(conversation.status, status):
        raise ConflictError(
            f"Cannot change conversation from {conversation.status} to {status}",
            "INVALID_STATUS_TRANSITION",
        )
    if conversation.status != status:
        conversation.status = status
        conversation.updated_at = datetime.now(timezone.utc)
        await db.commit()
        await db.refresh(conversation)
        logger.info(
            f"Conversation {status}",
            extra={"user_id": viewer_id, "conversation_id": conversation_id},
        )
    return conversation
