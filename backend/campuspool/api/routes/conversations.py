"""Conversation Routes — listings, threads, sending and the accept/deny gate.

Invariants:
    - Every route is participant-scoped (service layer raises 403/404)
    - Posting to an unknown id opens the conversation when otherUserId is given
    - Messages are returned oldest first
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from campuspool.api.dependencies import get_current_user_id
from campuspool.infrastructure.database import get_db
from campuspool.schemas.conversation import (
    ConversationOut,
    ConversationStatusUpdate,
    MessageOut,
    SendMessageRequest,
    SendMessageResponse,
)
from campuspool.services import conversations

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/conversations", tags=["conversations"])


@router.get("", response_model=list[ConversationOut])
async def list_conversations(
    include_denied: bool = Query(False, alias="includeDenied"),
    viewer_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await conversations.list_conversations(
        db, viewer_id, include_denied=include_denied,
    )


@router.get("/{conversation_id}/messages", response_model=list[MessageOut])
async def get_messages(
    conversation_id: str,
    viewer_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await conversations.list_messages(db, conversation_id, viewer_id)


@router.post(
    "/{conversation_id}/messages", response_model=SendMessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def send_message(
    conversation_id: str,
    body: SendMessageRequest,
    viewer_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    message = await conversations.post_message(
        db, conversation_id, viewer_id, body.content, body.other_user_id,
    )
    logger.info(
        "Message sent",
        extra={"user_id": viewer_id, "conversation_id": conversation_id},
    )
    return SendMessageResponse(data=MessageOut.model_validate(message))


@router.put("/{conversation_id}", response_model=ConversationOut)
async def update_status(
    conversation_id: str,
    body: ConversationStatusUpdate,
    viewer_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    conversation = await conversations.set_status(
        db, conversation_id, viewer_id, body.status,
    )
    return await conversations.describe(db, conversation, viewer_id)
