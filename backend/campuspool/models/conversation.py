"""Conversation ORM — durable pairing of two users for direct messaging.

Invariants:
    - id is core.conversation_keys.conversation_key(a, b): at most one row per pair
    - participants holds both user ids, initiator first
    - status transitions pending -> accepted | denied (core.can_transition_status)
"""

from datetime import datetime

from sqlalchemy import String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from campuspool.db.base import Base, utc_now


class Conversation(Base):
    __tablename__ = "conversations"

    id: Mapped[str] = mapped_column(String(80), primary_key=True)
    participants: Mapped[list] = mapped_column(JSON, nullable=False)
    status: Mapped[str] = mapped_column(String(10), nullable=False, default="pending")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

    def includes(self, user_id: str) -> bool:
        return user_id in (self.participants or [])
