"""CarpoolRequest ORM — a ride request or offer owned by its poster.

Invariants:
    - Mutable only by the owner (enforced in routes)
    - responses is an append-only JSON list; entries may be legacy user-id
      strings or canonical {userId, message, timestamp} objects
    - date ("YYYY-MM-DD") and time ("HH:MM") kept as submitted strings

Design Decisions:
    - JSON column for responses: mirrors the wire shape, so legacy rows load
      unchanged and the reconciler normalizes them on read
"""

from datetime import datetime

from sqlalchemy import String, Text, Float, DateTime, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from campuspool.db.base import Base, new_uuid, utc_now


class CarpoolRequest(Base):
    __tablename__ = "carpool_requests"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=new_uuid,
    )
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    user_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    type: Mapped[str] = mapped_column(String(10), nullable=False, default="request")
    destination: Mapped[str] = mapped_column(String(200), nullable=False)
    date: Mapped[str] = mapped_column(String(32), nullable=False)
    time: Mapped[str] = mapped_column(String(5), nullable=False)
    seats: Mapped[float | None] = mapped_column(Float, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    responses: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
