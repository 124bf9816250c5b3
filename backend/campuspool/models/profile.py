"""Profile ORM — one row per user, overwritten on edit (not versioned).

Invariants:
    - user_id is both primary key and foreign key (1:1 with users)
    - Car columns are nullable; "required when has_car" is enforced by
      core.validate_profile, not by the schema
    - car_capacity is Float while fractional seat counts remain valid
"""

from datetime import datetime

from sqlalchemy import String, Text, Integer, Float, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from campuspool.db.base import Base, utc_now


class Profile(Base):
    __tablename__ = "profiles"

    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True,
    )
    name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    college: Mapped[str | None] = mapped_column(String(100), nullable=True)
    major: Mapped[str | None] = mapped_column(String(50), nullable=True)
    year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    phone_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    has_car: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    car_model: Mapped[str | None] = mapped_column(String(50), nullable=True)
    car_color: Mapped[str | None] = mapped_column(String(30), nullable=True)
    car_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    car_license: Mapped[str | None] = mapped_column(String(20), nullable=True)
    car_capacity: Mapped[float | None] = mapped_column(Float, nullable=True)
    profile_picture: Mapped[str | None] = mapped_column(Text, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
    )

    def to_lookup(self) -> dict:
        """Shape consumed by core.reconcile_responses lookups."""
        return {
            "name": self.name,
            "college": self.college,
            "has_car": self.has_car,
            "profile_picture": self.profile_picture,
        }
