"""Profiles — read and upsert the single profile row of a user.

Invariants:
    - Only the owner may write their profile (PermissionDeniedError otherwise)
    - Upsert overwrites only the fields present in the payload
    - is_complete mirrors core.validate_profile completeness for the user's car status
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from campuspool.core.errors import PermissionDeniedError, ResourceNotFoundError
from campuspool.core.validate_profile import (
    is_complete_profile_with_car,
    is_complete_profile_without_car,
)
from campuspool.models import Profile
from campuspool.schemas.profile import ProfileOut, ProfileUpdate

logger = logging.getLogger(__name__)


def _completeness_view(profile: Profile) -> dict:
    return {
        "college": profile.college,
        "major": profile.major,
        "graduation_year": profile.year,
        "car_model": profile.car_model,
        "car_capacity": profile.car_capacity,
        "license_plate": profile.car_license,
    }


def to_profile_out(profile: Profile) -> ProfileOut:
    view = _completeness_view(profile)
    complete = (
        is_complete_profile_with_car(view) if profile.has_car
        else is_complete_profile_without_car(view)
    )
    return ProfileOut.model_validate(profile).model_copy(update={"is_complete": complete})


async def get_profile(db: AsyncSession, user_id: str) -> Profile:
    result = await db.execute(select(Profile).where(Profile.user_id == user_id))
    profile = result.scalar_one_or_none()
    if profile is None:
        raise ResourceNotFoundError("Profile", user_id)
    return profile


async def upsert_profile(
    db: AsyncSession, user_id: str, viewer_id: str, body: ProfileUpdate,
) -> Profile:
    if user_id != viewer_id:
        raise PermissionDeniedError("You can only edit your own profile")

    result = await db.execute(select(Profile).where(Profile.user_id == user_id))
    profile = result.scalar_one_or_none()
    if profile is None:
        profile = Profile(user_id=user_id)
        db.add(profile)

    for name, value in body.model_dump(exclude_unset=True).items():
        setattr(profile, name, value)

    await db.commit()
    await db.refresh(profile)
    logger.info("Profile saved", extra={"user_id": user_id})
    return profile
