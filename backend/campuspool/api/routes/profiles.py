"""Profile Routes — read any profile, write only your own."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from campuspool.api.dependencies import get_current_user_id
from campuspool.infrastructure.database import get_db
from campuspool.schemas.profile import ProfileOut, ProfileUpdate
from campuspool.services import profiles

router = APIRouter(prefix="/api/v1/users", tags=["profiles"])


@router.get("/{user_id}", response_model=ProfileOut)
async def get_profile(
    user_id: str,
    viewer_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    profile = await profiles.get_profile(db, user_id)
    return profiles.to_profile_out(profile)


@router.post("/{user_id}", response_model=ProfileOut)
async def update_profile(
    user_id: str,
    body: ProfileUpdate,
    viewer_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    profile = await profiles.upsert_profile(db, user_id, viewer_id, body)
    return profiles.to_profile_out(profile)
