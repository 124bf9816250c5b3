"""People Lookup — batch-load user and profile rows into reconciler lookups.

Invariants:
    - One query per table regardless of how many ids are requested
    - Returned dicts map user_id -> {"name", ...}; missing ids are simply absent,
      so dict.get yields None and the core falls back to its default names
"""

from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from campuspool.models import Profile, User


async def load_people(
    db: AsyncSession, user_ids: Iterable[str],
) -> tuple[dict[str, dict], dict[str, dict]]:
    """(users, profiles) keyed by user id."""
    ids = {uid for uid in user_ids if uid}
    if not ids:
        return {}, {}

    user_rows = await db.execute(select(User).where(User.id.in_(ids)))
    users = {u.id: {"name": u.name} for u in user_rows.scalars().all()}

    profile_rows = await db.execute(select(Profile).where(Profile.user_id.in_(ids)))
    profiles = {p.user_id: p.to_lookup() for p in profile_rows.scalars().all()}
    return users, profiles


async def get_user_or_none(db: AsyncSession, user_id: str) -> User | None:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()
