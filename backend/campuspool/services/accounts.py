"""Accounts — signup, signin and token-to-user resolution.

Invariants:
    - Emails arrive normalized (trimmed, lower-cased) from the auth schemas
    - Duplicate email -> ConflictError (409), checked before insert
    - Unknown email and wrong password produce the same AuthenticationError
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from campuspool.core.errors import AuthenticationError, ConflictError
from campuspool.infrastructure.security import (
    create_access_token, hash_password, verify_password,
)
from campuspool.models import User
from campuspool.schemas.auth import SignInRequest, SignUpRequest
from campuspool.services.people_lookup import get_user_or_none

logger = logging.getLogger(__name__)


async def register(db: AsyncSession, body: SignUpRequest) -> tuple[User, str]:
    existing = await db.execute(select(User).where(User.email == body.email))
    if existing.scalar_one_or_none():
        raise ConflictError("An account with this email already exists", "EMAIL_TAKEN")

    user = User(
        email=body.email,
        password_hash=hash_password(body.password),
        name=body.name,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    logger.info("User registered", extra={"user_id": user.id})
    return user, create_access_token(user.id, user.email)


async def authenticate(db: AsyncSession, body: SignInRequest) -> tuple[User, str]:
    result = await db.execute(select(User).where(User.email == body.email))
    user = result.scalar_one_or_none()
    if user is None or not verify_password(body.password, user.password_hash):
        raise AuthenticationError("Invalid email or password")
    logger.info("User signed in", extra={"user_id": user.id})
    return user, create_access_token(user.id, user.email)


async def current_user(db: AsyncSession, user_id: str) -> User:
    """User behind a verified token; a deleted account invalidates the token."""
    user = await get_user_or_none(db, user_id)
    if user is None:
        raise AuthenticationError("Account no longer exists")
    return user
