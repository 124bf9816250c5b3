"""Auth Routes — signup, signin, session lookup and signout.

Invariants:
    - signup/signin are the only unauthenticated writes
    - Responses never include password hashes (PublicUser only)

Design Decisions:
    - Stateless JWT: signout is acknowledged server-side, the client drops its
      AuthContext
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from campuspool.api.dependencies import get_current_user_id
from campuspool.infrastructure.database import get_db
from campuspool.schemas.auth import (
    AuthResponse, PublicUser, SessionResponse, SignInRequest, SignUpRequest,
)
from campuspool.services import accounts

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post(
    "/signup", response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
async def sign_up(body: SignUpRequest, db: AsyncSession = Depends(get_db)):
    user, token = await accounts.register(db, body)
    return AuthResponse(user=PublicUser.model_validate(user), token=token)


@router.post("/signin", response_model=AuthResponse)
async def sign_in(body: SignInRequest, db: AsyncSession = Depends(get_db)):
    user, token = await accounts.authenticate(db, body)
    return AuthResponse(user=PublicUser.model_validate(user), token=token)


@router.get("/session", response_model=SessionResponse)
async def get_session(
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    user = await accounts.current_user(db, user_id)
    return SessionResponse(user=PublicUser.model_validate(user))


@router.post("/signout")
async def sign_out(user_id: str = Depends(get_current_user_id)):
    return {"success": True}
