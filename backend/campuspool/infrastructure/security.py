"""Security — password hashing and bearer-token issue/verify.

Invariants:
    - Plain passwords never leave this module; only hashes are stored
    - Tokens carry sub (user id), email and exp; expiry from settings.token_expiry_days
    - decode_access_token raises AuthenticationError — callers never see JWTError

Design Decisions:
    - passlib CryptContext: hash scheme swappable without touching routes
    - pbkdf2_sha256 over bcrypt: pure-python backend, no native wheel to pin
"""

import logging
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext

from campuspool.config import get_settings
from campuspool.core.errors import AuthenticationError

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(
    user_id: str, email: str, expires_delta: timedelta | None = None,
) -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(days=settings.token_expiry_days)
    )
    claims = {"sub": user_id, "email": email, "exp": expire}
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict:
    """Verify signature and expiry; return the claims."""
    settings = get_settings()
    try:
        claims = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm],
        )
    except JWTError as e:
        logger.warning(f"Rejected bearer token: {e}")
        raise AuthenticationError("Invalid or expired token")
    if not claims.get("sub"):
        raise AuthenticationError("Token has no subject")
    return claims
