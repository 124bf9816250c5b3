"""Request Dependencies — bearer-token authentication for protected routes.

Invariants:
    - Missing or malformed Authorization header -> AuthenticationError (401)
    - The returned id is the token's subject; routes never read headers themselves
"""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from campuspool.core.errors import AuthenticationError
from campuspool.infrastructure.security import decode_access_token

# auto_error=False: a missing token goes through our 401 envelope, not FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()
    return decode_access_token(credentials.credentials)["sub"]
