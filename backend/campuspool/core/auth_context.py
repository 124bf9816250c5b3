"""Auth Context — explicit session value replacing ambient token/user storage.

Invariants:
    - Immutable: login/logout return a new context, never mutate in place
    - Authenticated iff a non-empty token is present
    - The user mapping is the server's public user record ({id, email, name})

Design Decisions:
    - Threaded by dependency injection into the API client: no module-level
      session cache, so two clients in one process never share a login
"""

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True)
class AuthContext:
    token: str | None = None
    user: Mapping = field(default_factory=dict)

    @classmethod
    def anonymous(cls) -> "AuthContext":
        return cls()

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    @property
    def user_id(self) -> str | None:
        return self.user.get("id") if self.user else None

    def login(self, token: str, user: Mapping) -> "AuthContext":
        return AuthContext(token=token, user=dict(user))

    def logout(self) -> "AuthContext":
        return AuthContext.anonymous()

    def with_user(self, user: Mapping) -> "AuthContext":
        """Refresh the cached user without touching the token."""
        return AuthContext(token=self.token, user=dict(user))

    def authorization_header(self) -> dict[str, str]:
        if not self.is_authenticated:
            return {}
        return {"Authorization": f"Bearer {self.token}"}
