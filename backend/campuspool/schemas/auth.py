"""Auth Schemas — signup/signin payloads and the {user, token} envelope.

Invariants:
    - Signup email must pass is_valid_email; stored trimmed and lower-cased
    - Signup password must pass is_valid_password (length + character classes)
    - Name is sanitized to 100 chars and must not be blank
"""

from pydantic import field_validator

from campuspool.core.validate_user import is_valid_email, is_valid_password, sanitize_input
from campuspool.schemas.common import CamelModel


def _normalize_email(v: str) -> str:
    if not is_valid_email(v):
        raise ValueError("email must look like name@school.edu")
    return v.strip().lower()


class SignUpRequest(CamelModel):
    email: str
    password: str
    name: str

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        return _normalize_email(v)

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        if not is_valid_password(v):
            raise ValueError(
                "password needs 8+ characters with an uppercase letter, "
                "a lowercase letter and a digit",
            )
        return v

    @field_validator("name")
    @classmethod
    def clean_name(cls, v: str) -> str:
        v = sanitize_input(v, 100)
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class SignInRequest(CamelModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        return _normalize_email(v)


class PublicUser(CamelModel):
    id: str
    email: str
    name: str


class AuthResponse(CamelModel):
    user: PublicUser
    token: str


class SessionResponse(CamelModel):
    user: PublicUser
