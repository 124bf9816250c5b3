"""Auth Schemas — signup/signin validation and camelCase wire output."""

import pytest
from pydantic import ValidationError

from campuspool.schemas.auth import AuthResponse, PublicUser, SignInRequest, SignUpRequest


def test_signup_normalizes_email_and_name():
    body = SignUpRequest(email="  Ada@School.EDU ", password="Passw0rd", name="  Ada  ")
    assert body.email == "ada@school.edu"
    assert body.name == "Ada"


@pytest.mark.parametrize("field,value", [
    ("email", "not-an-email"),
    ("password", "weakpass"),
    ("name", "   "),
])
def test_signup_rejects_invalid_fields(field, value):
    data = {"email": "ada@school.edu", "password": "Passw0rd", "name": "Ada"}
    data[field] = value
    with pytest.raises(ValidationError):
        SignUpRequest(**data)


def test_signin_only_checks_email_shape():
    body = SignInRequest(email="ADA@school.edu", password="anything")
    assert body.email == "ada@school.edu"


def test_auth_response_dumps_camel_case():
    response = AuthResponse(
        user=PublicUser(id="u1", email="ada@school.edu", name="Ada"), token="tok",
    )
    assert response.model_dump(by_alias=True) == {
        "user": {"id": "u1", "email": "ada@school.edu", "name": "Ada"},
        "token": "tok",
    }
