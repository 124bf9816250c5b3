"""Error envelopes — status mapping, auth challenge, wire field names, opaque 500s."""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from campuspool.api.error_handlers import register_error_handlers, validation_details
from campuspool.core.errors import AuthenticationError, PermissionDeniedError
from campuspool.main import request_context
from campuspool.schemas.profile import ProfileUpdate


def _bare_app() -> FastAPI:
    bare = FastAPI()
    bare.middleware("http")(request_context)

    @bare.get("/expired")
    async def expired():
        raise AuthenticationError("Invalid or expired token")

    @bare.get("/not-yours")
    async def not_yours():
        raise PermissionDeniedError("Only the owner can edit this post")

    @bare.post("/profile")
    async def profile(body: ProfileUpdate):
        return {}

    @bare.get("/boom")
    async def boom():
        raise RuntimeError("secret connection string")

    register_error_handlers(bare)
    return bare


@pytest.fixture
async def bare_client():
    async with AsyncClient(
        transport=ASGITransport(app=_bare_app(), raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c


async def test_unauthenticated_carries_bearer_challenge(bare_client):
    res = await bare_client.get("/expired")
    assert res.status_code == 401
    assert res.headers["WWW-Authenticate"] == "Bearer"
    assert res.json()["error"]["code"] == "UNAUTHORIZED"


async def test_forbidden_has_no_challenge(bare_client):
    res = await bare_client.get("/not-yours")
    assert res.status_code == 403
    assert "WWW-Authenticate" not in res.headers


async def test_validation_details_use_wire_field_names(bare_client):
    res = await bare_client.post("/profile", json={"carCapacity": 12})
    assert res.status_code == 400
    fields = [d["field"] for d in res.json()["error"]["details"]]
    assert fields == ["carCapacity"]


async def test_cross_field_failure_has_empty_field(bare_client):
    res = await bare_client.post("/profile", json={"hasCar": True})
    assert res.status_code == 400
    assert [d["field"] for d in res.json()["error"]["details"]] == [""]


async def test_unexpected_error_reports_request_id_only(bare_client):
    res = await bare_client.get("/boom", headers={"X-Request-ID": "req-500"})
    assert res.status_code == 500
    error = res.json()["error"]
    assert error["code"] == "INTERNAL_ERROR"
    assert error["request_id"] == "req-500"
    assert "secret" not in res.text


def test_validation_details_strip_location_prefix():
    details = validation_details([
        {"loc": ("query", "includeDenied"), "msg": "bad bool", "type": "bool_parsing"},
        {"loc": ("body", "responses", 0), "msg": "x", "type": "t"},
    ])
    assert [d["field"] for d in details] == ["includeDenied", "responses.0"]
