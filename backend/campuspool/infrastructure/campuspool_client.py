"""CampusPool Client — async httpx wrapper over the REST API with session threading.

Invariants:
    - Every request carries the current AuthContext's bearer header (if any)
    - sign_in / sign_up / sign_out replace self.auth; no other method changes it
    - Non-2xx responses and transport failures surface as ApiClientError
    - Idempotent GETs retry transient failures (connection errors, 5xx) with
      exponential backoff; writes are never retried

Design Decisions:
    - Implements MessageSender and FeedSource structurally, so MessageThread and
      PollingSubscription consume it without knowing about HTTP
    - ±25% jitter on backoff: keeps polling clients from retrying in lockstep
    - Injectable httpx.AsyncClient: tests pass one built on httpx.MockTransport
"""

import asyncio
import logging
import random
from typing import Any

import httpx

from campuspool.core.auth_context import AuthContext
from campuspool.core.conversation_keys import conversation_key
from campuspool.core.errors import ApiClientError
from campuspool.core.merge_message_stream import ThreadMessage

logger = logging.getLogger(__name__)


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return error["message"]
        if body.get("detail"):
            return str(body["detail"])
    return f"HTTP {response.status_code}"


class CampusPoolClient:
    """Typed calls for every CampusPool endpoint."""

    def __init__(
        self,
        base_url: str,
        auth: AuthContext | None = None,
        http: httpx.AsyncClient | None = None,
        timeout_seconds: float = 10.0,
        max_retries: int = 2,
        base_delay_ms: int = 200,
    ):
        self.base_url = base_url.rstrip("/")
        self.auth = auth or AuthContext.anonymous()
        self._http = http or httpx.AsyncClient(timeout=timeout_seconds)
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "CampusPoolClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    # ─── Transport ──────────────────────────────────────────────

    async def _request(
        self, method: str, path: str, *, json: Any = None, params: dict | None = None,
    ) -> Any:
        retries = self.max_retries if method == "GET" else 0
        for attempt in range(retries + 1):
            try:
                response = await self._http.request(
                    method, f"{self.base_url}{path}",
                    json=json, params=params,
                    headers=self.auth.authorization_header(),
                )
            except httpx.TransportError as e:
                if attempt < retries:
                    await self._backoff(attempt, f"{method} {path}: {e}")
                    continue
                raise ApiClientError(f"{method} {path} failed: {e}")

            if response.status_code >= 500 and attempt < retries:
                await self._backoff(attempt, f"{method} {path}: HTTP {response.status_code}")
                continue
            if response.is_error:
                raise ApiClientError(_error_message(response), response.status_code)
            if response.status_code == 204 or not response.content:
                return None
            return response.json()

    async def _backoff(self, attempt: int, reason: str) -> None:
        delay_ms = self.base_delay_ms * (2 ** attempt)
        delay_ms *= 1 + random.uniform(-0.25, 0.25)
        logger.warning(
            f"Retrying after transient failure ({reason}), "
            f"attempt {attempt + 1}/{self.max_retries}",
        )
        await asyncio.sleep(delay_ms / 1000)

    # ─── Auth ───────────────────────────────────────────────────

    async def sign_up(self, email: str, password: str, name: str) -> dict:
        data = await self._request(
            "POST", "/auth/signup",
            json={"email": email, "password": password, "name": name},
        )
        self.auth = self.auth.login(data["token"], data["user"])
        return data["user"]

    async def sign_in(self, email: str, password: str) -> dict:
        data = await self._request(
            "POST", "/auth/signin", json={"email": email, "password": password},
        )
        self.auth = self.auth.login(data["token"], data["user"])
        return data["user"]

    async def get_session(self) -> dict | None:
        """Current user, or None (and an anonymous context) if the token is rejected."""
        if not self.auth.is_authenticated:
            return None
        try:
            data = await self._request("GET", "/auth/session")
        except ApiClientError as e:
            if e.status_code == 401:
                self.auth = self.auth.logout()
                return None
            raise
        self.auth = self.auth.with_user(data["user"])
        return data["user"]

    async def sign_out(self) -> None:
        try:
            if self.auth.is_authenticated:
                await self._request("POST", "/auth/signout")
        finally:
            self.auth = self.auth.logout()

    # ─── Profiles ───────────────────────────────────────────────

    async def get_profile(self, user_id: str) -> dict:
        return await self._request("GET", f"/users/{user_id}")

    async def update_profile(self, user_id: str, profile: dict) -> dict:
        return await self._request("POST", f"/users/{user_id}", json=profile)

    # ─── Carpool requests ───────────────────────────────────────

    async def get_requests(self) -> list[dict]:
        return await self._request("GET", "/carpool-requests")

    async def create_request(self, request: dict) -> dict:
        return await self._request("POST", "/carpool-requests", json=request)

    async def update_request(self, request_id: str, changes: dict) -> dict:
        return await self._request("PUT", f"/carpool-requests/{request_id}", json=changes)

    async def delete_request(self, request_id: str) -> None:
        await self._request("DELETE", f"/carpool-requests/{request_id}")

    async def respond_to_request(self, request_id: str, message: str | None = None) -> dict:
        return await self._request(
            "POST", f"/carpool-requests/{request_id}/respond",
            json={"message": message},
        )

    # ─── Conversations ──────────────────────────────────────────

    async def get_conversations(self, include_denied: bool = False) -> list[dict]:
        params = {"includeDenied": "true"} if include_denied else None
        return await self._request("GET", "/conversations", params=params)

    async def get_messages(self, conversation_id: str) -> list[ThreadMessage]:
        data = await self._request("GET", f"/conversations/{conversation_id}/messages")
        return [ThreadMessage.from_wire(item) for item in data]

    async def send_message(
        self, conversation_id: str, content: str, other_user_id: str | None = None,
    ) -> ThreadMessage:
        data = await self._request(
            "POST", f"/conversations/{conversation_id}/messages",
            json={"content": content, "otherUserId": other_user_id},
        )
        return ThreadMessage.from_wire(data["data"])

    async def start_conversation(self, other_user_id: str, content: str) -> ThreadMessage:
        """First message to a peer; the conversation id is derived locally."""
        if not self.auth.user_id:
            raise ApiClientError("Sign in before messaging", 401)
        key = conversation_key(self.auth.user_id, other_user_id)
        return await self.send_message(key, content, other_user_id)

    async def update_conversation_status(self, conversation_id: str, status: str) -> dict:
        return await self._request(
            "PUT", f"/conversations/{conversation_id}", json={"status": status},
        )
