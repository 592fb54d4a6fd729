"""
HTTP transport for the clinic API.

Builds the shared ``httpx.AsyncClient`` every resource client talks through:
base URL, JSON headers, timeout, bearer authentication with a single
refresh-and-replay on 401, and request/response logging hooks.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncGenerator
from dataclasses import dataclass

import httpx

from clinic_client.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

# Requests to these paths never trigger a token refresh.
NO_REFRESH_PATHS = ("/auth/refresh-token", "/user/unsignup")


@dataclass
class TokenStore:
    """In-memory holder for the current access and refresh tokens."""

    access_token: str | None = None
    refresh_token: str | None = None

    def set_tokens(self, access_token: str, refresh_token: str | None = None) -> None:
        self.access_token = access_token
        if refresh_token is not None:
            self.refresh_token = refresh_token

    def clear(self) -> None:
        self.access_token = None
        self.refresh_token = None


class BearerTokenAuth(httpx.Auth):
    """
    Attach ``Authorization: Bearer <token>`` and refresh once on 401.

    The refresh endpoint answers ``{"status": "success", "data": {"authenToken",
    "refreshToken"}}``. Concurrent 401s share one refresh: whoever gets the lock
    first refreshes, the others reuse the new token. When the refresh fails the
    store is cleared and the original request is replayed without credentials
    so the caller receives the backend's own 401.
    """

    requires_response_body = True

    def __init__(self, token_store: TokenStore, refresh_path: str = "/api/v1/auth/refresh-token"):
        self._token_store = token_store
        self._refresh_path = refresh_path
        self._refresh_lock = asyncio.Lock()

    def auth_flow(self, request: httpx.Request):
        self._apply_token(request)
        yield request

    async def async_auth_flow(self, request: httpx.Request) -> AsyncGenerator[httpx.Request, httpx.Response]:
        sent_token = self._token_store.access_token
        self._apply_token(request)
        response = yield request

        if response.status_code != 401 or not self._can_refresh(request):
            return

        async with self._refresh_lock:
            current = self._token_store.access_token
            refreshed = current is not None and current != sent_token
            if not refreshed:
                if not self._token_store.refresh_token:
                    return
                logger.info("Access token rejected, refreshing")
                refresh_response = yield self._build_refresh_request(request)
                refreshed = self._store_refreshed_tokens(refresh_response)

        if not refreshed:
            logger.warning("Token refresh failed, clearing stored credentials")
            self._token_store.clear()

        self._apply_token(request)
        yield request

    def _apply_token(self, request: httpx.Request) -> None:
        token = self._token_store.access_token
        if token:
            request.headers["Authorization"] = f"Bearer {token}"
        else:
            request.headers.pop("Authorization", None)

    def _can_refresh(self, request: httpx.Request) -> bool:
        return not any(path in request.url.path for path in NO_REFRESH_PATHS)

    def _build_refresh_request(self, request: httpx.Request) -> httpx.Request:
        return httpx.Request(
            "POST",
            request.url.join(self._refresh_path),
            json={"refreshToken": self._token_store.refresh_token},
            headers={"Accept": "application/json"},
        )

    def _store_refreshed_tokens(self, response: httpx.Response) -> bool:
        if response.status_code != 200:
            return False
        try:
            body = response.json()
        except ValueError:
            logger.error("Refresh endpoint returned a non-JSON body")
            return False

        if not isinstance(body, dict):
            return False
        data = body.get("data")
        if body.get("status") != "success" or not isinstance(data, dict) or not data.get("authenToken"):
            return False

        self._token_store.set_tokens(data["authenToken"], data.get("refreshToken"))
        return True


async def _log_request(request: httpx.Request) -> None:
    logger.debug(f"{request.method} {request.url.path}")


async def _log_response(response: httpx.Response) -> None:
    request = response.request
    if response.is_error:
        logger.debug(f"{request.method} {request.url.path} -> {response.status_code}")


def create_http_client(
    settings: Settings | None = None,
    token_store: TokenStore | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """
    Create the configured transport shared by all resource clients.

    Args:
        settings: Client settings (defaults to ``get_settings()``)
        token_store: Token holder used for bearer auth
        transport: Optional custom transport (e.g. ``httpx.MockTransport`` in tests)

    Returns:
        Configured ``httpx.AsyncClient``. The caller owns it and must close it.
    """
    settings = settings or get_settings()
    if token_store is None:
        token_store = TokenStore(settings.CLINIC_API_ACCESS_TOKEN, settings.CLINIC_API_REFRESH_TOKEN)

    return httpx.AsyncClient(
        base_url=settings.CLINIC_API_BASE_URL,
        timeout=httpx.Timeout(settings.CLINIC_API_TIMEOUT),
        auth=BearerTokenAuth(token_store, refresh_path=f"{settings.auth_base_path}/refresh-token"),
        headers={
            "Accept": "application/json",
            "User-Agent": settings.CLINIC_API_USER_AGENT,
        },
        event_hooks={"request": [_log_request], "response": [_log_response]},
        transport=transport,
    )
