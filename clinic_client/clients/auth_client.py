"""
Auth Client

Registration, OTP verification, login/logout and password changes against
``/api/v1/auth``. Successful logins and refreshes update the shared
``TokenStore`` so subsequent requests carry the new bearer token.

Auth endpoints do not use the ``{code, data, msg}`` envelope consistently,
so every method returns the raw response body.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from clinic_client.clients.base_client import Payload, ResourceClient
from clinic_client.core.http import TokenStore
from clinic_client.schemas.api import Record

logger = logging.getLogger(__name__)


class AuthClient(ResourceClient[Record]):
    BASE_PATH = "/api/v1/auth"

    def __init__(self, http_client: httpx.AsyncClient, token_store: TokenStore):
        super().__init__(http_client, self.BASE_PATH)
        self._token_store = token_store

    def _remember_tokens(self, body: Any) -> None:
        data = body.get("data") if isinstance(body, dict) else None
        if isinstance(data, dict) and data.get("authenToken"):
            self._token_store.set_tokens(data["authenToken"], data.get("refreshToken"))

    async def register(self, data: Payload) -> dict[str, Any]:
        return await self._request("post", self._url("register"), json=data)

    async def verify_otp(self, data: Payload) -> dict[str, Any]:
        return await self._request("post", self._url("verify-otp"), json=data)

    async def login(self, phone_number: str, password: str) -> dict[str, Any]:
        """
        Log in and remember the issued tokens.

        Raises:
            httpx.HTTPStatusError: 401 on invalid credentials
        """
        body = await self._request(
            "post", self._url("login"), json={"phoneNumber": phone_number, "password": password}
        )
        self._remember_tokens(body)
        logger.info("Logged in")
        return body

    async def logout(self) -> dict[str, Any]:
        try:
            return await self._request("post", self._url("logout"))
        finally:
            self._token_store.clear()

    async def change_password(self, old_password: str, new_password: str) -> dict[str, Any]:
        return await self._request(
            "post",
            self._url("change-password"),
            json={"oldPassword": old_password, "newPassword": new_password},
        )

    async def refresh_token(self, refresh_token: str | None = None) -> dict[str, Any]:
        """Explicitly exchange a refresh token (defaults to the stored one)."""
        token = refresh_token or self._token_store.refresh_token
        if not token:
            raise ValueError("No refresh token available")
        body = await self._request("post", self._url("refresh-token"), json={"refreshToken": token})
        self._remember_tokens(body)
        return body
