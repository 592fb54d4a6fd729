"""
User Client

Resource client for ``/api/v1/user``: profile management for the signed-in
user plus admin CRUD.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from clinic_client.clients.base_client import Payload, ResourceClient
from clinic_client.schemas.api import ApiResponse, PaginatedApiResponse, QueryOptions, Record
from clinic_client.schemas.envelope import unwrap_data


class UserClient(ResourceClient[Record]):
    BASE_PATH = "/api/v1/user"

    def __init__(self, http_client: httpx.AsyncClient):
        super().__init__(http_client, self.BASE_PATH)

    async def get_all(self, options: QueryOptions | None = None, **params) -> PaginatedApiResponse[Record]:
        body = await self._request("get", self.base_path, params={**params, "options": options})
        return PaginatedApiResponse[Record].model_validate(unwrap_data(body))

    async def get_profile(self) -> Record:
        body = await self._request("get", self._url("profile"))
        return unwrap_data(body)

    async def update_profile(self, data: Payload) -> Record:
        body = await self._request("patch", self.base_path, json=data)
        return unwrap_data(body)

    async def get_profile_with_response(self) -> ApiResponse[Any]:
        return await self._get_full_response(self._url("profile"))

    async def update_profile_with_response(self, data: Mapping[str, Any]) -> ApiResponse[Any]:
        return await self._get_full_response(self.base_path, method="patch", params=data)

    async def unsignup(self, data: Payload) -> Record:
        """
        Register a walk-in patient who has no account yet.

        Args:
            data: At least ``phoneNumber``; optionally ``name`` and ``gender``
        """
        body = await self._request("post", self._url("unsignup"), json=data)
        return unwrap_data(body)
