"""
ICD Client

Read-only lookups in the ICD-10 diagnosis catalogue (``/api/v1/icd``).
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal

import httpx

from clinic_client.clients.base_client import ResourceClient
from clinic_client.schemas.api import PaginatedApiResponse, Record
from clinic_client.schemas.envelope import unwrap_data


class IcdClient(ResourceClient[Record]):
    BASE_PATH = "/api/v1/icd"

    def __init__(self, http_client: httpx.AsyncClient):
        super().__init__(http_client, self.BASE_PATH)

    async def get_all(
        self,
        page: int | None = None,
        limit: int | None = None,
        code: str | None = None,
        range: str | None = None,
        title: str | None = None,
        sort_by: str | None = None,
        sort_order: Literal["asc", "desc"] | None = None,
    ) -> PaginatedApiResponse[Record]:
        params = {
            "page": page,
            "limit": limit,
            "code": code,
            "range": range,
            "title": title,
            "sortBy": sort_by,
            "sortOrder": sort_order,
        }
        body = await self._request("get", self.base_path, params=params)
        return PaginatedApiResponse[Record].model_validate(body)

    async def search(self, q: str, page: int | None = None, limit: int | None = None) -> PaginatedApiResponse[Record]:
        """Full-text search over codes and titles (POST with query parameters)."""
        body = await self._request(
            "post", self._url("search"), params={"q": q, "page": page, "limit": limit}, json={}
        )
        return PaginatedApiResponse[Record].model_validate(unwrap_data(body))

    async def get_by_ids(self, ids: Sequence[str]) -> list[Record]:
        """Resolve many ICD entries in a single request (``?ids=a,b,c``)."""
        if not ids:
            return []
        body = await self._request("get", self._url("many"), params={"ids": ",".join(ids)})
        return unwrap_data(body)
