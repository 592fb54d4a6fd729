"""
Specialty Client

Resource client for ``/api/v1/specialties``. The detail endpoint answers
``{"specialty": {...}, "blogs": [...]}`` so related articles come in the
same round trip.
"""

from __future__ import annotations

import httpx

from clinic_client.clients.base_client import QueryParams, ResourceClient
from clinic_client.schemas.api import Record
from clinic_client.schemas.envelope import unwrap_data


class SpecialtyClient(ResourceClient[Record]):
    BASE_PATH = "/api/v1/specialties"

    def __init__(self, http_client: httpx.AsyncClient):
        super().__init__(http_client, self.BASE_PATH)

    async def get_all(self, params: QueryParams = None) -> list[Record]:
        # The list is wrapped twice: {code, data: {data: [...], pagination}}.
        body = await self._request("get", self.base_path, params=params)
        return unwrap_data(unwrap_data(body))

    async def get_specialty_only(self, id: str) -> Record:
        detail = await self.get_by_id(id)
        return detail["specialty"]

    async def get_blogs_by_specialty_id(self, id: str) -> list[Record]:
        detail = await self.get_by_id(id)
        return detail.get("blogs", [])
