"""
Promotion Client

Resource client for ``/api/v1/promotion`` discount campaigns.
"""

from __future__ import annotations

import httpx

from clinic_client.clients.base_client import QueryParams, ResourceClient
from clinic_client.schemas.api import PaginatedApiResponse, Record
from clinic_client.schemas.envelope import unwrap_data


class PromotionClient(ResourceClient[Record]):
    BASE_PATH = "/api/v1/promotion"

    def __init__(self, http_client: httpx.AsyncClient):
        super().__init__(http_client, self.BASE_PATH)

    async def get_all(self, params: QueryParams = None) -> PaginatedApiResponse[Record]:
        body = await self._request("get", self.base_path, params=params)
        return PaginatedApiResponse[Record].model_validate(unwrap_data(body))

    async def get_active_promotions(self) -> list[Record]:
        """Promotions currently within their validity window."""
        body = await self._request("get", self._url("active"))
        return unwrap_data(body)
