"""
Consultation Package Client

Resource client for ``/api/v1/consultation-package`` (health packages).
"""

from __future__ import annotations

import httpx

from clinic_client.clients.base_client import ResourceClient
from clinic_client.schemas.api import PaginatedApiResponse, QueryOptions, Record
from clinic_client.schemas.envelope import unwrap_data


class ConsultationPackageClient(ResourceClient[Record]):
    BASE_PATH = "/api/v1/consultation-package"

    def __init__(self, http_client: httpx.AsyncClient):
        super().__init__(http_client, self.BASE_PATH)

    async def get_all(self, options: QueryOptions | None = None, **params) -> PaginatedApiResponse[Record]:
        """List packages. ``options`` is sent as the JSON ``options`` query parameter."""
        body = await self._request("get", self.base_path, params={**params, "options": options})
        return PaginatedApiResponse[Record].model_validate(unwrap_data(body))

    async def get_detail_by_id(self, id: str) -> Record:
        """Package with its services and pricing expanded (``{base}/{id}/details``)."""
        body = await self._request("get", self._item_url(id, "details"))
        return unwrap_data(body)
