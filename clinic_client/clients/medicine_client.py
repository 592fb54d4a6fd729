"""
Medicine Client

Resource client for the ``/api/v1/medicines`` catalogue with attribute
filters and bulk endpoints (``{base}/bulk``).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import httpx

from clinic_client.clients.base_client import Payload, ResourceClient
from clinic_client.schemas.api import GetManyParams, PaginatedApiResponse, QueryOptions, Record
from clinic_client.schemas.envelope import unwrap_data

FILTER_FIELDS = ("name", "dosage", "form", "route")


class MedicineClient(ResourceClient[Record]):
    """
    Async client for medicines.

    The list endpoints of this resource always nest the paginated envelope
    inside ``data``.
    """

    BASE_PATH = "/api/v1/medicines"

    def __init__(self, http_client: httpx.AsyncClient):
        super().__init__(http_client, self.BASE_PATH)

    async def _list(
        self, params: Mapping[str, Any] | GetManyParams | None, endpoint: str | None = None
    ) -> PaginatedApiResponse[Record]:
        body = await self._request("get", endpoint or self.base_path, params=params)
        return PaginatedApiResponse[Record].model_validate(unwrap_data(body))

    async def get_all(self, params: Mapping[str, Any] | None = None) -> PaginatedApiResponse[Record]:
        return await self._list(params)

    async def get_many(self, params: GetManyParams | Mapping[str, Any] | None = None) -> PaginatedApiResponse[Record]:
        return await self._list(params, self._url("many"))

    async def get_with_filters(
        self,
        filters: Mapping[str, Any] | None = None,
        options: QueryOptions | None = None,
    ) -> PaginatedApiResponse[Record]:
        """
        List medicines filtered by name, dosage, form or route.

        Args:
            filters: Attribute filters; keys outside name/dosage/form/route are ignored
            options: Advanced filter, sort and pagination options

        Returns:
            Paginated medicines
        """
        params: dict[str, Any] = {}
        for field in FILTER_FIELDS:
            if filters and filters.get(field):
                params[field] = filters[field]
        if options is not None:
            params["options"] = options
        return await self._list(params)

    async def search_by_name(self, name: str, params: Mapping[str, Any] | None = None) -> PaginatedApiResponse[Record]:
        return await self._list({"name": name, **(params or {})})

    async def get_by_form(self, form: str, params: Mapping[str, Any] | None = None) -> PaginatedApiResponse[Record]:
        return await self._list({"form": form, **(params or {})})

    async def get_by_route(self, route: str, params: Mapping[str, Any] | None = None) -> PaginatedApiResponse[Record]:
        return await self._list({"route": route, **(params or {})})

    # =========================================================================
    # Bulk operations
    # =========================================================================

    async def bulk_create(self, medicines: Sequence[Payload]) -> list[Record]:
        body = await self._request("post", self._url("bulk"), json={"medicines": self._to_json(medicines)})
        return unwrap_data(body)

    async def bulk_update(self, updates: Sequence[tuple[str, Payload]]) -> list[Record]:
        """
        Apply a different partial update to each medicine.

        Args:
            updates: ``(id, data)`` pairs
        """
        payload = {"updates": [{"id": id, "data": self._to_json(data)} for id, data in updates]}
        body = await self._request("put", self._url("bulk"), json=payload)
        return unwrap_data(body)

    async def bulk_delete(self, ids: Sequence[str]) -> dict[str, Any]:
        """Delete many medicines. Returns ``{message, deletedCount}``."""
        response = await self._get_full_response(self._url("bulk"), method="delete", params={"ids": list(ids)})
        return response.data
