"""
Medication Client

Resource client for ``/api/v1/medications``: a medicine with its quantity,
frequency and duration, as written on a prescription. Shares the list and
bulk conventions of ``MedicineClient``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import httpx

from clinic_client.clients.base_client import Payload, ResourceClient
from clinic_client.schemas.api import GetManyParams, PaginatedApiResponse, QueryOptions, Record
from clinic_client.schemas.envelope import unwrap_data

FILTER_FIELDS = ("medicine", "minQuantity", "maxQuantity", "frequency", "duration")


class MedicationClient(ResourceClient[Record]):
    BASE_PATH = "/api/v1/medications"

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
        List medications by medicine, quantity range, frequency or duration.

        Args:
            filters: ``medicine``, ``minQuantity``, ``maxQuantity``,
                ``frequency``, ``duration``; empty values and other keys are ignored
            options: Advanced options, e.g. ``filter={"quantity": {"$gte": 2}}``
        """
        params: dict[str, Any] = {}
        for field in FILTER_FIELDS:
            if filters and filters.get(field):
                params[field] = filters[field]
        if options is not None:
            params["options"] = options
        return await self._list(params)

    async def get_by_medicine(
        self, medicine_id: str, params: Mapping[str, Any] | None = None
    ) -> PaginatedApiResponse[Record]:
        return await self._list({"medicine": medicine_id, **(params or {})})

    async def get_by_quantity_range(
        self, min_quantity: int, max_quantity: int, params: Mapping[str, Any] | None = None
    ) -> PaginatedApiResponse[Record]:
        return await self._list({"minQuantity": min_quantity, "maxQuantity": max_quantity, **(params or {})})

    async def search_by_frequency(
        self, frequency: str, params: Mapping[str, Any] | None = None
    ) -> PaginatedApiResponse[Record]:
        return await self._list({"frequency": frequency, **(params or {})})

    async def search_by_duration(
        self, duration: str, params: Mapping[str, Any] | None = None
    ) -> PaginatedApiResponse[Record]:
        return await self._list({"duration": duration, **(params or {})})

    # =========================================================================
    # Bulk operations
    # =========================================================================

    async def bulk_create(self, medications: Sequence[Payload]) -> list[Record]:
        body = await self._request("post", self._url("bulk"), json={"medications": medications})
        return unwrap_data(body)

    async def bulk_update(self, updates: Sequence[tuple[str, Payload]]) -> list[Record]:
        """Apply a different partial update to each ``(id, data)`` pair."""
        payload = {"updates": [{"id": id, "data": data} for id, data in updates]}
        body = await self._request("put", self._url("bulk"), json=payload)
        return unwrap_data(body)

    async def bulk_delete(self, ids: Sequence[str]) -> dict[str, Any]:
        """Returns ``{message, deletedCount}``."""
        response = await self._get_full_response(self._url("bulk"), method="delete", params={"ids": list(ids)})
        return response.data
