"""
Consultation Service Client

Resource client for ``/api/v1/consultation-service`` (bookable medical
services). Adds to the generic CRUD contract:

    - Narrowed listing by specialization
    - Safe single fetch (404 -> None)
    - Concurrent batch resolution of many ids
    - Relationship population through ``options.populateOptions``
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

import httpx

from clinic_client.clients.base_client import ResourceClient
from clinic_client.schemas.api import (
    PaginatedApiResponse,
    PaginationParams,
    PopulateOptions,
    QueryOptions,
    Record,
)
from clinic_client.schemas.envelope import unwrap_nested_envelope

logger = logging.getLogger(__name__)


def is_not_found(error: BaseException) -> bool:
    """True for an HTTP error response with status 404."""
    return isinstance(error, httpx.HTTPStatusError) and error.response.status_code == 404


class ConsultationServiceClient(ResourceClient[Record]):
    """
    Async client for consultation services.

    Example:
        services = ConsultationServiceClient(http_client)
        page = await services.get_by_specialization("spec-1", page=1, limit=10)
        resolved = await services.get_by_ids(["a", "b", "c"])
    """

    BASE_PATH = "/api/v1/consultation-service"

    def __init__(self, http_client: httpx.AsyncClient):
        super().__init__(http_client, self.BASE_PATH)

    async def get_by_specialization(
        self,
        specialization_id: str,
        page: int | None = None,
        limit: int | None = None,
        search: str | None = None,
        sort_by: str | None = None,
    ) -> PaginatedApiResponse[Record]:
        """
        List services of one specialization.

        Args:
            specialization_id: Specialization id
            page: Page number (1-based)
            limit: Page size
            search: Free-text search forwarded to the backend
            sort_by: Backend sort key

        Returns:
            Paginated envelope, same shape as ``get_paginated``
        """
        params = {"page": page, "limit": limit, "search": search, "sortBy": sort_by}
        body = await self._request("get", self._url("specialization", specialization_id), params=params)
        return PaginatedApiResponse[Record].model_validate(unwrap_nested_envelope(body))

    async def get_by_id_safe(self, id: str) -> Record | None:
        """
        Fetch a service, returning ``None`` when it does not exist.

        Only HTTP 404 is converted. Every other error is re-raised unchanged.
        """
        try:
            return await self.get_by_id(id)
        except httpx.HTTPStatusError as e:
            if is_not_found(e):
                logger.debug(f"Consultation service {id} not found")
                return None
            raise

    async def get_by_ids(self, ids: Sequence[str]) -> list[Record]:
        """
        Resolve many ids concurrently, skipping the ones that cannot be fetched.

        All fetches are started at once and awaited together. Missing records
        (404) and failed fetches are dropped. Results keep the order of ``ids``.

        Args:
            ids: Service ids, possibly referencing deleted records

        Returns:
            Successfully resolved services
        """
        if not ids:
            return []

        results = await asyncio.gather(*(self.get_by_id_safe(id) for id in ids), return_exceptions=True)

        resolved: list[Record] = []
        for id, result in zip(ids, results):
            if isinstance(result, BaseException):
                if isinstance(result, asyncio.CancelledError):
                    raise result
                logger.warning(f"Skipping consultation service {id}: {result}")
                continue
            if result is not None:
                resolved.append(result)
        return resolved

    async def get_populated(
        self,
        populate: PopulateOptions,
        filter: dict[str, Any] | None = None,
        sort: dict[str, Any] | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> PaginatedApiResponse[Record]:
        """
        List services with a foreign-key path expanded server-side.

        Example:
            await services.get_populated(PopulateOptions(path="specialization", select="name"))
        """
        options = QueryOptions(
            filter=filter,
            sort=sort,
            pagination=PaginationParams(page=page, limit=limit) if page or limit else None,
            populate_options=populate,
        )
        return await self.get_paginated({"options": options})
