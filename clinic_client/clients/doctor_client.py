"""
Doctor Client

Resource client for ``/api/v1/doctor`` doctor profiles.
"""

from __future__ import annotations

import httpx

from clinic_client.clients.base_client import Payload, ResourceClient
from clinic_client.schemas.api import (
    PaginatedApiResponse,
    PopulateOptions,
    QueryOptions,
    Record,
)
from clinic_client.schemas.envelope import unwrap_data


class DoctorClient(ResourceClient[Record]):
    """Doctor profiles, filterable by specialization and resolvable by user id."""

    BASE_PATH = "/api/v1/doctor"

    def __init__(self, http_client: httpx.AsyncClient):
        super().__init__(http_client, self.BASE_PATH)

    async def get_all(self, options: QueryOptions | None = None, **params) -> PaginatedApiResponse[Record]:
        """
        List doctors with server-side filtering.

        Args:
            options: Filter, sort, pagination and population options
            **params: Extra query parameters forwarded as-is

        Returns:
            Paginated envelope (the backend nests it inside ``data``)
        """
        body = await self._request("get", self.base_path, params={**params, "options": options})
        return PaginatedApiResponse[Record].model_validate(unwrap_data(body))

    async def get_by_specialization(
        self,
        specialization_id: str,
        page: int | None = None,
        limit: int | None = None,
        search: str | None = None,
        sort_by: str | None = None,
    ) -> PaginatedApiResponse[Record]:
        params = {"page": page, "limit": limit, "search": search, "sortBy": sort_by}
        body = await self._request("get", self._url("specialization", specialization_id), params=params)
        return PaginatedApiResponse[Record].model_validate(body)

    async def update(self, id: str, data: Payload) -> Record:
        # Doctor profiles are patched, not replaced.
        body = await self._request("patch", self._item_url(id), json=data)
        return unwrap_data(body)

    async def find_one_by_user_id(self, user_id: str) -> Record:
        """Doctor profile of a user, with ``user`` and ``specialization`` populated."""
        options = QueryOptions(
            filter={"user": user_id},
            populate_options=PopulateOptions(path="user specialization"),
        )
        body = await self._request("get", self._url("findOne"), params={"options": options})
        return unwrap_data(body)
