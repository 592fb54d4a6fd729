"""
Waiting Message Client

Resource client for ``/api/v1/waiting-message``: messages queued for a user
and delivered by the backend at ``triggerAt``.

The ``/many`` endpoint of this resource answers in the paginate-plugin
shape ``{status, data: {docs, totalDocs, page, totalPages, ...}}`` rather
than the standard paginated envelope, so it is returned as-is.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from clinic_client.clients.base_client import Payload, ResourceClient
from clinic_client.schemas.api import PaginatedApiResponse, QueryOptions, Record
from clinic_client.schemas.enums import WaitingMessageStatus
from clinic_client.schemas.envelope import unwrap_data


class WaitingMessageClient(ResourceClient[Record]):
    BASE_PATH = "/api/v1/waiting-message"

    def __init__(self, http_client: httpx.AsyncClient):
        super().__init__(http_client, self.BASE_PATH)

    async def get_many_messages(
        self,
        options: QueryOptions | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> Record:
        """
        List waiting messages (admin and doctor roles).

        Args:
            options: Filter, sort and pagination options sent as JSON
            params: Flat filters (``userId``, ``status``, ``triggerAtFrom``,
                ``triggerAtTo``, ``page``, ``limit``)

        Returns:
            Raw ``{status, data: {docs, totalDocs, ...}}`` body
        """
        body = await self._request("get", self._url("many"), params={**(params or {}), "options": options})
        return body

    async def get_user_messages(self) -> list[Record]:
        """Messages of the authenticated user."""
        return (await self.get_user_messages_with_pagination()).data

    async def get_user_messages_with_pagination(self) -> PaginatedApiResponse[Record]:
        body = await self._request("get", self._url("user"))
        return PaginatedApiResponse[Record].model_validate(unwrap_data(body))

    async def update_status(self, id: str, data: Payload) -> Record:
        """PATCH ``{base}/{id}``, typically ``{"status": "sent"}``."""
        body = await self._request("patch", self._item_url(id), json=data)
        return unwrap_data(body)

    async def get_by_status(
        self, status: WaitingMessageStatus | str, params: Mapping[str, Any] | None = None
    ) -> Record:
        status_value = WaitingMessageStatus(status).value
        return await self.get_many_messages(params={**(params or {}), "status": status_value})

    async def get_by_user_id(self, user_id: str, params: Mapping[str, Any] | None = None) -> Record:
        return await self.get_many_messages(params={**(params or {}), "userId": user_id})

    async def get_by_date_range(
        self, trigger_at_from: str, trigger_at_to: str, params: Mapping[str, Any] | None = None
    ) -> Record:
        """Messages whose ``triggerAt`` falls between two ISO timestamps."""
        return await self.get_many_messages(
            params={**(params or {}), "triggerAtFrom": trigger_at_from, "triggerAtTo": trigger_at_to}
        )
