"""
Blog Client

Resource client for ``/api/v1/blog`` articles, including the public
``/active`` listing and the admin status toggle.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from clinic_client.clients.base_client import ResourceClient
from clinic_client.schemas.api import ApiResponse, PaginatedApiResponse, Record
from clinic_client.schemas.envelope import unwrap_data

logger = logging.getLogger(__name__)


class BlogClient(ResourceClient[Record]):
    BASE_PATH = "/api/v1/blog"

    def __init__(self, http_client: httpx.AsyncClient):
        super().__init__(http_client, self.BASE_PATH)

    async def get_all_blogs(self) -> ApiResponse[Any]:
        return await self._get_full_response(self.base_path)

    async def get_all_blogs_active(self) -> ApiResponse[Any]:
        return await self._get_full_response(self._url("active"))

    async def get_active_blogs_paginated(
        self, page: int | None = None, limit: int | None = None
    ) -> PaginatedApiResponse[Record]:
        body = await self._request("get", self._url("active"), params={"page": page, "limit": limit})
        return PaginatedApiResponse[Record].model_validate(unwrap_data(body))

    async def get_blog_by_id(self, id: str) -> ApiResponse[Any]:
        return await self._get_full_response(self._item_url(id))

    async def get_latest_blog_posts(self, limit: int = 3) -> list[Record]:
        """
        Latest active posts for teaser widgets.

        A failure here is not worth surfacing: it is logged and an empty list
        is returned.
        """
        try:
            response = await self._get_full_response(self._url("active"), params={"limit": limit})
        except httpx.HTTPError as e:
            logger.error(f"Error fetching latest blog posts: {e}")
            return []
        return response.data

    async def toggle_status(self, id: str) -> Record:
        """Flip a post between active and inactive."""
        response = await self._get_full_response(self._item_url(id, "toggle"), method="patch")
        return response.data
