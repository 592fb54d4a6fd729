"""
Generic REST Resource Client

Uniform CRUD and list operations against one backend base path
(e.g. ``/api/v1/room``), unwrapping the standard response envelopes:

    - Single resource: {"code": 200, "data": {...}, "msg": "..."}
    - List (/many):    {"data": [...], "pagination": {...}}

Errors are never translated here. ``httpx.HTTPStatusError`` (non-2xx) and
``httpx.RequestError`` (network, timeout) reach the caller unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Generic, TypeVar

import httpx
from pydantic import BaseModel
from pydantic_core import to_jsonable_python

from clinic_client.schemas.api import (
    ApiResponse,
    GetManyParams,
    HttpMethod,
    PaginatedApiResponse,
    Record,
    build_query_params,
)
from clinic_client.schemas.envelope import unwrap_data, unwrap_many, unwrap_or_raw

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Mapping[str, Any])

QueryParams = GetManyParams | Mapping[str, Any] | None
Payload = Mapping[str, Any] | BaseModel


class ResourceClient(Generic[T]):
    """
    Async CRUD client bound to a single REST base path.

    Holds the shared transport and its base path, nothing else. Instances are
    created once at wiring time (see ``ClientContainer``) and reused.

    Example:
        async with httpx.AsyncClient(base_url="https://api.example.com") as http:
            rooms = ResourceClient(http, "/api/v1/room")
            room = await rooms.get_by_id("665f1c")
    """

    def __init__(self, http_client: httpx.AsyncClient, base_path: str):
        """
        Initialize resource client.

        Args:
            http_client: Configured transport (base URL, auth, timeout)
            base_path: Resource collection path, e.g. ``/api/v1/room``

        Raises:
            ValueError: If ``base_path`` is empty
        """
        if not base_path or not base_path.strip("/"):
            raise ValueError("base_path must be a non-empty resource path")
        self._http = http_client
        self.base_path = "/" + base_path.strip("/")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_path={self.base_path!r})"

    # =========================================================================
    # Transport helpers
    # =========================================================================

    def _url(self, *parts: str) -> str:
        """Join path segments onto the base path."""
        suffix = "/".join(str(part).strip("/") for part in parts if str(part))
        return f"{self.base_path}/{suffix}" if suffix else self.base_path

    def _item_url(self, id: str, *parts: str) -> str:
        """URL of one record, optionally of a sub-resource under it."""
        if not id or not str(id).strip("/"):
            raise ValueError("id must be a non-empty string")
        return self._url(id, *parts)

    @staticmethod
    def _to_json(data: Any) -> Any:
        """Convert a request body to JSON-compatible values, recursing into containers."""
        if isinstance(data, BaseModel):
            return data.model_dump(mode="json", by_alias=True, exclude_none=True)
        if isinstance(data, Mapping):
            return {str(key): ResourceClient._to_json(value) for key, value in data.items()}
        if isinstance(data, Sequence) and not isinstance(data, (str, bytes)):
            return [ResourceClient._to_json(item) for item in data]
        # datetimes, dates, enums, UUIDs, Decimals
        return to_jsonable_python(data)

    async def _request(
        self,
        method: HttpMethod,
        endpoint: str,
        *,
        params: QueryParams = None,
        json: Any = None,
    ) -> Any:
        """
        Issue one request and return the decoded JSON body.

        Raises:
            httpx.HTTPStatusError: On non-2xx responses
            httpx.RequestError: On network errors and timeouts
        """
        response = await self._http.request(
            method.upper(),
            endpoint,
            params=build_query_params(params),
            json=self._to_json(json) if json is not None else None,
        )
        response.raise_for_status()
        if not response.content:
            return None
        return response.json()

    # =========================================================================
    # Read operations
    # =========================================================================

    async def get_all(self, params: QueryParams = None) -> list[T]:
        """
        GET the base path.

        Args:
            params: Optional query parameters

        Returns:
            Unwrapped ``data`` list
        """
        body = await self._request("get", self.base_path, params=params)
        return unwrap_data(body)

    async def get_paginated(self, params: QueryParams = None) -> PaginatedApiResponse[T]:
        """
        GET ``{base}/many`` and keep the pagination metadata.

        No default ``page``/``limit`` is imposed; callers supply them.

        Returns:
            Full paginated envelope (``data`` + ``pagination``)
        """
        body = await self._request("get", self._url("many"), params=params)
        return PaginatedApiResponse[Record].model_validate(body)

    async def get_many(self, params: QueryParams = None) -> list[T]:
        """
        GET ``{base}/many`` and return only the records.

        Accepts both the paginated envelope and the legacy plain envelope.
        """
        body = await self._request("get", self._url("many"), params=params)
        return unwrap_many(body)

    async def get_by_id(self, id: str) -> T:
        """
        GET ``{base}/{id}``.

        Raises:
            httpx.HTTPStatusError: 404 when the record does not exist
            ValueError: If ``id`` is empty
        """
        body = await self._request("get", self._item_url(id))
        return unwrap_data(body)

    # =========================================================================
    # Write operations
    # =========================================================================

    async def create(self, data: Payload) -> T:
        body = await self._request("post", self.base_path, json=data)
        return unwrap_data(body)

    async def create_many(self, items: Sequence[Payload]) -> list[T]:
        """POST ``{base}/createMany``. Tolerates an enveloped or a raw array response."""
        body = await self._request("post", self._url("createMany"), json=list(items))
        return unwrap_or_raw(body)

    async def update(self, id: str, data: Payload) -> T:
        body = await self._request("put", self._item_url(id), json=data)
        return unwrap_data(body)

    async def update_many(self, ids: Sequence[str], data: Payload) -> list[T]:
        """PATCH ``{base}/many``, applying the same partial ``data`` to every id."""
        payload = {"ids": list(ids), "data": self._to_json(data)}
        body = await self._request("patch", self._url("many"), json=payload)
        return unwrap_or_raw(body)

    async def delete(self, id: str) -> Any:
        """DELETE ``{base}/{id}``. The unwrapped body is resource-specific."""
        body = await self._request("delete", self._item_url(id))
        if isinstance(body, dict):
            return body.get("data")
        return body

    # =========================================================================
    # Escape hatch for non-CRUD endpoints
    # =========================================================================

    async def _get_full_response(
        self,
        endpoint: str,
        method: HttpMethod = "get",
        params: Mapping[str, Any] | BaseModel | None = None,
    ) -> ApiResponse[Any]:
        """
        Call an arbitrary endpoint and return the whole ``{code, data, msg}`` envelope.

        GET sends ``params`` as the query string. POST, PUT, PATCH and DELETE
        send it as the JSON body.

        Args:
            endpoint: Absolute API path (not necessarily under ``base_path``)
            method: HTTP method
            params: Query parameters or request body

        Returns:
            Parsed ``ApiResponse``
        """
        if method == "get":
            body = await self._request("get", endpoint, params=params)
        else:
            body = await self._request(method, endpoint, json=params)
        return ApiResponse[Any].model_validate(body)
