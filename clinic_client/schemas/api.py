"""
Envelope and query-parameter models shared by every resource client.

The backend wraps single-resource responses as ``{code, data, msg}`` and list
responses from ``/many`` endpoints as ``{data, pagination, message?, success?}``.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")

Record = dict[str, Any]


class ApiResponse(BaseModel, Generic[T]):
    """Single-resource envelope."""

    model_config = ConfigDict(extra="allow")

    code: int
    data: T
    msg: str = ""


class PaginationInfo(BaseModel):
    """
    Pagination metadata returned by list endpoints.

    ``total_pages == ceil(total / limit)`` is guaranteed by the backend and is
    not re-checked here.
    """

    model_config = ConfigDict(populate_by_name=True)

    total: int = Field(..., ge=0)
    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0, alias="totalPages")


class PaginatedApiResponse(BaseModel, Generic[T]):
    """List envelope carrying pagination metadata."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    data: list[T]
    pagination: PaginationInfo
    message: str | None = None
    success: bool | None = None


class PopulateOptions(BaseModel):
    """Asks the backend to expand a foreign-key path into the referenced record."""

    path: str
    select: str | None = None


class PaginationParams(BaseModel):
    page: int | None = Field(None, ge=1)
    limit: int | None = Field(None, ge=1)


class QueryOptions(BaseModel):
    """
    Server-side query shape sent as the JSON ``options`` query parameter.

    Filter values (including operators such as ``$regex`` or ``$gte``) are
    forwarded verbatim.
    """

    model_config = ConfigDict(populate_by_name=True)

    filter: dict[str, Any] | None = None
    sort: dict[str, Any] | None = None
    pagination: PaginationParams | None = None
    populate_options: PopulateOptions | None = Field(None, alias="populateOptions")

    def to_query_value(self) -> str:
        return json.dumps(self.model_dump(by_alias=True, exclude_none=True))


class GetManyParams(BaseModel):
    options: QueryOptions | None = None
    page: int | None = Field(None, ge=1)
    limit: int | None = Field(None, ge=1)

    def to_query_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {}
        if self.options is not None:
            params["options"] = self.options.to_query_value()
        if self.page is not None:
            params["page"] = self.page
        if self.limit is not None:
            params["limit"] = self.limit
        return params


HttpMethod = Literal["get", "post", "put", "patch", "delete"]


def build_query_params(params: BaseModel | Mapping[str, Any] | None) -> dict[str, Any] | None:
    """
    Normalize caller parameters into an httpx-compatible query mapping.

    Nested mappings and option models are JSON-encoded, booleans become
    ``"true"``/``"false"`` and ``None`` values are dropped.
    """
    if params is None:
        return None
    if isinstance(params, GetManyParams):
        return params.to_query_params()
    if isinstance(params, BaseModel):
        params = params.model_dump(by_alias=True, exclude_none=True)

    query: dict[str, Any] = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, QueryOptions):
            query[key] = value.to_query_value()
        elif isinstance(value, BaseModel):
            query[key] = json.dumps(value.model_dump(by_alias=True, exclude_none=True))
        elif isinstance(value, dict):
            query[key] = json.dumps(value)
        elif isinstance(value, bool):
            query[key] = "true" if value else "false"
        else:
            query[key] = value
    return query
