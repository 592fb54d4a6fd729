"""
Envelope discrimination and unwrapping.

``/many`` endpoints have answered with two shapes over time:

- paginated: ``{"data": [...], "pagination": {...}}``
- plain: ``{"code": 200, "data": [...], "msg": "..."}`` (legacy)

The paginated shape is the contract. The plain shape is accepted through
``_unwrap_plain_list`` as a compatibility shim only.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ManyResponseKind(str, Enum):
    PAGINATED = "paginated"
    PLAIN = "plain"


def classify_many_response(body: Any) -> ManyResponseKind:
    """Presence of a ``pagination`` key selects the paginated variant."""
    if isinstance(body, dict) and "pagination" in body:
        return ManyResponseKind.PAGINATED
    return ManyResponseKind.PLAIN


def unwrap_many(body: Any) -> list[Any]:
    """Return the record list from either ``/many`` response variant."""
    if classify_many_response(body) is ManyResponseKind.PAGINATED:
        return body["data"]
    return _unwrap_plain_list(body)


def _unwrap_plain_list(body: Any) -> list[Any]:
    # Compatibility shim for the legacy plain envelope (or a bare array).
    return unwrap_or_raw(body)


def unwrap_data(body: Any) -> Any:
    """Unwrap a ``{code, data, msg}`` envelope. A missing ``data`` key is a contract violation."""
    if not isinstance(body, dict) or "data" not in body:
        raise ValueError(f"Response is not an envelope: {type(body).__name__}")
    return body["data"]


def unwrap_or_raw(body: Any) -> Any:
    """Envelope ``data`` when present and not null, otherwise the body itself."""
    if isinstance(body, dict) and body.get("data") is not None:
        return body["data"]
    return body


def unwrap_nested_envelope(body: Any) -> Any:
    """
    Peel an ``ApiResponse`` wrapped around another envelope.

    Some endpoints answer ``{code, data: {data, pagination}, msg}`` while others
    answer the inner object directly.
    """
    if isinstance(body, dict) and "code" in body and isinstance(body.get("data"), dict):
        return body["data"]
    return body
