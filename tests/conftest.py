"""
Shared pytest fixtures for all tests.

HTTP traffic is served by ``MockBackend`` through ``httpx.MockTransport`` so
clients run their real request/response code without a network.
"""

import json
from typing import Any, AsyncGenerator, Callable, Dict, List, Tuple, Union

import httpx
import pytest
import pytest_asyncio

from clinic_client.config.settings import Settings

Route = Union[Tuple[int, Any], Callable[[httpx.Request], Any]]


# ============================================================================
# MOCK BACKEND
# ============================================================================


class MockBackend:
    """
    Route table keyed by ``(METHOD, path)``.

    Unregistered routes answer 404. Every request is recorded in ``requests``.
    """

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Route] = {}
        self.requests: List[httpx.Request] = []

    def add(self, method: str, path: str, body: Any = None, status_code: int = 200) -> None:
        self.routes[(method.upper(), path)] = (status_code, body)

    def add_handler(self, method: str, path: str, handler: Callable[[httpx.Request], Any]) -> None:
        self.routes[(method.upper(), path)] = handler

    async def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": "Not Found"})
        if callable(route):
            response = route(request)
            if not isinstance(response, httpx.Response):
                response = await response
            return response
        status_code, body = route
        if body is None:
            return httpx.Response(status_code)
        return httpx.Response(status_code, json=body)

    def paths(self, method: str | None = None) -> List[str]:
        return [r.url.path for r in self.requests if method is None or r.method == method.upper()]

    @staticmethod
    def json_body(request: httpx.Request) -> Any:
        return json.loads(request.content)


@pytest.fixture
def backend() -> MockBackend:
    """Fresh route table per test."""
    return MockBackend()


@pytest.fixture
def transport(backend: MockBackend) -> httpx.MockTransport:
    return httpx.MockTransport(backend.handle)


@pytest_asyncio.fixture
async def http_client(transport: httpx.MockTransport) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Bare async client bound to the mock backend."""
    async with httpx.AsyncClient(base_url="http://test", transport=transport) as client:
        yield client


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the developer's environment and .env file."""
    return Settings(
        _env_file=None,
        CLINIC_API_BASE_URL="http://test",
        CLINIC_API_ACCESS_TOKEN="access-1",
        CLINIC_API_REFRESH_TOKEN="refresh-1",
    )

