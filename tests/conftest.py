"""
Shared fixtures for the fqdnproxy test suite.

Provides an in-memory SQLite store, a scriptable fake upstream host built on
httpx.MockTransport, and an async client driving the FastAPI app in-process.
"""

from __future__ import annotations

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport

from fqdnproxy.api.app import create_app
from fqdnproxy.audit.trace import configure_trace_log
from fqdnproxy.config import Config, reset_config
from fqdnproxy.entries.store import SQLiteEntryStore


@pytest.fixture(autouse=True)
def clean_config():
    """Reset the config singleton and trace handler between tests."""
    reset_config()
    yield
    reset_config()
    configure_trace_log(None)


@pytest.fixture
def store():
    """Fresh in-memory SQLite store with the schema created."""
    s = SQLiteEntryStore(":memory:")
    s.init_schema()
    yield s
    s.close()


class FakeUpstream:
    """Records outbound requests and answers them with a configurable handler."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.handler = lambda request: httpx.Response(200, json=[])

    def respond_with(self, handler) -> None:
        self.handler = handler

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        result = self.handler(request)
        if hasattr(result, "__await__"):
            result = await result
        return result


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest_asyncio.fixture
async def upstream_client(upstream):
    """httpx.AsyncClient whose every request is answered by ``upstream``."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(upstream)) as client:
        yield client


@pytest_asyncio.fixture
async def test_client(store, upstream_client):
    """Async HTTP client wrapping the FastAPI app via ASGITransport."""
    app = create_app(store=store, http_client=upstream_client, config=Config())
    transport = ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
