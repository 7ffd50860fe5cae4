"""API dependency injection — shared FastAPI dependencies."""

from __future__ import annotations

from fastapi import Request

from fqdnproxy.entries.store import EntryStore
from fqdnproxy.proxy.executor import ProxyExecutor


def get_store(request: Request) -> EntryStore:
    """The entry store attached to the application."""
    return request.app.state.store


def get_executor(request: Request) -> ProxyExecutor:
    """The proxy executor attached to the application."""
    return request.app.state.executor
