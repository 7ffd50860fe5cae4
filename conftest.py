"""
Root-level shared test fixtures.

Inherited by every suite under tests/.
"""

from __future__ import annotations

import uuid

import pytest


@pytest.fixture
def test_prefix():
    """Unique prefix for test isolation."""
    return f"test_{uuid.uuid4().hex[:8]}"


@pytest.fixture
def clean_env(monkeypatch):
    """Remove fqdnproxy env vars that leak between tests."""
    for key in [
        "FQDNPROXY_DATA_DIR",
        "FQDNPROXY_DB_BACKEND",
        "FQDNPROXY_SQLITE_PATH",
        "FQDNPROXY_DB_HOST",
        "FQDNPROXY_DB_PORT",
        "FQDNPROXY_DB_NAME",
        "FQDNPROXY_DB_USER",
        "FQDNPROXY_DB_PASSWORD",
        "FQDNPROXY_PROXY_TIMEOUT",
        "FQDNPROXY_VERIFY_TLS",
        "FQDNPROXY_DEFAULT_ACCEPT",
        "FQDNPROXY_TRACE_LOG",
        "FQDNPROXY_HOST",
        "FQDNPROXY_PORT",
        "FQDNPROXY_CORS_ORIGINS",
        "FQDNPROXY_LOG_LEVEL",
    ]:
        monkeypatch.delenv(key, raising=False)
