"""
fqdnproxy API — FastAPI app serving stored query configurations and the proxy.

The entry store and the outbound HTTP client are injected; anything not
supplied is built from configuration when the app starts and closed when it
stops.

Start:
  fqdnproxy serve
  # or
  uvicorn --factory fqdnproxy.api.app:create_app --host 0.0.0.0 --port 3000
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fqdnproxy import __version__
from fqdnproxy.api.errors import register_exception_handlers
from fqdnproxy.api.middleware import CorrelationMiddleware
from fqdnproxy.api.routers import entries, health, query
from fqdnproxy.audit.trace import configure_trace_log
from fqdnproxy.config import Config, get_config
from fqdnproxy.entries.store import EntryStore, build_store
from fqdnproxy.proxy.executor import ProxyExecutor

logger = logging.getLogger(__name__)


def create_app(
    store: EntryStore | None = None,
    http_client: httpx.AsyncClient | None = None,
    config: Config | None = None,
) -> FastAPI:
    cfg = config or get_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned_store = owned_client = None
        if cfg.trace_log is not None:
            configure_trace_log(cfg.trace_log)

        if getattr(app.state, "store", None) is None:
            owned_store = build_store(cfg.db)
            owned_store.init_schema()
            app.state.store = owned_store

        if getattr(app.state, "executor", None) is None:
            owned_client = httpx.AsyncClient(
                verify=cfg.proxy.verify_tls,
                timeout=cfg.proxy.timeout,
            )
            app.state.executor = ProxyExecutor(
                owned_client,
                default_timeout=cfg.proxy.timeout,
                default_accept=cfg.proxy.default_accept,
            )

        logger.info("fqdnproxy %s ready (store=%s)", __version__, type(app.state.store).__name__)
        yield

        if owned_client is not None:
            await owned_client.aclose()
            app.state.executor = None
        if owned_store is not None:
            owned_store.close()
            app.state.store = None
        logger.info("fqdnproxy shut down")

    app = FastAPI(title="fqdnproxy", version=__version__, lifespan=lifespan)

    app.state.store = store
    app.state.executor = (
        ProxyExecutor(
            http_client,
            default_timeout=cfg.proxy.timeout,
            default_accept=cfg.proxy.default_accept,
        )
        if http_client is not None
        else None
    )

    app.add_middleware(CorrelationMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(cfg.server.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(entries.router)
    app.include_router(query.router)
    app.include_router(health.router)
    return app
