"""
Connection pooling for the PostgreSQL entry store.

The pool is created once by whoever builds the store and handed to it;
nothing here is process-global. psycopg2's ThreadedConnectionPool is safe to
share between the threadpool workers that run store calls.

Usage:
    from fqdnproxy.db import create_pool, get_connection

    pool = create_pool()
    with get_connection(pool) as conn:
        with conn.cursor() as cur:
            cur.execute("SELECT 1")
"""

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager

import psycopg2
import psycopg2.pool

from fqdnproxy.config import DatabaseConfig, get_config

logger = logging.getLogger(__name__)


def create_pool(cfg: DatabaseConfig | None = None) -> psycopg2.pool.ThreadedConnectionPool:
    """Create a connection pool for the configured PostgreSQL database."""
    cfg = cfg or get_config().db
    logger.info(
        "Creating connection pool: %s@%s:%s/%s (min=%d, max=%d)",
        cfg.user,
        cfg.host or "<socket>",
        cfg.port,
        cfg.name,
        cfg.min_conn,
        cfg.max_conn,
    )
    try:
        return psycopg2.pool.ThreadedConnectionPool(
            minconn=cfg.min_conn,
            maxconn=cfg.max_conn,
            **cfg.dict,
        )
    except psycopg2.OperationalError as e:
        raise ConnectionError(
            f"Cannot connect to PostgreSQL at {cfg.host or '<socket>'}:{cfg.port}/{cfg.name}: {e}\n"
            f"Check FQDNPROXY_DB_* environment variables and ensure PostgreSQL is running."
        ) from e


@contextmanager
def get_connection(
    pool: psycopg2.pool.AbstractConnectionPool,
    autocommit: bool = False,
) -> Generator[psycopg2.extensions.connection, None, None]:
    """Borrow a connection from ``pool``.

    The transaction is committed on normal exit and rolled back on exception;
    the connection always goes back to the pool.
    """
    conn = pool.getconn()
    try:
        if autocommit:
            conn.autocommit = True
        yield conn
        if not autocommit:
            conn.commit()
    except Exception:
        if not autocommit:
            conn.rollback()
        raise
    finally:
        if autocommit:
            conn.autocommit = False
        pool.putconn(conn)


def close_pool(pool: psycopg2.pool.AbstractConnectionPool | None) -> None:
    """Close all connections in the pool."""
    if pool is not None and not pool.closed:
        pool.closeall()
