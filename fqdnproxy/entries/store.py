"""
Entry Store — insert-or-update persistence for FQDN query configurations.

One interface, two backends:

  SQLiteEntryStore    embedded database, one connection serialized by a lock
  PostgresEntryStore  client-server database through a psycopg2 pool

Both upsert on ``fqdn`` with a single ON CONFLICT statement, so concurrent
saves of the same fqdn are last-writer-wins. Driver errors surface as
StoreError.

Usage:
    from fqdnproxy.entries.store import build_store

    store = build_store()
    store.init_schema()
    store.upsert_entry(Entry(fqdn="api.example.com", parameters="/v1/events"))
    store.list_fqdns()  # ["api.example.com"]
"""

from __future__ import annotations

import logging
import sqlite3
import threading
from abc import ABC, abstractmethod
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

import psycopg2
import psycopg2.pool
from psycopg2.extras import RealDictCursor

from fqdnproxy.config import DatabaseConfig, get_config
from fqdnproxy.db.connection import close_pool, create_pool, get_connection
from fqdnproxy.db.schema import POSTGRES_SCHEMA, SQLITE_SCHEMA, TABLE
from fqdnproxy.db.sqlite import MEMORY, connect_sqlite
from fqdnproxy.entries.models import ENTRY_FIELDS, Entry, empty_entry, entry_to_dict
from fqdnproxy.errors import NotFoundError, StoreError, ValidationError

logger = logging.getLogger(__name__)

_COLUMNS = ", ".join(ENTRY_FIELDS)
_UPDATES = ",\n        ".join(f"{name} = excluded.{name}" for name in ENTRY_FIELDS[1:])


def _upsert_sql(placeholder: str, now: str) -> str:
    values = ", ".join([placeholder] * len(ENTRY_FIELDS))
    return f"""
    INSERT INTO {TABLE} ({_COLUMNS}, last_updated)
    VALUES ({values}, {now})
    ON CONFLICT (fqdn) DO UPDATE SET
        {_UPDATES},
        last_updated = {now}
    """


def _require_fqdn(entry: Entry) -> None:
    if not entry.fqdn:
        raise ValidationError("FQDN is required")


class EntryStore(ABC):
    """Storage contract shared by every backend."""

    @abstractmethod
    def init_schema(self) -> None:
        """Create the entries table if it does not exist."""

    @abstractmethod
    def list_fqdns(self) -> list[str]:
        """All stored fqdns, sorted ascending."""

    @abstractmethod
    def get_entry(self, fqdn: str) -> dict:
        """The stored entry, or a zero-valued entry echoing ``fqdn``."""

    @abstractmethod
    def upsert_entry(self, entry: Entry) -> None:
        """Insert, or overwrite everything but ``created_at``; refreshes ``last_updated``."""

    @abstractmethod
    def delete_entry(self, fqdn: str) -> None:
        """Remove the entry. Raises NotFoundError if nothing matched."""

    @abstractmethod
    def check_health(self) -> dict:
        """Return ``{"status": "ok"}`` or ``{"status": "error", "error": ...}``. Never raises."""

    def close(self) -> None:
        """Release connections held by the store."""


# ─── SQLite ──────────────────────────────────────────────────────────────


class SQLiteEntryStore(EntryStore):
    """Entry store on a single SQLite connection.

    All statements run under one lock, which is how concurrent callers are
    serialized; ``":memory:"`` gives an isolated store for tests.
    """

    _NOW = "strftime('%Y-%m-%dT%H:%M:%fZ', 'now')"

    def __init__(self, path: str | Path = MEMORY) -> None:
        self.path = str(path)
        self._conn = connect_sqlite(path)
        self._lock = threading.Lock()

    @contextmanager
    def _cursor(self) -> Generator[sqlite3.Cursor, None, None]:
        with self._lock:
            try:
                with self._conn:
                    yield self._conn.cursor()
            except sqlite3.Error as e:
                raise StoreError(str(e)) from e

    def init_schema(self) -> None:
        with self._cursor() as cur:
            cur.execute(SQLITE_SCHEMA)
        logger.info("%s table created or already exists (sqlite %s)", TABLE, self.path)

    def list_fqdns(self) -> list[str]:
        with self._cursor() as cur:
            cur.execute(f"SELECT fqdn FROM {TABLE} ORDER BY fqdn")
            return [row["fqdn"] for row in cur.fetchall()]

    def get_entry(self, fqdn: str) -> dict:
        with self._cursor() as cur:
            cur.execute(f"SELECT * FROM {TABLE} WHERE fqdn = ?", (fqdn,))
            row = cur.fetchone()
        if row is None:
            return empty_entry(fqdn)
        return entry_to_dict(row)

    def upsert_entry(self, entry: Entry) -> None:
        _require_fqdn(entry)
        with self._cursor() as cur:
            cur.execute(_upsert_sql("?", self._NOW), entry.params())

    def delete_entry(self, fqdn: str) -> None:
        with self._cursor() as cur:
            cur.execute(f"DELETE FROM {TABLE} WHERE fqdn = ?", (fqdn,))
            deleted = cur.rowcount
        if deleted == 0:
            raise NotFoundError("FQDN not found")

    def check_health(self) -> dict:
        try:
            with self._cursor() as cur:
                cur.execute("SELECT 1")
            return {"status": "ok"}
        except Exception as e:
            return {"status": "error", "error": str(e)}

    def close(self) -> None:
        with self._lock:
            self._conn.close()


# ─── PostgreSQL ──────────────────────────────────────────────────────────


class PostgresEntryStore(EntryStore):
    """Entry store on a psycopg2 connection pool."""

    def __init__(self, pool: psycopg2.pool.AbstractConnectionPool) -> None:
        self._pool = pool

    @classmethod
    def from_config(cls, cfg: DatabaseConfig | None = None) -> PostgresEntryStore:
        return cls(create_pool(cfg))

    @contextmanager
    def _cursor(self) -> Generator[RealDictCursor, None, None]:
        try:
            with get_connection(self._pool) as conn:
                with conn.cursor(cursor_factory=RealDictCursor) as cur:
                    yield cur
        except psycopg2.Error as e:
            raise StoreError(str(e).strip()) from e

    def init_schema(self) -> None:
        with self._cursor() as cur:
            cur.execute(POSTGRES_SCHEMA)
        logger.info("%s table created or already exists (postgres)", TABLE)

    def list_fqdns(self) -> list[str]:
        with self._cursor() as cur:
            cur.execute(f'SELECT fqdn FROM {TABLE} ORDER BY fqdn COLLATE "C"')
            return [row["fqdn"] for row in cur.fetchall()]

    def get_entry(self, fqdn: str) -> dict:
        with self._cursor() as cur:
            cur.execute(f"SELECT * FROM {TABLE} WHERE fqdn = %s", (fqdn,))
            row = cur.fetchone()
        if row is None:
            return empty_entry(fqdn)
        return entry_to_dict(row)

    def upsert_entry(self, entry: Entry) -> None:
        _require_fqdn(entry)
        with self._cursor() as cur:
            cur.execute(_upsert_sql("%s", "NOW()"), entry.params())

    def delete_entry(self, fqdn: str) -> None:
        with self._cursor() as cur:
            cur.execute(f"DELETE FROM {TABLE} WHERE fqdn = %s", (fqdn,))
            deleted = cur.rowcount
        if deleted == 0:
            raise NotFoundError("FQDN not found")

    def check_health(self) -> dict:
        try:
            with self._cursor() as cur:
                cur.execute("SELECT 1")
            return {"status": "ok"}
        except Exception as e:
            return {"status": "error", "error": str(e)}

    def close(self) -> None:
        close_pool(self._pool)


def build_store(cfg: DatabaseConfig | None = None) -> EntryStore:
    """Create the store selected by ``FQDNPROXY_DB_BACKEND``."""
    cfg = cfg or get_config().db
    if cfg.backend == "postgres":
        return PostgresEntryStore.from_config(cfg)
    return SQLiteEntryStore(cfg.sqlite_path)
