"""SQLite connection factory for the embedded entry store."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)

MEMORY = ":memory:"


def connect_sqlite(path: str | Path) -> sqlite3.Connection:
    """Open a SQLite database with a dict-friendly row factory.

    The connection may be used from any thread; callers serialize access.
    Parent directories are created for file-backed databases.
    """
    if str(path) != MEMORY:
        Path(path).parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(path), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    logger.info("Connected to SQLite database at %s", path)
    return conn
