"""DDL for the ``auu_queries`` table, one dialect per backend."""

TABLE = "auu_queries"

SQLITE_SCHEMA = f"""
CREATE TABLE IF NOT EXISTS {TABLE} (
    fqdn TEXT PRIMARY KEY,
    user_mail TEXT,
    user_password TEXT,
    start_date TEXT,
    end_date TEXT,
    parameters TEXT,
    comments TEXT,
    created_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now')),
    last_updated TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
)
"""

POSTGRES_SCHEMA = f"""
CREATE TABLE IF NOT EXISTS {TABLE} (
    fqdn TEXT PRIMARY KEY,
    user_mail TEXT,
    user_password TEXT,
    start_date TEXT,
    end_date TEXT,
    parameters TEXT,
    comments TEXT,
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    last_updated TIMESTAMPTZ NOT NULL DEFAULT NOW()
)
"""
