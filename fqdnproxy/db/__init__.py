"""Database connection management for fqdnproxy."""

from fqdnproxy.db.connection import close_pool, create_pool, get_connection
from fqdnproxy.db.sqlite import connect_sqlite

__all__ = ["close_pool", "connect_sqlite", "create_pool", "get_connection"]
