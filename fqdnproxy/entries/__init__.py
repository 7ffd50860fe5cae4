"""Stored FQDN query configurations."""

from fqdnproxy.entries.models import Entry, empty_entry, entry_to_dict
from fqdnproxy.entries.store import (
    EntryStore,
    PostgresEntryStore,
    SQLiteEntryStore,
    build_store,
)

__all__ = [
    "Entry",
    "EntryStore",
    "PostgresEntryStore",
    "SQLiteEntryStore",
    "build_store",
    "empty_entry",
    "entry_to_dict",
]
