"""
Entry model and response-shape converters.

Converts raw database rows (sqlite3.Row or RealDictCursor dicts) into the
JSON shape returned by the API: every field a string, NULL rendered as "".

Usage:
    from fqdnproxy.entries.models import Entry, entry_to_dict

    row = cursor.fetchone()
    response = entry_to_dict(row)
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

# Columns written by an upsert, in SQL parameter order
ENTRY_FIELDS = (
    "fqdn",
    "user_mail",
    "user_password",
    "start_date",
    "end_date",
    "parameters",
    "comments",
)
TIMESTAMP_FIELDS = ("created_at", "last_updated")

REDACTED = "[REDACTED]"


@dataclass
class Entry:
    """One stored query configuration, keyed by ``fqdn``."""

    fqdn: str
    user_mail: str | None = None
    user_password: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    parameters: str | None = None
    comments: str | None = None

    @classmethod
    def from_mapping(cls, data: dict[str, Any], *, blank_as_null: bool = False) -> Entry:
        """Build an Entry from a request body or row, ignoring unknown keys.

        With ``blank_as_null`` empty optional fields are stored as NULL.
        """
        values = {}
        for name in ENTRY_FIELDS:
            value = data.get(name)
            if blank_as_null and name != "fqdn" and value == "":
                value = None
            values[name] = value
        values["fqdn"] = values["fqdn"] or ""
        return cls(**values)

    def params(self) -> tuple:
        """Column values in ENTRY_FIELDS order."""
        return tuple(getattr(self, name) for name in ENTRY_FIELDS)


def _timestamp(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def entry_to_dict(row: Any) -> dict:
    """Convert an ``auu_queries`` row to API response shape."""
    row = dict(row)
    result = {name: row.get(name) or "" for name in ENTRY_FIELDS}
    for name in TIMESTAMP_FIELDS:
        result[name] = _timestamp(row.get(name))
    return result


def empty_entry(fqdn: str) -> dict:
    """Zero-valued entry returned for an fqdn with no stored row."""
    result = {name: "" for name in ENTRY_FIELDS + TIMESTAMP_FIELDS}
    result["fqdn"] = fqdn
    return result


def redact_entry(data: dict) -> dict:
    """Copy of an entry-shaped dict with the password masked, for logging."""
    safe = dict(data)
    if safe.get("user_password"):
        safe["user_password"] = REDACTED
    return safe
