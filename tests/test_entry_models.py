"""Tests for fqdnproxy.entries.models — shape converters."""

from datetime import datetime

from fqdnproxy.entries.models import (
    ENTRY_FIELDS,
    Entry,
    empty_entry,
    entry_to_dict,
    redact_entry,
)


class TestEntry:
    def test_from_mapping_ignores_unknown_keys(self):
        entry = Entry.from_mapping({"fqdn": "a.com", "mimeType": "text/plain", "timeout": 3})
        assert entry.fqdn == "a.com"
        assert entry.params() == ("a.com",) + (None,) * (len(ENTRY_FIELDS) - 1)

    def test_from_mapping_missing_fqdn(self):
        assert Entry.from_mapping({}).fqdn == ""

    def test_blank_as_null(self):
        entry = Entry.from_mapping({"fqdn": "a.com", "comments": "", "parameters": "/x"}, blank_as_null=True)
        assert entry.comments is None
        assert entry.parameters == "/x"

    def test_params_order(self):
        entry = Entry("a.com", "m", "p", "s", "e", "/x", "c")
        assert entry.params() == ("a.com", "m", "p", "s", "e", "/x", "c")


class TestConverters:
    def test_entry_to_dict(self):
        ts = datetime(2026, 2, 11, 8, 30)
        row = {"fqdn": "a.com", "user_mail": None, "created_at": ts, "last_updated": "2026-02-11T08:30:00.000Z"}
        d = entry_to_dict(row)
        assert d["user_mail"] == ""
        assert d["created_at"] == "2026-02-11T08:30:00"
        assert d["last_updated"] == "2026-02-11T08:30:00.000Z"
        assert set(d) == set(ENTRY_FIELDS) | {"created_at", "last_updated"}

    def test_empty_entry(self):
        d = empty_entry("x.com")
        assert d["fqdn"] == "x.com"
        assert all(v == "" for k, v in d.items() if k != "fqdn")

    def test_redact_entry(self):
        data = {"fqdn": "a.com", "user_password": "hunter2"}
        safe = redact_entry(data)
        assert safe["user_password"] == "[REDACTED]"
        assert data["user_password"] == "hunter2"

    def test_redact_leaves_empty_password(self):
        assert redact_entry({"user_password": ""})["user_password"] == ""
