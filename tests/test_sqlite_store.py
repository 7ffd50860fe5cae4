"""Tests for SQLiteEntryStore — runs against an in-memory database."""

from __future__ import annotations

import threading

import pytest

from fqdnproxy.entries.models import Entry
from fqdnproxy.entries.store import SQLiteEntryStore
from fqdnproxy.errors import NotFoundError, StoreError, ValidationError


def _entry(fqdn: str = "api.example.com", **fields) -> Entry:
    defaults = {
        "user_mail": "ops@example.com",
        "user_password": "s3cret",
        "start_date": "2026-01-01",
        "end_date": "2026-01-31",
        "parameters": "/v1/events?limit=10",
        "comments": "first",
    }
    defaults.update(fields)
    return Entry(fqdn=fqdn, **defaults)


class TestListFqdns:
    def test_empty(self, store):
        assert store.list_fqdns() == []

    def test_sorted(self, store):
        store.upsert_entry(_entry("b.com"))
        store.upsert_entry(_entry("a.com"))
        assert store.list_fqdns() == ["a.com", "b.com"]


class TestGetEntry:
    def test_missing_returns_stub(self, store):
        entry = store.get_entry("missing.com")
        assert entry["fqdn"] == "missing.com"
        assert entry["user_mail"] == ""
        assert entry["user_password"] == ""
        assert entry["parameters"] == ""
        assert entry["created_at"] == ""

    def test_roundtrip_fields(self, store):
        store.upsert_entry(_entry())
        entry = store.get_entry("api.example.com")
        assert entry["user_mail"] == "ops@example.com"
        assert entry["user_password"] == "s3cret"
        assert entry["parameters"] == "/v1/events?limit=10"
        assert entry["created_at"]
        assert entry["last_updated"]

    def test_null_columns_render_empty(self, store):
        store.upsert_entry(Entry(fqdn="bare.com"))
        entry = store.get_entry("bare.com")
        assert entry["comments"] == ""
        assert entry["start_date"] == ""


class TestUpsertEntry:
    def test_upsert_twice_keeps_one_row(self, store):
        store.upsert_entry(_entry(comments="first"))
        first = store.get_entry("api.example.com")

        store.upsert_entry(_entry(comments="second"))
        second = store.get_entry("api.example.com")

        assert store.list_fqdns() == ["api.example.com"]
        assert second["comments"] == "second"
        assert second["last_updated"] >= first["last_updated"]
        assert second["created_at"] == first["created_at"]

    def test_overwrites_every_field(self, store):
        store.upsert_entry(_entry())
        store.upsert_entry(Entry(fqdn="api.example.com", parameters="/v2"))
        entry = store.get_entry("api.example.com")
        assert entry["parameters"] == "/v2"
        assert entry["user_mail"] == ""
        assert entry["comments"] == ""

    def test_empty_fqdn_rejected(self, store):
        with pytest.raises(ValidationError):
            store.upsert_entry(Entry(fqdn=""))
        assert store.list_fqdns() == []


class TestDeleteEntry:
    def test_missing_raises(self, store):
        with pytest.raises(NotFoundError):
            store.delete_entry("nope.com")

    def test_delete_then_get_returns_stub(self, store):
        store.upsert_entry(_entry())
        store.delete_entry("api.example.com")
        entry = store.get_entry("api.example.com")
        assert entry["user_mail"] == ""
        assert store.list_fqdns() == []


class TestHealthAndErrors:
    def test_health_ok(self, store):
        assert store.check_health() == {"status": "ok"}

    def test_health_after_close(self):
        s = SQLiteEntryStore(":memory:")
        s.close()
        h = s.check_health()
        assert h["status"] == "error"
        assert h["error"]

    def test_missing_table_is_store_error(self):
        s = SQLiteEntryStore(":memory:")
        with pytest.raises(StoreError):
            s.list_fqdns()
        s.close()

    def test_file_backed(self, tmp_path):
        path = tmp_path / "nested" / "auu.db"
        s = SQLiteEntryStore(path)
        s.init_schema()
        s.upsert_entry(_entry())
        s.close()

        reopened = SQLiteEntryStore(path)
        assert reopened.list_fqdns() == ["api.example.com"]
        reopened.close()


def test_concurrent_upserts_last_writer_wins(store):
    def save(n: int) -> None:
        store.upsert_entry(_entry(comments=f"writer-{n}"))

    threads = [threading.Thread(target=save, args=(n,)) for n in range(8)]
    for th in threads:
        th.start()
    for th in threads:
        th.join()

    assert store.list_fqdns() == ["api.example.com"]
    assert store.get_entry("api.example.com")["comments"].startswith("writer-")
