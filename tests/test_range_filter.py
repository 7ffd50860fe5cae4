"""Tests for fqdnproxy.proxy.range_filter."""

from __future__ import annotations

from datetime import datetime, timezone

from fqdnproxy.proxy.range_filter import filter_by_range, to_epoch_ms


def t(ms: int) -> str:
    """ISO-8601 string for an epoch-millisecond instant."""
    dt = datetime.fromtimestamp(ms / 1000, tz=timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


SAMPLE = [
    {"timestamp_epoch_ms": 100},
    {"timestamp_epoch_ms": 200},
    {"timestamp_epoch_ms": 300},
]


class TestToEpochMs:
    def test_date_only_is_utc_midnight(self):
        assert to_epoch_ms("1970-01-02") == 86_400_000

    def test_zulu_with_millis(self):
        assert to_epoch_ms("1970-01-01T00:00:00.150Z") == 150

    def test_offset(self):
        assert to_epoch_ms("1970-01-01T01:00:00+01:00") == 0

    def test_naive_datetime_is_utc(self):
        assert to_epoch_ms("2026-02-27T07:00:00") == to_epoch_ms("2026-02-27T07:00:00Z")

    def test_number_passthrough(self):
        assert to_epoch_ms(1709000000000) == 1709000000000

    def test_invalid(self):
        assert to_epoch_ms("not-a-date") is None
        assert to_epoch_ms(None) is None
        assert to_epoch_ms(True) is None
        assert to_epoch_ms(float("nan")) is None


class TestFilterByRange:
    def test_window_keeps_inner_element(self):
        assert filter_by_range(SAMPLE, t(150), t(250)) == [{"timestamp_epoch_ms": 200}]

    def test_bounds_are_inclusive(self):
        assert filter_by_range(SAMPLE, t(100), t(300)) == SAMPLE

    def test_preserves_order(self):
        data = [{"timestamp_epoch_ms": 300, "id": "c"}, {"timestamp_epoch_ms": 100, "id": "a"}]
        result = filter_by_range(data, t(0), t(1000))
        assert [r["id"] for r in result] == ["c", "a"]

    def test_not_a_list_unchanged(self):
        obj = {"timestamp_epoch_ms": 5000, "items": []}
        assert filter_by_range(obj, t(0), t(1)) is obj
        assert filter_by_range("text", t(0), t(1)) == "text"
        assert filter_by_range(None, t(0), t(1)) is None

    def test_missing_bound_disables_filtering(self):
        assert filter_by_range(SAMPLE, "", t(250)) is SAMPLE
        assert filter_by_range(SAMPLE, t(150), None) is SAMPLE

    def test_drops_elements_without_numeric_timestamp(self):
        data = [
            {"timestamp_epoch_ms": "200"},
            {"other": 1},
            {"timestamp_epoch_ms": True},
            "scalar",
            {"timestamp_epoch_ms": 200.5},
        ]
        assert filter_by_range(data, t(0), t(1000)) == [{"timestamp_epoch_ms": 200.5}]

    def test_invalid_bound_yields_empty(self):
        assert filter_by_range(SAMPLE, "garbage", t(250)) == []
        assert filter_by_range(SAMPLE, t(0), "2026-13-45") == []

    def test_inverted_window_is_empty(self):
        assert filter_by_range(SAMPLE, t(250), t(150)) == []
