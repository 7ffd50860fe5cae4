"""
Range filter — keep array elements whose ``timestamp_epoch_ms`` falls in a window.

Only JSON arrays are filtered, and only when both bounds are given. Bounds may
be ISO-8601 dates or date-times (naive values are UTC) or epoch milliseconds.
A bound that cannot be parsed matches nothing, so the result is empty.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta, timezone
from typing import Any

logger = logging.getLogger(__name__)

TIMESTAMP_FIELD = "timestamp_epoch_ms"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MS = timedelta(milliseconds=1)


def to_epoch_ms(value: Any) -> float | None:
    """Convert a date bound to epoch milliseconds, or None if unparsable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return None if math.isnan(value) else value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(text)
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return (dt - _EPOCH) // _MS


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def filter_by_range(value: Any, start_date: Any, end_date: Any) -> Any:
    """Filter a JSON array to elements with ``start <= timestamp_epoch_ms <= end``.

    Returns ``value`` untouched when it is not a list or either bound is
    empty. Elements without a numeric timestamp are dropped. Order is kept.
    """
    if not isinstance(value, list) or not start_date or not end_date:
        return value

    start = to_epoch_ms(start_date)
    end = to_epoch_ms(end_date)
    if start is None or end is None:
        logger.warning(
            "Unparsable date bound (start=%r, end=%r); no elements match", start_date, end_date
        )
        return []

    kept = []
    for item in value:
        if not isinstance(item, dict):
            continue
        ts = item.get(TIMESTAMP_FIELD)
        if _is_number(ts) and start <= ts <= end:
            kept.append(item)
    return kept
