"""
Request/response trace log — an optional append-only file for diagnosing
upstream calls.

Event types:
  - request.received   — API request accepted (credentials masked)
  - store.saved        — entry persisted before execution
  - store.failed       — pre-execution persistence failed (non-fatal)
  - proxy.request      — outbound request options (Authorization masked)
  - proxy.response     — upstream status and headers
  - proxy.result       — filtered response body
  - proxy.error        — timeout, transport or parse failure

Disabled unless ``FQDNPROXY_TRACE_LOG`` points at a file.

Usage:
    from fqdnproxy.audit.trace import configure_trace_log, log_event
    configure_trace_log(Path("data/server.log"))
    log_event("proxy.request", "GET https://api.example.com/v1", details={...})
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

trace_logger = logging.getLogger("fqdnproxy.trace")
trace_logger.propagate = False

SENSITIVE_KEYS = {"authorization", "user_password", "password"}
REDACTED = "[REDACTED]"

_handler: logging.Handler | None = None


def redact(value):
    """Deep copy of ``value`` with credential-bearing keys masked."""
    if isinstance(value, dict):
        return {
            k: (REDACTED if str(k).lower() in SENSITIVE_KEYS and v else redact(v))
            for k, v in value.items()
        }
    if isinstance(value, list):
        return [redact(v) for v in value]
    return value


def configure_trace_log(path: Path | None) -> None:
    """Attach (or with ``None`` detach) the trace file handler."""
    global _handler
    if _handler is not None:
        trace_logger.removeHandler(_handler)
        _handler.close()
        _handler = None

    if path is None:
        return

    path.parent.mkdir(parents=True, exist_ok=True)
    _handler = logging.FileHandler(path, encoding="utf-8")
    _handler.setFormatter(logging.Formatter("[%(asctime)s] %(message)s"))
    trace_logger.addHandler(_handler)
    trace_logger.setLevel(logging.INFO)
    logger.info("Trace log enabled at %s", path)


def is_enabled() -> bool:
    return _handler is not None


def log_event(event_type: str, action: str, *, details: dict | None = None) -> None:
    """Write one trace line.

    Failures are logged but never raise.
    """
    if _handler is None:
        return
    try:
        line = f"{event_type} {action}"
        if details:
            line += "\n" + json.dumps(redact(details), indent=2, default=str)
        trace_logger.info(line)
    except Exception as e:
        logger.warning("Trace log_event failed: %s", e)
