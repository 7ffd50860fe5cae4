"""Query execution: persist, proxy, filter."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from fqdnproxy.api.deps import get_executor, get_store
from fqdnproxy.api.models import ExecuteQueryRequest
from fqdnproxy.audit.trace import log_event
from fqdnproxy.entries.models import Entry, redact_entry
from fqdnproxy.entries.store import EntryStore
from fqdnproxy.errors import ValidationError
from fqdnproxy.proxy.executor import ProxyExecutor
from fqdnproxy.proxy.range_filter import filter_by_range

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["query"])


def _save_before_execute(store: EntryStore, entry: Entry) -> None:
    """Persist the submitted form; failures are logged and never propagate."""
    try:
        store.upsert_entry(entry)
        log_event("store.saved", f"Query data saved/updated before execution for FQDN {entry.fqdn}")
    except Exception as e:
        logger.warning("Save before execution failed for %s (non-fatal): %s", entry.fqdn, e)
        log_event("store.failed", f"Database save error before execution for FQDN {entry.fqdn}: {e}")


@router.post("/execute_query")
async def api_execute_query(
    body: ExecuteQueryRequest,
    store: EntryStore = Depends(get_store),
    executor: ProxyExecutor = Depends(get_executor),
):
    data = body.model_dump()
    log_event("request.received", "execute_query", details=redact_entry(data))

    missing = body.missing_required()
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    # No lock spans save + execute: a concurrent delete may be undone by this save.
    await run_in_threadpool(_save_before_execute, store, Entry.from_mapping(data, blank_as_null=True))

    result = await executor.execute_query(
        body.fqdn,
        body.user_mail,
        body.user_password,
        body.parameters,
        mime_type=body.mimeType,
        timeout=body.timeout,
    )

    filtered = filter_by_range(result, body.start_date, body.end_date)
    log_event("proxy.result", "Filtered API Response", details={"body": filtered})
    return JSONResponse(filtered)
