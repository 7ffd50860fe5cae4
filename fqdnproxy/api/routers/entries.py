"""Entry CRUD routes.

Store calls block, so these are plain ``def`` endpoints and run in the
threadpool.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from fqdnproxy.api.deps import get_store
from fqdnproxy.api.models import EntryRequest
from fqdnproxy.audit.trace import log_event
from fqdnproxy.entries.models import Entry, redact_entry
from fqdnproxy.entries.store import EntryStore

router = APIRouter(prefix="/api", tags=["entries"])


@router.get("/fqdns")
def api_list_fqdns(store: EntryStore = Depends(get_store)):
    return [{"fqdn": fqdn} for fqdn in store.list_fqdns()]


@router.get("/query_data")
def api_get_query_data(
    fqdn: str | None = Query(None),
    store: EntryStore = Depends(get_store),
):
    if not fqdn:
        return JSONResponse({"error": "FQDN is required"}, status_code=400)
    return store.get_entry(fqdn)


@router.post("/save_query_data")
def api_save_query_data(
    body: EntryRequest,
    store: EntryStore = Depends(get_store),
):
    data = body.model_dump()
    log_event("request.received", "save_query_data", details=redact_entry(data))
    store.upsert_entry(Entry.from_mapping(data))
    log_event("store.saved", f"Query data saved successfully for FQDN {body.fqdn}")
    return {"message": "Query data saved successfully"}


@router.delete("/query_data/{fqdn}")
def api_delete_query_data(
    fqdn: str,
    store: EntryStore = Depends(get_store),
):
    store.delete_entry(fqdn)
    log_event("store.deleted", f"FQDN entry deleted successfully: {fqdn}")
    return {"message": "FQDN entry deleted successfully"}
