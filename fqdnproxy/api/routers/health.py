"""Health route."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from fqdnproxy.api.deps import get_store
from fqdnproxy.entries.store import EntryStore

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
def api_health(store: EntryStore = Depends(get_store)):
    """Report whether the entry store answers."""
    timestamp = datetime.now(timezone.utc).isoformat()
    h = store.check_health()
    if h["status"] == "ok":
        return {"status": "OK", "timestamp": timestamp, "database": "Connected"}
    return JSONResponse(
        {
            "status": "ERROR",
            "timestamp": timestamp,
            "database": "Disconnected",
            "error": h.get("error", "unknown"),
        },
        status_code=500,
    )
