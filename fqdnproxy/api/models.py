"""Pydantic request models for the API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class EntryRequest(BaseModel):
    fqdn: str | None = None
    user_mail: str | None = None
    user_password: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    parameters: str | None = None
    comments: str | None = None


class ExecuteQueryRequest(EntryRequest):
    """Entry fields plus per-call request options."""

    mimeType: str | None = Field(None, description="Accept header; defaults to application/json")
    timeout: float | None = Field(None, description="Seconds before the call is aborted")

    def missing_required(self) -> list[str]:
        return [
            name
            for name in ("fqdn", "user_mail", "user_password", "parameters")
            if not getattr(self, name)
        ]
