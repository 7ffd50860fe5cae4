"""
Error taxonomy shared by the entry store, the proxy executor and the API.

Every error maps to exactly one HTTP status at the API boundary
(see ``fqdnproxy.api.errors``). Messages must never carry credentials.
"""

from __future__ import annotations


class FqdnProxyError(Exception):
    """Base class for all fqdnproxy errors."""

    status_code = 500

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.message}


class ValidationError(FqdnProxyError):
    """Client input missing or malformed."""

    status_code = 400


class NotFoundError(FqdnProxyError):
    """No entry matched the given fqdn."""

    status_code = 404


class StoreError(FqdnProxyError):
    """The backing database failed."""


class TransportError(FqdnProxyError):
    """The outbound connection could not be established or was interrupted."""


class ProxyTimeoutError(FqdnProxyError):
    """The outbound call exceeded its deadline."""

    status_code = 408

    def __init__(self, message: str = "Request timeout", timeout: float | None = None) -> None:
        super().__init__(message)
        self.timeout = timeout


class ParseError(FqdnProxyError):
    """The upstream body was not valid JSON. ``raw`` holds the body as received."""

    def __init__(self, message: str = "Failed to parse API response", raw: str = "") -> None:
        super().__init__(message)
        self.raw = raw

    def to_dict(self) -> dict:
        return {"error": self.message, "raw": self.raw}
