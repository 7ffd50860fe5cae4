"""
Proxy executor — one authenticated HTTPS GET against a stored FQDN.

The target is ``https://<fqdn><parameters>`` with ``parameters`` used verbatim.
Credentials travel as HTTP Basic auth. The whole exchange runs under a single
deadline; when it expires the in-flight request is cancelled.

Usage:
    async with httpx.AsyncClient() as client:
        executor = ProxyExecutor(client)
        data = await executor.execute_query(
            "api.example.com", "me@example.com", "secret", "/v1/events?limit=10",
            timeout=5,
        )
"""

from __future__ import annotations

import asyncio
import base64
import json
import logging
import math
from typing import Any

import httpx

from fqdnproxy.audit.trace import log_event
from fqdnproxy.errors import ParseError, ProxyTimeoutError, TransportError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
DEFAULT_ACCEPT = "application/json"


def build_url(fqdn: str, parameters: str) -> str:
    return f"https://{fqdn}{parameters}"


def basic_auth(user_mail: str, user_password: str) -> str:
    token = base64.b64encode(f"{user_mail}:{user_password}".encode()).decode("ascii")
    return f"Basic {token}"


def build_headers(
    user_mail: str, user_password: str, mime_type: str | None = None
) -> dict[str, str]:
    return {
        "Authorization": basic_auth(user_mail, user_password),
        "Accept": mime_type or DEFAULT_ACCEPT,
    }


def redact_headers(headers: dict[str, str]) -> dict[str, str]:
    """Copy of request headers safe to log."""
    return {k: ("[REDACTED]" if k.lower() == "authorization" else v) for k, v in headers.items()}


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def parse_json(body: str) -> Any:
    """Strict JSON: ``NaN`` and ``Infinity`` are rejected, not parsed as floats."""
    return json.loads(body, parse_constant=_reject_constant)


def resolve_timeout(timeout: Any, default: float = DEFAULT_TIMEOUT) -> float:
    """Seconds to wait; missing, zero, negative or garbage values fall back to ``default``."""
    try:
        seconds = float(timeout)
    except (TypeError, ValueError):
        return default
    if math.isnan(seconds) or seconds <= 0:
        return default
    return seconds


class ProxyExecutor:
    """Issues outbound requests on a shared ``httpx.AsyncClient``."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        default_timeout: float = DEFAULT_TIMEOUT,
        default_accept: str = DEFAULT_ACCEPT,
    ) -> None:
        self.client = client
        self.default_timeout = default_timeout
        self.default_accept = default_accept

    async def execute_query(
        self,
        fqdn: str,
        user_mail: str,
        user_password: str,
        parameters: str,
        mime_type: str | None = None,
        timeout: float | None = None,
    ) -> Any:
        """Fetch and parse the upstream JSON.

        Raises:
            ValidationError: ``mime_type`` cannot be sent as a header value.
            ProxyTimeoutError: the deadline elapsed before the body completed.
            TransportError: connection failed or was interrupted.
            ParseError: the body is not JSON; ``raw`` carries it.
        """
        seconds = resolve_timeout(timeout, self.default_timeout)
        url = build_url(fqdn, parameters)
        if mime_type and not mime_type.isascii():
            raise ValidationError("mimeType must contain only ASCII characters")
        headers = build_headers(user_mail, user_password, mime_type or self.default_accept)

        log_event(
            "proxy.request",
            f"GET {url}",
            details={
                "hostname": fqdn,
                "path": parameters,
                "headers": redact_headers(headers),
                "timeout": seconds,
            },
        )

        try:
            response = await asyncio.wait_for(
                self.client.get(url, headers=headers, timeout=seconds),
                timeout=seconds,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            logger.warning("Request to %s timed out after %.1fs", fqdn, seconds)
            log_event("proxy.error", f"API request timed out after {seconds}s")
            raise ProxyTimeoutError(timeout=seconds) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            message = str(e) or type(e).__name__
            logger.warning("Request to %s failed: %s", fqdn, message)
            log_event("proxy.error", f"API request failed: {message}")
            raise TransportError(message) from e

        logger.info("GET %s -> %d", url, response.status_code)
        log_event(
            "proxy.response",
            f"API Response Status: {response.status_code}",
            details={"headers": dict(response.headers)},
        )

        body = response.text
        try:
            return parse_json(body)
        except (ValueError, RecursionError) as e:
            logger.warning("Upstream %s returned non-JSON body (%d bytes)", fqdn, len(body))
            log_event("proxy.error", f"Failed to parse API response: {e}\nFull API Response (raw): {body}")
            raise ParseError(raw=body) from e
