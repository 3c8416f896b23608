"""Authenticated HTTP client for calls to the platform API.

Callers get a configured :class:`httpx.AsyncClient` that carries the
bearer token and tenant header on every request. Nothing process-wide is
patched: code that needs authenticated calls receives the client as a
parameter.

Usage::

    async with create_api_client(base_url, token=token, tenant_id=ctx.tenant_id) as client:
        response = await client.post("/api/graphql", json={"query": query})
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import httpx

from .logging import safe_log_value

logger = logging.getLogger(__name__)

TENANT_HEADER = "X-Tenant-ID"
DEFAULT_TIMEOUT = 30.0


def build_auth_headers(
    token: Optional[str] = None,
    tenant_id: Optional[str] = None,
    extra: Optional[Mapping[str, str]] = None,
) -> dict[str, str]:
    """Default headers for authenticated API calls.

    Only the headers with a value are set; ``extra`` is applied last.

    Example::

        build_auth_headers("abc", "t-1")
        # {"Authorization": "Bearer abc", "X-Tenant-ID": "t-1"}
    """
    headers: dict[str, str] = {}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    if tenant_id:
        headers[TENANT_HEADER] = tenant_id
    if extra:
        headers.update(extra)
    return headers


async def _log_request(request: httpx.Request) -> None:
    logger.debug(
        "API request %s %s",
        request.method,
        request.url,
        extra={"auth": safe_log_value(request.headers.get("Authorization"))},
    )


def create_api_client(
    base_url: str,
    *,
    token: Optional[str] = None,
    tenant_id: Optional[str] = None,
    timeout: float = DEFAULT_TIMEOUT,
    headers: Optional[Mapping[str, str]] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    **kwargs: Any,
) -> httpx.AsyncClient:
    """Build an API client carrying auth and tenant headers.

    Args:
        base_url: API root, e.g. ``"https://acme.example.com"``.
        token: Bearer token (omitted when None).
        tenant_id: Sent as ``X-Tenant-ID`` (omitted when None).
        timeout: Request timeout in seconds.
        headers: Extra default headers.
        transport: Custom transport (tests pass ``httpx.MockTransport``).
        **kwargs: Passed through to :class:`httpx.AsyncClient`.

    The caller owns the client and must close it (``async with`` or
    ``await client.aclose()``).
    """
    client_kwargs: dict[str, Any] = {
        "base_url": base_url,
        "headers": build_auth_headers(token, tenant_id, headers),
        "timeout": timeout,
        "event_hooks": {"request": [_log_request]},
        **kwargs,
    }
    if transport is not None:
        client_kwargs["transport"] = transport
    return httpx.AsyncClient(**client_kwargs)


__all__ = [
    "DEFAULT_TIMEOUT",
    "TENANT_HEADER",
    "build_auth_headers",
    "create_api_client",
]
