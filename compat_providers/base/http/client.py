"""HTTP client construction for the request pipeline.

Purpose:
    Build ``httpx.AsyncClient`` instances with the package timeout policy and
    an optional proxy. A fresh client is created per request so the auth
    header, which depends on the connection's current decrypted key, is
    always rebuilt.

External dependencies:
    - ``httpx`` for the underlying asynchronous HTTP client.

Timeout strategy:
    - Timeouts derive from :func:`get_timeout_config`; a per-call override in
      seconds may be supplied.
"""

from __future__ import annotations

from typing import Mapping, Optional

import httpx

from ..timeouts import TimeoutConfig, get_timeout_config


def build_timeout(config: TimeoutConfig) -> httpx.Timeout:
    """Translate a :class:`TimeoutConfig` into an ``httpx.Timeout``."""
    return httpx.Timeout(config.http_timeout_seconds, connect=config.connect_timeout_seconds)


def create_async_client(
    *,
    headers: Optional[Mapping[str, str]] = None,
    proxy: Optional[str] = None,
    timeout_seconds: Optional[float] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Return a new ``httpx.AsyncClient`` configured for one request.

    Parameters:
        headers: Default headers sent with every request of the client.
        proxy: Optional proxy URL (``http://host:port``).
        timeout_seconds: Optional per-call override of the request timeout.
        transport: Optional transport, mainly for tests.

    Returns:
        An ``httpx.AsyncClient`` that the caller must close (use ``async with``).
    """
    cfg = get_timeout_config().with_override(timeout_seconds)
    kwargs = {"headers": dict(headers or {}), "timeout": build_timeout(cfg)}
    if proxy:
        kwargs["proxy"] = proxy
    if transport is not None:
        kwargs["transport"] = transport
    return httpx.AsyncClient(**kwargs)


__all__ = ["build_timeout", "create_async_client"]
