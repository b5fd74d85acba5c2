"""Shared async HTTP client pool for the transport executor.

Purpose:
    Provide a centralized pool of reusable ``httpx.AsyncClient`` instances so
    calls share connections instead of allocating a client per request.
    Timeouts derive exclusively from :func:`get_timeout_config`; per-request
    timeouts are applied by the executor through ``TimeoutConfig.to_httpx``.

External dependencies:
    - ``httpx`` for the underlying async HTTP client (``h2`` via the
      ``httpx[http2]`` extra when protocol version ``"2"`` is requested).

Lifecycle & cleanup:
    - Clients are cached by ``(purpose, http2)``. Purposes allow distinct
      pools (e.g. "chat" vs "stream").
    - Async clients must be closed on a running loop; applications and tests
      call :func:`aclose_all_clients` during shutdown.
"""

from __future__ import annotations

import contextlib
import threading
from typing import Dict, Tuple

import httpx

from ..timeouts import get_timeout_config

# Internal cache keyed by (purpose, http2)
_CLIENTS: Dict[Tuple[str, bool], httpx.AsyncClient] = {}
_LOCK = threading.RLock()


def get_httpx_client(purpose: str = "default", *, http_version: str = "1.1") -> httpx.AsyncClient:
    """Return a pooled ``httpx.AsyncClient`` for ``purpose``.

    The first request for a key creates a client whose default timeout comes
    from :func:`get_timeout_config`; later requests reuse the same instance.
    Closed clients are replaced transparently.
    """
    key = (purpose, http_version == "2")
    client = _CLIENTS.get(key)
    if client is not None and not client.is_closed:
        return client

    with _LOCK:
        client = _CLIENTS.get(key)
        if client is not None and not client.is_closed:
            return client
        cfg = get_timeout_config()
        client = httpx.AsyncClient(
            timeout=httpx.Timeout(cfg.http_timeout_seconds, connect=cfg.start_timeout_seconds),
            http2=key[1],
        )
        _CLIENTS[key] = client
        return client


async def aclose_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        clients = list(_CLIENTS.values())
        _CLIENTS.clear()
    for c in clients:
        # connection pool teardown failures are non-actionable at shutdown
        with contextlib.suppress(httpx.HTTPError, RuntimeError):
            await c.aclose()


__all__ = ["get_httpx_client", "aclose_all_clients"]
