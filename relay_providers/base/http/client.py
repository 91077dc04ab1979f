"""Shared HTTP client pool for the vendor SDKs.

Purpose:
    Keep one ``httpx.Client`` per purpose (``"anthropic"``, ``"openai"``) and
    hand it to the SDK constructors so connections are reused across calls.
    Each streaming call still opens its own response on the pooled client.

Timeout strategy:
    The streaming layer imposes no timeouts of its own; the read and connect
    timeouts configured here are the transport's.

Lifecycle & cleanup:
    Clients are closed at interpreter exit; tests may call
    :func:`close_all_clients` explicitly.
"""

from __future__ import annotations

import atexit
import threading
from typing import Dict

import httpx

from ...config.defaults import HTTP_CONNECT_TIMEOUT_SECONDS, HTTP_TIMEOUT_SECONDS

_CLIENTS: Dict[str, httpx.Client] = {}
_LOCK = threading.RLock()


def get_httpx_client(purpose: str) -> httpx.Client:
    """Return the pooled ``httpx.Client`` for ``purpose``, creating it once."""
    client = _CLIENTS.get(purpose)
    if client is not None and not client.is_closed:
        return client

    with _LOCK:
        client = _CLIENTS.get(purpose)
        if client is not None and not client.is_closed:
            return client
        timeout = httpx.Timeout(HTTP_TIMEOUT_SECONDS, connect=HTTP_CONNECT_TIMEOUT_SECONDS)
        client = httpx.Client(timeout=timeout, follow_redirects=True)
        _CLIENTS[purpose] = client
        return client


def close_all_clients() -> None:
    """Close and forget every pooled client."""
    with _LOCK:
        for c in _CLIENTS.values():
            try:
                c.close()
            except Exception:  # nosec B110 - best-effort shutdown
                pass
        _CLIENTS.clear()


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "close_all_clients"]
