"""Shared HTTP client pool for adapters.

Purpose:
    Keep one long-lived ``httpx.Client`` per (base URL, purpose) so adapters
    reuse connections across requests instead of allocating per call.
    ``httpx.Client`` is safe for concurrent use from multiple threads, which
    matches the request-per-call model of the orchestrator.

Timeout strategy:
    Clients are created with ``get_timeout_config().as_httpx_timeout()``, so
    every request issued through a pooled client is bounded.

Lifecycle & cleanup:
    All clients are closed at interpreter exit via ``atexit``; tests may call
    :func:`close_all_clients` explicitly.
"""

from __future__ import annotations

import atexit
import threading
from typing import Dict, Optional, Tuple

import httpx

from ..timeouts import get_timeout_config

_CLIENTS: Dict[Tuple[Optional[str], str], httpx.Client] = {}
_LOCK = threading.RLock()


def get_httpx_client(base_url: Optional[str], purpose: str) -> httpx.Client:
    """Return a pooled ``httpx.Client`` for the given base URL and purpose.

    Parameters:
        base_url: API base URL set on the client so callers can issue relative
            requests. ``None`` groups clients under a shared key.
        purpose: Short discriminator for separate pools (e.g. ``"ollama.chat"``).

    Thread-safety:
        Creation is guarded by a re-entrant lock; lookups are lock-free.
    """
    key = (base_url, purpose)
    client = _CLIENTS.get(key)
    if client is not None and not client.is_closed:
        return client

    with _LOCK:
        client = _CLIENTS.get(key)
        if client is not None and not client.is_closed:
            return client
        timeout = get_timeout_config().as_httpx_timeout()
        client = httpx.Client(base_url=base_url, timeout=timeout) if base_url else httpx.Client(timeout=timeout)
        _CLIENTS[key] = client
        return client


def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        for c in _CLIENTS.values():
            c.close()
        _CLIENTS.clear()


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "close_all_clients"]
