"""Shared async HTTP client pool for completion engines.

Purpose:
    Provide a centralized pool of reusable ``httpx.AsyncClient`` instances
    handed to the vendor SDK clients, so engines created for the same endpoint
    share one connection pool. Timeouts derive exclusively from
    :func:`get_timeout_config`.

External dependencies:
    - ``httpx`` for the underlying asynchronous HTTP client.

Lifecycle & cleanup:
    - Clients are cached by ``(base_url, purpose, event loop)``. Purposes keep
      distinct pools (e.g. "completions" vs "chat").
    - Pooled connections belong to the event loop that opened them, so a
      client requested inside a running loop is never handed to another loop.
      Clients requested outside any loop share the ``None`` slot; build
      engines inside the loop that will drive them, or await
      :func:`aclose_all_clients` before starting a new loop.
    - Entries whose loop has closed are dropped on the next lookup.
    - Async clients cannot be closed from an ``atexit`` hook; applications and
      tests await :func:`aclose_all_clients` during shutdown.
"""

from __future__ import annotations

import asyncio
import threading
from typing import Dict, Optional, Tuple

import httpx

from ..timeouts import get_timeout_config

_PoolKey = Tuple[Optional[str], str, Optional[int]]

# value keeps the loop alive so its id() cannot be reused while pooled
_CLIENTS: Dict[_PoolKey, Tuple[httpx.AsyncClient, Optional[asyncio.AbstractEventLoop]]] = {}
_LOCK = threading.RLock()


def _current_loop() -> Optional[asyncio.AbstractEventLoop]:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


def _prune_closed_loops() -> None:
    for key, (_, loop) in list(_CLIENTS.items()):
        if loop is not None and loop.is_closed():
            del _CLIENTS[key]


def get_httpx_client(base_url: Optional[str], purpose: str) -> httpx.AsyncClient:
    """Return a pooled ``httpx.AsyncClient`` for the given base URL and purpose.

    The first request for a key creates a client configured from
    :func:`get_timeout_config`; later requests from the same event loop reuse
    the same instance. The base URL is only part of the key: the vendor SDK
    resolves request URLs itself.
    """
    loop = _current_loop()
    key = (base_url, purpose, id(loop) if loop is not None else None)
    with _LOCK:
        _prune_closed_loops()
        cached = _CLIENTS.get(key)
        if cached is not None and not cached[0].is_closed:
            return cached[0]
        client = httpx.AsyncClient(timeout=get_timeout_config().to_httpx())
        _CLIENTS[key] = (client, loop)
        return client


async def aclose_all_clients() -> None:
    """Close and clear all pooled HTTP clients.

    Clients whose loop has already closed are dropped without closing; their
    connections went away with the loop.
    """
    with _LOCK:
        _prune_closed_loops()
        clients = [client for client, _ in _CLIENTS.values()]
        _CLIENTS.clear()
    for c in clients:
        await c.aclose()


__all__ = ["get_httpx_client", "aclose_all_clients"]
