"""HTTP transport helpers (pooled ``httpx.AsyncClient``)."""

from .client import aclose_all_clients, get_httpx_client

__all__ = ["get_httpx_client", "aclose_all_clients"]
