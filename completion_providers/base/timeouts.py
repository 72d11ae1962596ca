"""Transport timeout configuration.

The engines themselves never enforce timeouts; timeout policy belongs to the
HTTP transport. This module centralizes the values used when the pooled
``httpx.AsyncClient`` instances are created so no call site hard-codes them.

Supported environment variables (all optional, positive floats):
    PT_TIMEOUT_CONNECT_SECONDS
    PT_TIMEOUT_READ_SECONDS
    PT_TIMEOUT_HTTP_SECONDS   (write/pool and fallback for the others)
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

import httpx


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        connect_timeout_seconds: Time allowed to establish a connection.
        read_timeout_seconds: Idle time allowed between received bytes; for
            streaming completions this bounds the gap between units.
        http_timeout_seconds: Baseline for write and pool acquisition.
    """

    connect_timeout_seconds: float = 10.0
    read_timeout_seconds: float = 60.0
    http_timeout_seconds: float = 30.0

    def to_httpx(self) -> httpx.Timeout:
        """Return the equivalent ``httpx.Timeout``."""
        return httpx.Timeout(
            self.http_timeout_seconds,
            connect=self.connect_timeout_seconds,
            read=self.read_timeout_seconds,
        )


_CACHED: Optional[TimeoutConfig] = None
_ENV_GUARD: Optional[str] = None
_ENV_NAMES = ("PT_TIMEOUT_CONNECT_SECONDS", "PT_TIMEOUT_READ_SECONDS", "PT_TIMEOUT_HTTP_SECONDS")


def _parse_env_float(name: str, default: float) -> float:
    """Read ``name`` as a positive float, returning ``default`` when unset or invalid."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached `TimeoutConfig`, refreshed when env overrides change."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(os.getenv(name, "") for name in _ENV_NAMES)
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED

    http = _parse_env_float("PT_TIMEOUT_HTTP_SECONDS", TimeoutConfig.http_timeout_seconds)
    _CACHED = TimeoutConfig(
        connect_timeout_seconds=_parse_env_float("PT_TIMEOUT_CONNECT_SECONDS", min(http, TimeoutConfig.connect_timeout_seconds)),
        read_timeout_seconds=_parse_env_float("PT_TIMEOUT_READ_SECONDS", TimeoutConfig.read_timeout_seconds),
        http_timeout_seconds=http,
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = ["TimeoutConfig", "get_timeout_config"]
