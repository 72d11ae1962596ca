"""completion_providers.config.env
=================================

Environment variable mapping and helpers for engine credentials.

Purpose
-------
- Single source of truth mapping engine identifiers to the environment
  variables holding their API keys (canonical name plus aliases).
- Per-engine env prefixes used by ``get_provider_config`` for the remaining
  fields (model, base URL, API version, deployment id).

Failure Modes
-------------
- Helpers return ``None`` when an engine is unknown or nothing is set; they
  never raise. Callers decide how to proceed.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

# Engine → env var prefix for config fields (``<PREFIX>_MODEL`` etc.)
ENV_PREFIX: Dict[str, str] = {
    "openai": "OPENAI",
    "azure": "AZURE_OPENAI",
}

# Canonical engine → API key env var
ENV_MAP: Dict[str, str] = {
    "openai": "OPENAI_API_KEY",
    "azure": "AZURE_OPENAI_API_KEY",
}

# Engine → ordered tuple of acceptable env var names (canonical first).
# The Azure SDK itself reads AZURE_OPENAI_API_KEY; older deployments exported
# AZURE_OPENAI_KEY.
ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "azure": ("AZURE_OPENAI_API_KEY", "AZURE_OPENAI_KEY"),
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the value looks like a placeholder/test token.

    Heuristics (case-insensitive): contains 'placeholder', 'changeme' or
    'example', or starts with 'test_'.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "example" in v
        or v.startswith("test_")
    )


def get_env_prefix(engine: str) -> str:
    """Return the env prefix for ``engine`` (upper-cased name when unknown)."""
    name = (engine or "").lower().strip()
    return ENV_PREFIX.get(name, name.upper())


def get_env_var_name(engine: str) -> Optional[str]:
    """Return the canonical API key env var name, or None if unknown."""
    return ENV_MAP.get(engine.lower()) if engine else None


def get_env_var_candidates(engine: str) -> Iterable[str]:
    """Yield acceptable API key env var names, canonical first."""
    p = (engine or "").lower()
    canonical = ENV_MAP.get(p)
    if canonical:
        yield canonical
    for alias in ENV_ALIASES.get(p, ()):
        if alias != canonical:
            yield alias


def resolve_provider_key(engine: str) -> Tuple[Optional[str], Optional[str]]:
    """Resolve an API key from the process environment.

    Returns
    -------
    Tuple[Optional[str], Optional[str]]
        ``(value, env_var_used)`` for the first non-empty candidate, or
        ``(None, None)`` when nothing is set.
    """
    for name in get_env_var_candidates(engine):
        if val := os.environ.get(name):
            return val, name
    return None, None


__all__ = [
    "ENV_PREFIX",
    "ENV_MAP",
    "ENV_ALIASES",
    "is_placeholder",
    "get_env_prefix",
    "get_env_var_name",
    "get_env_var_candidates",
    "resolve_provider_key",
]
