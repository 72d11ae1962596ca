"""Pytest configuration for the completion engine test suite.

Provides log capture, an injectable engine logger, and an isolated config
environment so tests never read the developer's real credentials.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Iterator, List

import pytest

from completion_providers.base.http import aclose_all_clients
from completion_providers.config import reset_config_cache

_CONFIG_ENV_VARS = (
    "COMPLETION_CONFIG_FILE",
    "OPENAI_MODEL",
    "OPENAI_API_KEY",
    "OPENAI_BASE_URL",
    "OPENAI_API_VERSION",
    "OPENAI_DEPLOYMENT_ID",
    "AZURE_OPENAI_MODEL",
    "AZURE_OPENAI_API_KEY",
    "AZURE_OPENAI_KEY",
    "AZURE_OPENAI_BASE_URL",
    "AZURE_OPENAI_ENDPOINT",
    "AZURE_OPENAI_API_VERSION",
    "AZURE_OPENAI_DEPLOYMENT_ID",
)


@pytest.fixture()
def log_capture() -> Iterator[List[logging.LogRecord]]:
    """Record every LogRecord reaching the root logger during a test."""
    records: List[logging.LogRecord] = []
    handler = logging.Handler(level=logging.DEBUG)
    handler.emit = lambda record: records.append(record)  # type: ignore
    root = logging.getLogger()
    root.addHandler(handler)
    try:
        yield records
    finally:
        root.removeHandler(handler)


@pytest.fixture()
def engine_logger() -> logging.Logger:
    """Logger injected into engines; propagates to the root capture handler."""
    logger = logging.getLogger("test.engine")
    logger.setLevel(logging.DEBUG)
    logger.propagate = True
    return logger


@pytest.fixture()
def clean_config_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Strip config env vars and point the dotenv loader at an empty location."""
    for name in _CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "missing.env"))
    reset_config_cache()
    yield
    reset_config_cache()


@pytest.fixture()
def pooled_clients() -> Iterator[None]:
    """Close pooled httpx clients created by a test."""
    yield
    asyncio.run(aclose_all_clients())

