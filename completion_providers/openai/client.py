"""OpenAI streaming completion engine built on BaseCompletionEngine.

Talks to the legacy text-completions endpoint with ``stream=True`` and
forwards each unit's text the moment it arrives; nothing is buffered beyond
the single unit being read.

Stream termination:
- A vendor-closed stream (``httpx.StreamClosed`` / ``StreamClosedError``)
  ends the sequence normally.
- A unit without choices is skipped with a DEBUG event.
- Any other error while reading truncates the sequence with one WARNING.

Timeouts are owned by the pooled ``httpx.AsyncClient`` handed to the SDK.
"""

from __future__ import annotations

import logging
from typing import Any, AsyncIterator, Dict, Optional

from openai import AsyncOpenAI

from ..base.constants import EVENT_EMPTY_UNIT
from ..base.dto import CompletionRequestDTO, build_completion_request
from ..base.http import get_httpx_client
from ..base.logging import LogContext, log_event
from ..base.models import CompletionOptions
from ..base.streaming import BaseCompletionEngine
from ..config import get_provider_config
from ..config.defaults import HTTP_CLIENT_PURPOSE

__all__ = ["OpenAIEngine"]


class OpenAIEngine(BaseCompletionEngine):
    """Streaming engine: one fragment per received completion unit."""

    @property
    def provider_name(self) -> str:
        return "openai"

    @classmethod
    def create(
        cls,
        api_endpoint: Optional[str],
        model_name: str,
        api_key: Optional[str] = None,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> "OpenAIEngine":
        """Build an engine around a fresh ``AsyncOpenAI`` client.

        A missing ``api_key`` is sent as an empty string; the vendor rejects
        the call at request time and the failure surfaces as a WARNING.
        """
        client = AsyncOpenAI(
            api_key=api_key or "",
            base_url=api_endpoint,
            http_client=get_httpx_client(api_endpoint, HTTP_CLIENT_PURPOSE),
        )
        return cls(client, model_name, logger=logger)

    @classmethod
    def from_config(
        cls,
        overrides: Optional[Dict[str, Any]] = None,
        logger: Optional[logging.Logger] = None,
    ) -> "OpenAIEngine":
        """Build an engine from ``get_provider_config("openai", overrides)``."""
        cfg = get_provider_config("openai", overrides)
        return cls.create(cfg.get("base_url"), cfg["model"], cfg.get("api_key"), logger=logger)

    def _build_request(self, prompt: str, options: CompletionOptions) -> CompletionRequestDTO:
        return build_completion_request(self._model_name, prompt, options)

    async def _send(self, request: CompletionRequestDTO) -> Any:
        return await self._client.completions.create(**request.to_params())

    async def _fragments(self, response: Any, ctx: LogContext) -> AsyncIterator[str]:
        async for unit in response:
            choices = getattr(unit, "choices", None) or []
            text = choices[0].text if choices else None
            if text is None:
                log_event(self._logger, EVENT_EMPTY_UNIT, ctx, level=logging.DEBUG, choices=len(choices))
                continue
            yield text
