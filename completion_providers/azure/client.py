"""Azure OpenAI chat engine built on BaseCompletionEngine.

The chat endpoint is consumed as one complete response: the prompt becomes a
single user message, ``stream`` is never requested, and the first choice's
content is emitted as the only fragment. The sequence is therefore the
degenerate one-emission case of the shared lifecycle.

A response with no choices (or a first choice without content) is reported
as ``chat.empty_choices`` at WARNING and yields nothing.
"""

from __future__ import annotations

import logging
from typing import Any, AsyncIterator, Dict, Optional

from openai import AsyncAzureOpenAI

from ..base.dto import ChatCompletionRequestDTO, build_chat_request
from ..base.errors import CompletionError, FailureKind
from ..base.http import get_httpx_client
from ..base.logging import LogContext
from ..base.models import CompletionOptions
from ..base.streaming import BaseCompletionEngine
from ..config import get_provider_config
from ..config.defaults import HTTP_CLIENT_PURPOSE

__all__ = ["AzureEngine"]


class AzureEngine(BaseCompletionEngine):
    """Single-shot engine: one fragment holding the whole chat answer."""

    @property
    def provider_name(self) -> str:
        return "azure"

    @classmethod
    def create(
        cls,
        api_endpoint: str,
        api_version: str,
        deployment_id: str,
        model_name: str,
        api_key: Optional[str] = None,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> "AzureEngine":
        """Build an engine around a fresh ``AsyncAzureOpenAI`` client.

        Parameters:
            api_endpoint: Resource endpoint, e.g. ``https://<name>.openai.azure.com``.
            api_version: Azure REST API version string.
            deployment_id: Deployment that serves ``model_name``.
            model_name: Model identifier sent in the payload.
            api_key: Credential; a missing key is sent as an empty string.
            logger: Diagnostics collaborator.
        """
        client = AsyncAzureOpenAI(
            azure_endpoint=api_endpoint,
            api_version=api_version,
            azure_deployment=deployment_id,
            api_key=api_key or "",
            http_client=get_httpx_client(api_endpoint, HTTP_CLIENT_PURPOSE),
        )
        return cls(client, model_name, logger=logger)

    @classmethod
    def from_config(
        cls,
        overrides: Optional[Dict[str, Any]] = None,
        logger: Optional[logging.Logger] = None,
    ) -> "AzureEngine":
        """Build an engine from ``get_provider_config("azure", overrides)``.

        Raises:
            ValueError: when no endpoint (``base_url``) or ``deployment_id`` is configured.
        """
        cfg = get_provider_config("azure", overrides)
        missing = [k for k in ("base_url", "deployment_id") if not cfg.get(k)]
        if missing:
            raise ValueError(f"azure engine requires {', '.join(missing)}")
        return cls.create(
            cfg["base_url"],
            cfg["api_version"],
            cfg["deployment_id"],
            cfg["model"],
            cfg.get("api_key"),
            logger=logger,
        )

    def _build_request(self, prompt: str, options: CompletionOptions) -> ChatCompletionRequestDTO:
        return build_chat_request(self._model_name, prompt, options)

    async def _send(self, request: ChatCompletionRequestDTO) -> Any:
        return await self._client.chat.completions.create(**request.to_params())

    async def _fragments(self, response: Any, ctx: LogContext) -> AsyncIterator[str]:
        choices = getattr(response, "choices", None) or []
        if not choices:
            raise self._empty("Empty choice from vendor")
        content = choices[0].message.content
        if content is None:
            raise self._empty("First choice carried no message content")
        yield content

    def _empty(self, message: str) -> CompletionError:
        return CompletionError(
            kind=FailureKind.EMPTY_RESPONSE,
            message=message,
            provider=self.provider_name,
            model=self._model_name,
        )
