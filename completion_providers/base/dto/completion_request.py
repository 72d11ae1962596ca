"""
Pydantic DTOs for vendor request payloads.

Purpose
-------
Every ``generate`` call derives one of these DTOs deterministically from
``(model, prompt, options)`` before any network I/O. Construction is the
single place where a malformed payload is detected: a prompt that cannot be
encoded as UTF-8, a non-numeric or non-finite temperature, a non-integer
token budget, or an empty model identifier. Values are otherwise passed
through untouched; ranges are left for the vendor API to judge.

External dependencies: Pydantic only. No I/O.

Failure semantics: construction raises ``pydantic.ValidationError``; engines
translate it into a ``REQUEST_BUILD`` failure.
"""

from __future__ import annotations

import math
from typing import Annotated, Any, Dict, List, Literal, Union

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr

from ..models import CompletionOptions


def _require_utf8(value: str) -> str:
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise ValueError(f"text is not valid UTF-8: {exc.reason}") from exc
    return value


def _require_finite(value: float) -> float:
    if not math.isfinite(value):
        raise ValueError("temperature must be a finite number")
    return value


Utf8Str = Annotated[StrictStr, AfterValidator(_require_utf8)]
FiniteNumber = Annotated[Union[StrictFloat, StrictInt], AfterValidator(_require_finite)]


class CompletionRequestDTO(BaseModel):
    """Payload for the streaming text-completions endpoint."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    model: StrictStr = Field(min_length=1)
    prompt: Utf8Str
    temperature: FiniteNumber
    max_tokens: StrictInt
    stream: Literal[True] = True

    def to_params(self) -> Dict[str, Any]:
        """Return keyword arguments for ``completions.create``."""
        return self.model_dump()


class ChatMessageDTO(BaseModel):
    """A single chat message; only user turns are ever built."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    role: Literal["user"] = "user"
    content: Utf8Str


class ChatCompletionRequestDTO(BaseModel):
    """Payload for the non-streaming chat-completions endpoint.

    ``stream`` is deliberately absent: the chat vendor is consumed as a single
    complete response.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    model: StrictStr = Field(min_length=1)
    messages: List[ChatMessageDTO] = Field(min_length=1)
    temperature: FiniteNumber
    max_tokens: StrictInt

    def to_params(self) -> Dict[str, Any]:
        """Return keyword arguments for ``chat.completions.create``."""
        return self.model_dump()


def build_completion_request(model: str, prompt: str, options: CompletionOptions) -> CompletionRequestDTO:
    """Build the streaming completion payload (raises ``ValidationError``)."""
    return CompletionRequestDTO(
        model=model,
        prompt=prompt,
        temperature=options.sampling_temperature,
        max_tokens=options.max_decoding_tokens,
    )


def build_chat_request(model: str, prompt: str, options: CompletionOptions) -> ChatCompletionRequestDTO:
    """Build the single-user-message chat payload (raises ``ValidationError``)."""
    return ChatCompletionRequestDTO(
        model=model,
        messages=[ChatMessageDTO(content=prompt)],
        temperature=options.sampling_temperature,
        max_tokens=options.max_decoding_tokens,
    )


__all__ = [
    "CompletionRequestDTO",
    "ChatMessageDTO",
    "ChatCompletionRequestDTO",
    "build_completion_request",
    "build_chat_request",
]
