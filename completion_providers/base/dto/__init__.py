"""Validated request DTOs built before any transport call."""

from .completion_request import (
    ChatCompletionRequestDTO,
    ChatMessageDTO,
    CompletionRequestDTO,
    build_chat_request,
    build_completion_request,
)

__all__ = [
    "ChatCompletionRequestDTO",
    "ChatMessageDTO",
    "CompletionRequestDTO",
    "build_chat_request",
    "build_completion_request",
]
