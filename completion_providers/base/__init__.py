"""
Completion Providers Base Package

Exports vendor-agnostic contracts, DTOs, the shared engine lifecycle, and the
engine factory used by the concrete OpenAI and Azure engines.

- Interfaces: the ``CompletionStream`` capability
- Models/DTOs: ``CompletionOptions`` and validated request payloads
- Streaming: ``BaseCompletionEngine`` and ``CompletionOutcome``
- Factory: lazy creation of engines by canonical name
"""

from .dto import (
    ChatCompletionRequestDTO,
    ChatMessageDTO,
    CompletionRequestDTO,
    build_chat_request,
    build_completion_request,
)
from .errors import (
    CompletionError,
    ErrorCode,
    FailureKind,
    StreamClosedError,
    classify_exception,
    is_stream_closed,
)
from .factory import EngineFactory, UnknownEngineError, create
from .http import aclose_all_clients, get_httpx_client
from .interfaces import CompletionStream
from .logging import LogContext, configure_logger, get_logger, log_event, normalized_log_event
from .models import CompletionOptions
from .streaming import BaseCompletionEngine, CompletionOutcome, collect_fragments, collect_text
from .timeouts import TimeoutConfig, get_timeout_config

__all__ = [
    # Models / DTOs
    "CompletionOptions",
    "CompletionRequestDTO",
    "ChatMessageDTO",
    "ChatCompletionRequestDTO",
    "build_completion_request",
    "build_chat_request",
    # Interfaces
    "CompletionStream",
    # Errors
    "ErrorCode",
    "FailureKind",
    "CompletionError",
    "StreamClosedError",
    "classify_exception",
    "is_stream_closed",
    # Streaming
    "BaseCompletionEngine",
    "CompletionOutcome",
    "collect_fragments",
    "collect_text",
    # Factory
    "EngineFactory",
    "UnknownEngineError",
    "create",
    # Transport
    "TimeoutConfig",
    "get_timeout_config",
    "get_httpx_client",
    "aclose_all_clients",
    # Logging
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
]
