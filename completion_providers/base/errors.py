"""Unified completion error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``completion_providers.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.failure_kind import FailureKind
from .errors_parts.completion_error import CompletionError, StreamClosedError
from .errors_parts.classification import classify_exception, is_stream_closed

__all__ = [
    "ErrorCode",
    "FailureKind",
    "CompletionError",
    "StreamClosedError",
    "classify_exception",
    "is_stream_closed",
]
