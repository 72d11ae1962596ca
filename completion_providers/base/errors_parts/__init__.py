"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `completion_providers.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .failure_kind import FailureKind
from .completion_error import CompletionError, StreamClosedError
from .classification import classify_exception, is_stream_closed

__all__ = [
    "ErrorCode",
    "FailureKind",
    "CompletionError",
    "StreamClosedError",
    "classify_exception",
    "is_stream_closed",
]
