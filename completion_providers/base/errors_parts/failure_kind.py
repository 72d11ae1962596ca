"""
Terminal failure kinds of a single ``generate`` call.

Every kind is absorbed at the engine boundary: callers of ``generate`` only
observe a possibly empty, possibly truncated fragment sequence. The kind is
surfaced through logging and through :class:`CompletionOutcome`.
"""
from __future__ import annotations

from enum import Enum


class FailureKind(str, Enum):
    """Where in the request lifecycle a ``generate`` call stopped early."""

    REQUEST_BUILD = "request_build"
    STREAM_CLOSED = "stream_closed"
    TRANSPORT = "transport"
    EMPTY_RESPONSE = "empty_response"

    @property
    def degrades(self) -> bool:
        """Whether this kind counts as a failure rather than normal termination."""
        return self is not FailureKind.STREAM_CLOSED


__all__ = ["FailureKind"]
