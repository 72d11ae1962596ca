"""
Structured completion error type.

Wraps build, transport, and empty-response failures with a
:class:`FailureKind` and a normalized :class:`ErrorCode` so they can be logged
uniformly and reported through :class:`CompletionOutcome`.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode
from .failure_kind import FailureKind


@dataclass
class CompletionError(Exception):
    """Represents a failure absorbed by a completion engine.

    Attributes:
        kind: Lifecycle stage at which the call stopped.
        message: Human-readable error message suitable for logging.
        provider: Engine key where the error originated (e.g., ``"openai"``).
        model: Optional model name associated with the failure.
        code: Normalized :class:`ErrorCode` for the underlying cause.
        raw: Optional original exception for diagnostics.
    """

    kind: FailureKind
    message: str
    provider: str
    model: Optional[str] = None
    code: ErrorCode = ErrorCode.UNKNOWN
    raw: Optional[BaseException] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining provider, model, kind, and message."""
        return f"{self.provider}:{self.model or '-'} {self.kind.value}/{self.code.value}: {self.message}"


class StreamClosedError(Exception):
    """Raised by transports to signal that the vendor ended the stream."""


__all__ = ["CompletionError", "StreamClosedError"]
