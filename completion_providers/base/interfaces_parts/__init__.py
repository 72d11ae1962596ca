"""Interface parts package: one Protocol per module."""

from .completion_stream import CompletionStream

__all__ = ["CompletionStream"]
