"""Stable import path for engine capability protocols."""

from .interfaces_parts import CompletionStream

__all__ = ["CompletionStream"]
