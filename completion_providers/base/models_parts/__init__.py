"""Models parts package: one value type per module."""

from .completion_options import CompletionOptions

__all__ = ["CompletionOptions"]
