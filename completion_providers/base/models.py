"""Provider-agnostic value types shared by all completion engines."""

from .models_parts import CompletionOptions

__all__ = ["CompletionOptions"]
