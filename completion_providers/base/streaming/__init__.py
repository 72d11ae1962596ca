"""Streaming lifecycle shared by all completion engines."""

from .accumulate import collect_fragments, collect_text
from .engine import BaseCompletionEngine
from .outcome import STATUS_PENDING, CompletionOutcome

__all__ = [
    "BaseCompletionEngine",
    "CompletionOutcome",
    "STATUS_PENDING",
    "collect_fragments",
    "collect_text",
]
