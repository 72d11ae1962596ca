"""CompletionStream Protocol (single-class module).

Defines the one capability every completion engine exposes.
"""

from __future__ import annotations

from typing import AsyncIterator, Protocol, runtime_checkable

from ..models import CompletionOptions


@runtime_checkable
class CompletionStream(Protocol):
    """Lazy text-completion capability shared by all vendor engines.

    ``generate`` returns a fresh, non-restartable async sequence of text
    fragments whose concatenation is the model output. Implementations never
    raise for build, transport, or empty-response failures; they end the
    sequence early and report through their diagnostics logger instead.
    """

    def generate(self, prompt: str, options: CompletionOptions) -> AsyncIterator[str]:
        """Stream completion fragments for ``prompt``."""
        ...
