"""Tagged completion result reporting whether a sequence was degraded.

``generate`` keeps the vendor-neutral contract of silently ending a sequence
on failure. Callers that need to tell a finished answer from a truncated one
use ``generate_outcome`` instead and read ``status``/``reason`` after the
fragments have been consumed.
"""

from __future__ import annotations

from contextlib import aclosing
from typing import AsyncIterator, List, Optional, Tuple

from ..constants import STATUS_DEGRADED, STATUS_OK
from ..errors import CompletionError

STATUS_PENDING = "pending"


class CompletionOutcome:
    """Async-iterable wrapper recording fragments and the failure, if any.

    The wrapped sequence is single-use, like the one ``generate`` returns.
    ``status`` is ``pending`` until the sequence finishes, then ``ok`` or
    ``degraded``. A vendor-closed stream is a normal end and reports ``ok``.
    """

    def __init__(self, provider: str, model: Optional[str] = None) -> None:
        self.provider = provider
        self.model = model
        self._source: Optional[AsyncIterator[str]] = None
        self._fragments: List[str] = []
        self._reason: Optional[CompletionError] = None
        self._finished = False
        self._started = False

    def bind(self, source: AsyncIterator[str]) -> None:
        """Attach the fragment sequence this outcome observes."""
        self._source = source

    def record_failure(self, error: CompletionError) -> None:
        """Failure sink handed to the engine; only degrading failures stick."""
        if error.kind.degrades:
            self._reason = error

    def __aiter__(self) -> AsyncIterator[str]:
        if self._source is None:
            raise RuntimeError("CompletionOutcome has no bound sequence")
        if self._started:
            raise RuntimeError("CompletionOutcome can only be iterated once")
        self._started = True
        return self._iterate(self._source)

    async def _iterate(self, source: AsyncIterator[str]) -> AsyncIterator[str]:
        async with aclosing(source) as fragments:
            async for fragment in fragments:
                self._fragments.append(fragment)
                yield fragment
        self._finished = True

    async def consume(self) -> "CompletionOutcome":
        """Drain the sequence and return ``self`` for inspection."""
        async for _ in self:
            pass
        return self

    @property
    def fragments(self) -> Tuple[str, ...]:
        return tuple(self._fragments)

    @property
    def text(self) -> str:
        return "".join(self._fragments)

    @property
    def reason(self) -> Optional[CompletionError]:
        """The failure that truncated the sequence, or ``None``."""
        return self._reason

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def status(self) -> str:
        if not self._finished:
            return STATUS_PENDING
        return STATUS_DEGRADED if self._reason is not None else STATUS_OK

    @property
    def degraded(self) -> bool:
        return self.status == STATUS_DEGRADED

    def __repr__(self) -> str:
        return (
            f"CompletionOutcome(provider={self.provider!r}, model={self.model!r}, "
            f"status={self.status!r}, fragments={len(self._fragments)})"
        )


__all__ = ["CompletionOutcome", "STATUS_PENDING"]
