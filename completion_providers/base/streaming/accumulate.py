"""Helpers for draining a fragment sequence into text."""

from __future__ import annotations

from contextlib import aclosing
from typing import AsyncIterator, List


async def collect_fragments(fragments: AsyncIterator[str]) -> List[str]:
    """Consume ``fragments`` fully and return them in emission order."""
    out: List[str] = []
    async with aclosing(fragments) as source:
        async for fragment in source:
            out.append(fragment)
    return out


async def collect_text(fragments: AsyncIterator[str]) -> str:
    """Consume ``fragments`` fully and return their concatenation."""
    return "".join(await collect_fragments(fragments))


__all__ = ["collect_fragments", "collect_text"]
