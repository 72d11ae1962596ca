"""
CompletionOptions value object carried into every ``generate`` call.

Both fields are caller-supplied and forwarded verbatim to the vendor request:
engines never clamp, round, or default them. Range validation is a vendor API
concern.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CompletionOptions:
    """Generation parameters for a single completion.

    Attributes:
        sampling_temperature: Sampling temperature sent as ``temperature``.
        max_decoding_tokens: Output token budget sent as ``max_tokens``.
    """

    sampling_temperature: float
    max_decoding_tokens: int


__all__ = ["CompletionOptions"]
