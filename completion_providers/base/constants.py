"""Shared constants for completion engines.

Central location for event names and sentinel strings so log consumers and
tests match on one spelling.
"""
from __future__ import annotations

# Log event names
EVENT_GENERATE_START = "generate.start"
EVENT_GENERATE_FINALIZE = "generate.finalize"
EVENT_BUILD_FAILED = "request.build_failed"
EVENT_SEND_FAILED = "request.send_failed"
EVENT_STREAM_FAILED = "stream.failed"
EVENT_STREAM_CLOSED = "stream.closed"
EVENT_EMPTY_UNIT = "stream.empty_unit"
EVENT_EMPTY_CHOICES = "chat.empty_choices"
EVENT_RELEASE_FAILED = "stream.release_failed"

# Outcome statuses
STATUS_OK = "ok"
STATUS_DEGRADED = "degraded"

__all__ = [
    "EVENT_GENERATE_START",
    "EVENT_GENERATE_FINALIZE",
    "EVENT_BUILD_FAILED",
    "EVENT_SEND_FAILED",
    "EVENT_STREAM_FAILED",
    "EVENT_STREAM_CLOSED",
    "EVENT_EMPTY_UNIT",
    "EVENT_EMPTY_CHOICES",
    "EVENT_RELEASE_FAILED",
    "STATUS_OK",
    "STATUS_DEGRADED",
]
