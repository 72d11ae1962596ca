from __future__ import annotations

import types

import httpx

from completion_providers.base.errors import (
    CompletionError,
    ErrorCode,
    FailureKind,
    StreamClosedError,
    classify_exception,
    is_stream_closed,
)


def test_classify_completion_error_passthrough():
    e = CompletionError(kind=FailureKind.TRANSPORT, message="nope", provider="x", code=ErrorCode.AUTH)
    assert classify_exception(e) is ErrorCode.AUTH  # nosec B101 - assert is appropriate in unit tests


def test_classify_http_status_mapping():
    e1 = types.SimpleNamespace(status_code=404)
    assert classify_exception(e1) is ErrorCode.NOT_FOUND  # nosec B101 - assert is appropriate in unit tests
    e2 = types.SimpleNamespace(response=types.SimpleNamespace(status_code=503))
    assert classify_exception(e2) is ErrorCode.UNAVAILABLE  # nosec B101 - assert is appropriate in unit tests


def test_classify_timeouts():
    assert classify_exception(TimeoutError()) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(httpx.ConnectTimeout("slow")) is ErrorCode.TIMEOUT  # nosec B101


def test_classify_heuristics():
    assert classify_exception(Exception("rate limit exceeded")) is ErrorCode.RATE_LIMIT  # nosec B101
    assert classify_exception(Exception("timed out waiting")) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(Exception("unsupported parameter")) is ErrorCode.UNSUPPORTED  # nosec B101
    assert classify_exception(Exception("random")) is ErrorCode.UNKNOWN  # nosec B101


def test_stream_closed_detection():
    assert is_stream_closed(httpx.StreamClosed())  # nosec B101
    assert is_stream_closed(StreamClosedError("done"))  # nosec B101
    assert not is_stream_closed(httpx.ReadError("reset"))  # nosec B101
    assert not is_stream_closed(RuntimeError("closed"))  # nosec B101


def test_tagged_completion_error_counts_as_stream_closed():
    closed = CompletionError(kind=FailureKind.STREAM_CLOSED, message="done", provider="openai")
    broken = CompletionError(kind=FailureKind.TRANSPORT, message="stream closed", provider="openai")
    assert is_stream_closed(closed)  # nosec B101
    assert not is_stream_closed(broken)  # nosec B101


def test_only_stream_closed_is_not_degrading():
    degrading = {k for k in FailureKind if k.degrades}
    assert degrading == {FailureKind.REQUEST_BUILD, FailureKind.TRANSPORT, FailureKind.EMPTY_RESPONSE}  # nosec B101


def test_completion_error_str_is_compact():
    e = CompletionError(kind=FailureKind.EMPTY_RESPONSE, message="Empty choice from vendor", provider="azure", model="m")
    assert str(e) == "azure:m empty_response/unknown: Empty choice from vendor"  # nosec B101
