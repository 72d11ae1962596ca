"""Streaming engine behaviour against a fake completions transport.

Covers ordering, vendor-closed termination, mid-stream failure truncation,
request build/send failures, empty units, and release on early abandonment.
"""

from __future__ import annotations

import asyncio
import logging

import httpx
import pytest

from completion_providers import CompletionError, CompletionOptions, FailureKind, OpenAIEngine, StreamClosedError
from completion_providers.base.streaming import collect_fragments

from .fakes import (
    FakeOpenAIClient,
    FakeStream,
    StatusError,
    empty_unit,
    events_of,
    payloads,
    raising,
    returning,
    unit,
    warnings_of,
)

OPTS = CompletionOptions(sampling_temperature=0.1, max_decoding_tokens=40)


def _engine(respond, logger) -> tuple[OpenAIEngine, FakeOpenAIClient]:
    client = FakeOpenAIClient(respond)
    return OpenAIEngine(client, "gpt-test", logger=logger), client


def _run(engine: OpenAIEngine, prompt="Tell me a joke", options=OPTS):
    return asyncio.run(collect_fragments(engine.generate(prompt, options)))


def test_joke_stream_ends_on_vendor_close(log_capture, engine_logger):
    stream = FakeStream([unit("Why"), unit(" did"), unit(" the chicken...")], error=httpx.StreamClosed())
    engine, client = _engine(returning(stream), engine_logger)

    fragments = _run(engine)

    assert fragments == ["Why", " did", " the chicken..."]  # nosec B101
    assert warnings_of(log_capture) == []  # nosec B101
    assert client.completions.calls == [  # nosec B101
        {"model": "gpt-test", "prompt": "Tell me a joke", "temperature": 0.1, "max_tokens": 40, "stream": True}
    ]
    assert stream.closed  # nosec B101


def test_fragments_follow_arrival_order(log_capture, engine_logger):
    parts = [f"t{i} " for i in range(25)]
    engine, _ = _engine(returning(FakeStream([unit(p) for p in parts])), engine_logger)

    fragments = _run(engine)

    assert fragments == parts  # nosec B101
    assert "".join(fragments) == "".join(parts)  # nosec B101
    assert warnings_of(log_capture) == []  # nosec B101


def test_custom_stream_closed_error_is_not_a_warning(log_capture, engine_logger):
    engine, _ = _engine(returning(FakeStream([unit("a")], error=StreamClosedError())), engine_logger)

    assert _run(engine) == ["a"]  # nosec B101
    assert warnings_of(log_capture) == []  # nosec B101
    assert "stream.closed" in events_of(log_capture, logging.DEBUG)  # nosec B101


def test_tagged_stream_closed_error_ends_the_stream(log_capture, engine_logger):
    closed = CompletionError(kind=FailureKind.STREAM_CLOSED, message="done", provider="openai")
    stream = FakeStream([unit("a")], error=closed)
    engine, _ = _engine(returning(stream), engine_logger)

    assert _run(engine) == ["a"]  # nosec B101
    assert warnings_of(log_capture) == []  # nosec B101
    assert "stream.closed" in events_of(log_capture, logging.DEBUG)  # nosec B101
    assert stream.closed  # nosec B101


def test_zero_unit_stream_yields_nothing(log_capture, engine_logger):
    stream = FakeStream([], error=httpx.StreamClosed())
    engine, _ = _engine(returning(stream), engine_logger)

    assert _run(engine) == []  # nosec B101
    assert warnings_of(log_capture) == []  # nosec B101
    assert stream.closed  # nosec B101


def test_other_stream_error_truncates_with_one_warning(log_capture, engine_logger):
    stream = FakeStream([unit("Why"), unit(" did")], error=RuntimeError("connection reset by peer"))
    engine, _ = _engine(returning(stream), engine_logger)

    fragments = _run(engine)

    assert fragments == ["Why", " did"]  # nosec B101
    warns = warnings_of(log_capture)
    assert len(warns) == 1, f"expected exactly one warning, got {warns}"  # nosec B101
    assert warns[0]["event"] == "stream.failed"  # nosec B101
    assert warns[0]["emitted_count"] == 2  # nosec B101
    assert "connection reset" in warns[0]["error"]  # nosec B101
    assert stream.closed  # nosec B101


def test_unit_without_choices_is_skipped(log_capture, engine_logger):
    stream = FakeStream([unit("a"), empty_unit(), unit("b")], error=httpx.StreamClosed())
    engine, _ = _engine(returning(stream), engine_logger)

    assert _run(engine) == ["a", "b"]  # nosec B101
    assert warnings_of(log_capture) == []  # nosec B101
    assert "stream.empty_unit" in events_of(log_capture, logging.DEBUG)  # nosec B101


def test_empty_text_delta_is_forwarded(log_capture, engine_logger):
    engine, _ = _engine(returning(FakeStream([unit(""), unit("x")])), engine_logger)

    assert _run(engine) == ["", "x"]  # nosec B101


def test_open_failure_yields_nothing_with_one_warning(log_capture, engine_logger):
    engine, client = _engine(raising(StatusError("Too many requests", 429)), engine_logger)

    assert _run(engine) == []  # nosec B101
    assert len(client.completions.calls) == 1  # nosec B101
    warns = warnings_of(log_capture)
    assert [w["event"] for w in warns] == ["request.send_failed"]  # nosec B101
    assert warns[0]["error_code"] == "rate_limit"  # nosec B101


@pytest.mark.parametrize(
    "prompt, options",
    [
        (42, OPTS),
        ("\ud800 lone surrogate", OPTS),
        ("hi", CompletionOptions(sampling_temperature=float("nan"), max_decoding_tokens=40)),
        ("hi", CompletionOptions(sampling_temperature="hot", max_decoding_tokens=40)),
        ("hi", CompletionOptions(sampling_temperature=0.1, max_decoding_tokens=4.5)),
    ],
)
def test_build_failure_degrades_to_empty_sequence(log_capture, engine_logger, prompt, options):
    engine, client = _engine(returning(FakeStream([unit("never")])), engine_logger)

    assert _run(engine, prompt=prompt, options=options) == []  # nosec B101
    assert client.completions.calls == []  # nosec B101
    warns = warnings_of(log_capture)
    assert [w["event"] for w in warns] == ["request.build_failed"]  # nosec B101
    assert warns[0]["error_code"] == "validation"  # nosec B101
    assert "generate.start" not in events_of(log_capture)  # nosec B101


def test_abandoning_the_sequence_closes_the_stream(log_capture, engine_logger):
    stream = FakeStream([unit("one"), unit("two"), unit("three")])
    engine, _ = _engine(returning(stream), engine_logger)

    async def scenario():
        agen = engine.generate("count", OPTS)
        first = await agen.__anext__()
        await agen.aclose()
        return first

    assert asyncio.run(scenario()) == "one"  # nosec B101
    assert stream.closed  # nosec B101
    assert stream.reads == 1  # nosec B101
    assert warnings_of(log_capture) == []  # nosec B101


def test_finalize_event_reports_emitted_count(log_capture, engine_logger):
    engine, _ = _engine(returning(FakeStream([unit("a"), unit("b")])), engine_logger)

    _run(engine)

    finals = [p for p in payloads(log_capture) if p["event"] == "generate.finalize"]
    assert len(finals) == 1  # nosec B101
    assert finals[0]["emitted_count"] == 2  # nosec B101
    assert finals[0]["status"] == "ok"  # nosec B101
    assert finals[0]["provider"] == "openai"  # nosec B101


def test_engine_state_is_read_only(engine_logger):
    engine, client = _engine(returning(FakeStream([])), engine_logger)

    assert engine.client is client  # nosec B101
    assert engine.model_name == "gpt-test"  # nosec B101
    assert engine.provider_name == "openai"  # nosec B101
    with pytest.raises(AttributeError):
        engine.model_name = "other"  # type: ignore[misc]
