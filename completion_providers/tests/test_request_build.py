"""Request DTO construction and CompletionOptions pass-through."""

from __future__ import annotations

import dataclasses

import pytest
from pydantic import ValidationError

from completion_providers.base.dto import (
    ChatCompletionRequestDTO,
    CompletionRequestDTO,
    build_chat_request,
    build_completion_request,
)
from completion_providers.base.models import CompletionOptions


def test_options_are_frozen():
    opts = CompletionOptions(sampling_temperature=0.5, max_decoding_tokens=10)
    with pytest.raises(dataclasses.FrozenInstanceError):
        opts.sampling_temperature = 1.0  # type: ignore[misc]


def test_completion_request_passes_values_verbatim():
    opts = CompletionOptions(sampling_temperature=3.5, max_decoding_tokens=-1)
    req = build_completion_request("gpt-test", "Tell me a joke", opts)

    assert req.to_params() == {  # nosec B101
        "model": "gpt-test",
        "prompt": "Tell me a joke",
        "temperature": 3.5,
        "max_tokens": -1,
        "stream": True,
    }


def test_integer_temperature_is_not_coerced():
    req = build_completion_request("m", "p", CompletionOptions(sampling_temperature=1, max_decoding_tokens=5))
    assert req.to_params()["temperature"] == 1  # nosec B101
    assert isinstance(req.to_params()["temperature"], int)  # nosec B101


def test_chat_request_shape():
    req = build_chat_request("gpt-35-turbo", "hi", CompletionOptions(sampling_temperature=0.1, max_decoding_tokens=40))

    assert req.to_params() == {  # nosec B101
        "model": "gpt-35-turbo",
        "messages": [{"role": "user", "content": "hi"}],
        "temperature": 0.1,
        "max_tokens": 40,
    }


@pytest.mark.parametrize(
    "kwargs",
    [
        {"model": "", "prompt": "p", "temperature": 0.1, "max_tokens": 1},
        {"model": "m", "prompt": 7, "temperature": 0.1, "max_tokens": 1},
        {"model": "m", "prompt": "p", "temperature": float("-inf"), "max_tokens": 1},
        {"model": "m", "prompt": "p", "temperature": "0.1", "max_tokens": 1},
        {"model": "m", "prompt": "p", "temperature": 0.1, "max_tokens": "1"},
        {"model": "m", "prompt": "p", "temperature": 0.1, "max_tokens": 1, "stream": False},
    ],
)
def test_invalid_completion_payloads_are_rejected(kwargs):
    with pytest.raises(ValidationError):
        CompletionRequestDTO(**kwargs)


def test_chat_request_rejects_extra_fields():
    with pytest.raises(ValidationError):
        ChatCompletionRequestDTO(
            model="m",
            messages=[{"role": "user", "content": "p"}],
            temperature=0.1,
            max_tokens=1,
            stream=True,
        )


def test_dto_is_immutable():
    req = build_completion_request("m", "p", CompletionOptions(sampling_temperature=0.1, max_decoding_tokens=1))
    with pytest.raises(ValidationError):
        req.prompt = "changed"  # type: ignore[misc]
