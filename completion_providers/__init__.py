"""completion_providers package

Uniform streaming text-completion interface over two vendor APIs: the OpenAI
token-streaming completions endpoint and the Azure OpenAI chat endpoint.

Callers obtain an engine (directly or via :func:`create`) and consume
``engine.generate(prompt, options)`` as an async iterator of text fragments.

Public API (re-exported):
    - Version: ``__version__``
    - Values: :class:`CompletionOptions`
    - Engines: :class:`OpenAIEngine`, :class:`AzureEngine`
    - Factory: :func:`create`, :class:`EngineFactory`
    - Results: :class:`CompletionOutcome`, :func:`collect_text`
    - Errors: :class:`CompletionError`, :class:`ErrorCode`,
      :class:`FailureKind`, :class:`UnknownEngineError`
"""

from .azure import AzureEngine
from .base.errors import CompletionError, ErrorCode, FailureKind, StreamClosedError
from .base.factory import EngineFactory, UnknownEngineError, create
from .base.interfaces import CompletionStream
from .base.models import CompletionOptions
from .base.streaming import CompletionOutcome, collect_text
from .openai import OpenAIEngine

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "CompletionOptions",
    "CompletionStream",
    "OpenAIEngine",
    "AzureEngine",
    "EngineFactory",
    "UnknownEngineError",
    "create",
    "CompletionOutcome",
    "collect_text",
    "CompletionError",
    "ErrorCode",
    "FailureKind",
    "StreamClosedError",
]
