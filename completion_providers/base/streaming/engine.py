"""BaseCompletionEngine: the shared lazy-sequence lifecycle.

Purpose:
- Drive one ``generate`` call through the request lifecycle
  ``Idle -> RequestBuilt -> RequestSent -> ResponseReceived -> Emitting -> Done``
  for any vendor protocol, so streaming and single-shot engines differ only in
  three hooks: ``_build_request``, ``_send`` and ``_fragments``.
- Absorb every failure at the engine boundary. Build, transport and
  empty-response failures end the sequence early and emit exactly one WARNING
  event on the injected logger; a vendor-closed stream ends it silently.

External dependencies:
- The transport client is whatever the concrete engine was constructed with
  (an ``openai`` async client in production, fakes in tests). This module
  performs no I/O itself beyond awaiting the hooks.

Resource semantics:
- Each call owns its request/response state; the engine and its client are
  never mutated, so one engine serves any number of concurrent calls.
- The vendor response is released (``close``/``aclose``) when the sequence
  ends for any reason, including the consumer abandoning it via ``aclose()``.
"""

from __future__ import annotations

import inspect
import logging
import uuid
from contextlib import aclosing
from typing import Any, AsyncIterator, Callable, Optional

from ..constants import (
    EVENT_BUILD_FAILED,
    EVENT_EMPTY_CHOICES,
    EVENT_GENERATE_FINALIZE,
    EVENT_GENERATE_START,
    EVENT_RELEASE_FAILED,
    EVENT_SEND_FAILED,
    EVENT_STREAM_CLOSED,
    EVENT_STREAM_FAILED,
    STATUS_DEGRADED,
    STATUS_OK,
)
from ..errors import CompletionError, ErrorCode, FailureKind, classify_exception, is_stream_closed
from ..logging import LogContext, get_logger, log_event, normalized_log_event
from ..models import CompletionOptions
from .outcome import CompletionOutcome

FailureSink = Callable[[CompletionError], None]

_FAILURE_EVENTS = {
    FailureKind.REQUEST_BUILD: (EVENT_BUILD_FAILED, "build"),
    FailureKind.TRANSPORT: (EVENT_STREAM_FAILED, "stream"),
    FailureKind.EMPTY_RESPONSE: (EVENT_EMPTY_CHOICES, "response"),
}


class BaseCompletionEngine:
    """Reusable base class for vendor completion engines.

    Subclasses must implement:
    - ``provider_name``: canonical engine identifier.
    - ``_build_request(prompt, options)``: return a validated request DTO.
    - ``_send(request)``: issue the request and return the vendor response
      (a complete object or an async stream of units).
    - ``_fragments(response, ctx)``: async generator turning the response into
      text fragments; raises ``CompletionError`` for an empty answer.
    """

    def __init__(self, client: Any, model_name: str, *, logger: Optional[logging.Logger] = None) -> None:
        """Bind the transport handle and target model for the engine's lifetime.

        Parameters:
            client: Vendor SDK client (or any object with the same surface).
            model_name: Model identifier sent with every request.
            logger: Diagnostics collaborator; defaults to ``providers.<name>``.
        """
        self._client = client
        self._model_name = model_name
        self._logger = logger or get_logger(f"providers.{self.provider_name}")

    # ----- Abstract surface -----
    @property
    def provider_name(self) -> str:  # pragma: no cover - abstract
        """Return the canonical engine name (e.g., ``openai``)."""
        raise NotImplementedError

    def _build_request(self, prompt: str, options: CompletionOptions) -> Any:  # pragma: no cover - abstract
        raise NotImplementedError

    async def _send(self, request: Any) -> Any:  # pragma: no cover - abstract
        raise NotImplementedError

    def _fragments(self, response: Any, ctx: LogContext) -> AsyncIterator[str]:  # pragma: no cover - abstract
        raise NotImplementedError

    # ----- Read-only state -----
    @property
    def client(self) -> Any:
        """The transport handle shared by every call."""
        return self._client

    @property
    def model_name(self) -> str:
        """Model identifier sent with every request."""
        return self._model_name

    @property
    def logger(self) -> logging.Logger:
        """Diagnostics logger receiving this engine's events."""
        return self._logger

    # ----- Public API -----
    def generate(self, prompt: str, options: CompletionOptions) -> AsyncIterator[str]:
        """Return a lazy, non-restartable sequence of completion fragments.

        Never raises for build, transport, or empty-response failures; the
        sequence simply ends (possibly empty, possibly truncated).
        """
        return self._run(prompt, options)

    def generate_outcome(self, prompt: str, options: CompletionOptions) -> CompletionOutcome:
        """Like :meth:`generate`, but report whether the sequence was degraded.

        Iterate the returned :class:`CompletionOutcome` (or ``await
        outcome.consume()``), then inspect ``status`` and ``reason``.
        """
        outcome = CompletionOutcome(provider=self.provider_name, model=self._model_name)
        outcome.bind(self._run(prompt, options, on_failure=outcome.record_failure))
        return outcome

    # ----- Lifecycle -----
    async def _run(
        self,
        prompt: str,
        options: CompletionOptions,
        on_failure: Optional[FailureSink] = None,
    ) -> AsyncIterator[str]:
        ctx = LogContext(provider=self.provider_name, model=self._model_name, request_id=uuid.uuid4().hex[:12])
        emitted = 0
        failure: Optional[CompletionError] = None
        try:
            try:
                request = self._build_request(prompt, options)
            except Exception as e:  # noqa: BLE001 - any build error degrades to an empty sequence
                failure = self._fail(ctx, FailureKind.REQUEST_BUILD, e, emitted)
                return

            self._log_start(ctx, options)

            try:
                response = await self._send(request)
            except Exception as e:  # noqa: BLE001
                failure = self._fail(ctx, FailureKind.TRANSPORT, e, emitted, event=EVENT_SEND_FAILED, phase="send")
                return

            try:
                async with aclosing(self._fragments(response, ctx)) as fragments:
                    async for fragment in fragments:
                        emitted += 1
                        yield fragment
            except Exception as e:  # noqa: BLE001
                failure = self._fail(ctx, FailureKind.TRANSPORT, e, emitted)
            finally:
                await self._release(response, ctx)
        finally:
            if failure is not None and on_failure is not None:
                on_failure(failure)
            self._log_finalize(ctx, emitted, failure)

    # ----- helpers -----
    def _fail(
        self,
        ctx: LogContext,
        kind: FailureKind,
        exc: BaseException,
        emitted: int,
        *,
        event: Optional[str] = None,
        phase: Optional[str] = None,
    ) -> CompletionError:
        """Route ``exc`` to silent termination or to a WARNING, by whether the stream was closed."""
        if is_stream_closed(exc):
            return self._stream_closed(ctx, exc, emitted)
        return self._absorb(ctx, kind, exc, emitted, event=event, phase=phase)

    def _absorb(
        self,
        ctx: LogContext,
        kind: FailureKind,
        exc: BaseException,
        emitted: int,
        *,
        event: Optional[str] = None,
        phase: Optional[str] = None,
    ) -> CompletionError:
        """Convert ``exc`` into a ``CompletionError`` and emit its single WARNING.

        A ``CompletionError`` keeps its own kind; ``kind`` only labels foreign exceptions.
        """
        if isinstance(exc, CompletionError):
            error = exc
            kind = error.kind
        else:
            code = ErrorCode.VALIDATION if kind is FailureKind.REQUEST_BUILD else classify_exception(exc)
            error = CompletionError(
                kind=kind,
                message=str(exc),
                provider=self.provider_name,
                model=self._model_name,
                code=code,
                raw=exc,
            )
        default_event, default_phase = _FAILURE_EVENTS[kind]
        normalized_log_event(
            self._logger,
            event or default_event,
            ctx,
            phase=phase or default_phase,
            level=logging.WARNING,
            error_code=error.code.value,
            emitted=emitted > 0,
            failure_kind=kind.value,
            emitted_count=emitted,
            error=repr(error.raw) if error.raw is not None else error.message,
        )
        return error

    def _stream_closed(self, ctx: LogContext, exc: BaseException, emitted: int) -> CompletionError:
        log_event(self._logger, EVENT_STREAM_CLOSED, ctx, level=logging.DEBUG, emitted_count=emitted)
        if isinstance(exc, CompletionError):
            return exc
        return CompletionError(
            kind=FailureKind.STREAM_CLOSED,
            message=str(exc) or "stream closed",
            provider=self.provider_name,
            model=self._model_name,
            raw=exc,
        )

    async def _release(self, response: Any, ctx: LogContext) -> None:
        """Close the vendor response/stream if it holds a connection."""
        for closer_name in ("aclose", "close"):
            closer = getattr(response, closer_name, None)
            if not callable(closer):
                continue
            try:
                result = closer()
                if inspect.isawaitable(result):
                    await result
            except Exception as e:  # noqa: BLE001 - release is best-effort
                log_event(self._logger, EVENT_RELEASE_FAILED, ctx, level=logging.DEBUG, error=repr(e))
            return

    def _log_start(self, ctx: LogContext, options: CompletionOptions) -> None:
        normalized_log_event(
            self._logger,
            EVENT_GENERATE_START,
            ctx,
            phase="start",
            temperature=options.sampling_temperature,
            max_tokens=options.max_decoding_tokens,
        )

    def _log_finalize(self, ctx: LogContext, emitted: int, failure: Optional[CompletionError]) -> None:
        degraded = failure is not None and failure.kind.degrades
        normalized_log_event(
            self._logger,
            EVENT_GENERATE_FINALIZE,
            ctx,
            phase="finalize",
            emitted=emitted > 0,
            emitted_count=emitted,
            status=STATUS_DEGRADED if degraded else STATUS_OK,
            failure_kind=failure.kind.value if failure is not None else None,
        )


__all__ = ["BaseCompletionEngine", "FailureSink"]
