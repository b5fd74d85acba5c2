"""Generic line-oriented stream decoder.

Vendors stream newline-delimited records that are not assumed to follow any
event framing standard. :class:`LineStreamDecoder` owns the vendor-neutral
state machine; a vendor subclass supplies only two hooks:

``parse_envelope(line)``
    Return the minimal ``StreamEnvelope`` (discriminator + finished flag), or
    ``None`` for a malformed line or an unknown discriminator.
``dispatch(envelope, line, acc)``
    Yield canonical increments for one record and update the accumulator
    (``acc.mark_terminal()`` for an explicit terminal event).

Loop contract
-------------
1. Read a line; ``None`` ends the input.
2. Blank lines are skipped.
3. The raw-line observer, if any, is awaited with the untouched line.
4. Envelope parse failures and unknown kinds are skipped, never fatal.
5. Dispatch; a ``MalformedRecordError`` from the vendor skips the record.
6. A terminal event or a set ``is_finished`` flag ends the input.
7. Finalize exactly once: optional ``APPEND_ASSISTANT_MESSAGE`` then
   ``FINISH_DATA``. A read failure (any ``ProviderError``) or cooperative
   cancellation (``CancelledError``) is raised only after finalize.
"""
from __future__ import annotations

import abc
import asyncio
import logging
from dataclasses import dataclass
from typing import AsyncIterator, Iterable, Optional

from ..cancellation import CancellationToken, CancelledError
from .events import StreamEventHandler
from ..errors import MalformedRecordError, ProviderError, TransportError
from ..logging import LogContext, log_event, normalized_log_event
from ..models import ChatResult, StreamInternalKind
from .accumulator import StreamAccumulator
from .line_reader import LineReader, read_line_cancellable
from .streaming_finalize import log_stream_finalize
from .streaming_metrics import StreamMetrics


@dataclass(frozen=True)
class StreamEnvelope:
    """Minimal view of one wire record: its kind and the finished flag."""

    kind: str
    is_finished: bool = False


class LineStreamDecoder(abc.ABC):
    """Vendor-neutral decode loop over newline-delimited records.

    Instances hold only read-only configuration; all per-stream state lives in
    the :class:`StreamAccumulator` created by each :meth:`decode` call, so one
    decoder may serve many concurrent streams.
    """

    def __init__(
        self,
        *,
        provider: str,
        logger: logging.Logger,
        surface_ancillary_events: bool = False,
    ) -> None:
        self.provider = provider
        self._logger = logger
        self.surface_ancillary_events = surface_ancillary_events

    # ---- vendor hooks ----
    @abc.abstractmethod
    def parse_envelope(self, line: str) -> Optional[StreamEnvelope]:
        """Return the record envelope, or ``None`` to skip the line."""

    @abc.abstractmethod
    def dispatch(self, envelope: StreamEnvelope, line: str, acc: StreamAccumulator) -> Iterable[ChatResult]:
        """Translate one record into zero or more canonical increments."""

    # ---- loop ----
    def new_accumulator(self, model: Optional[str]) -> StreamAccumulator:
        return StreamAccumulator(provider=self.provider, model=model)

    async def decode(
        self,
        reader: LineReader,
        *,
        model: Optional[str] = None,
        event_handler: Optional[StreamEventHandler] = None,
        cancellation_token: Optional[CancellationToken] = None,
        ctx: Optional[LogContext] = None,
    ) -> AsyncIterator[ChatResult]:
        """Lazily yield canonical increments decoded from ``reader``.

        Not restartable: the reader is consumed. Raises ``ProviderError`` (usually
        ``TransportError``) or ``CancelledError`` after the terminal
        increments have been yielded.
        """
        ctx = ctx or LogContext(provider=self.provider, model=model)
        acc = self.new_accumulator(model)
        metrics = StreamMetrics()
        failure: Optional[ProviderError | CancelledError] = None
        normalized_log_event(self._logger, "stream.start", ctx, phase="start", emitted=None, tokens=None)
        try:
            while not acc.terminal:
                line = await self._read(reader, cancellation_token, model)
                if line is None:
                    break
                if not line.strip():
                    continue
                metrics.lines += 1
                await self._observe(line, event_handler, ctx)
                envelope = self._envelope(line, ctx)
                if envelope is None:
                    metrics.skipped += 1
                    continue
                try:
                    produced = list(self.dispatch(envelope, line, acc))
                except MalformedRecordError as exc:
                    metrics.skipped += 1
                    self._log_skip(ctx, envelope.kind, exc)
                    produced = []
                for result in produced:
                    metrics.mark_emitted(is_text=bool(result.delta_text))
                    yield result
                if envelope.is_finished:
                    acc.mark_terminal()
        except (CancelledError, ProviderError) as exc:
            failure = exc

        for result in acc.finalize():
            yield result
        metrics.close(acc.usage)
        log_stream_finalize(
            logger=self._logger,
            ctx=ctx.with_response_id(acc.response_id),
            metrics=metrics,
            finish_reason=acc.finish_reason.value,
            appended=acc.has_text,
            failure=failure,
        )
        if failure is not None:
            raise failure

    async def _read(
        self,
        reader: LineReader,
        token: Optional[CancellationToken],
        model: Optional[str],
    ) -> Optional[str]:
        try:
            return await read_line_cancellable(reader, token)
        except (CancelledError, asyncio.CancelledError, ProviderError):
            raise
        except Exception as exc:
            raise TransportError.from_exception(exc, provider=self.provider, model=model) from exc

    async def _observe(self, line: str, handler: Optional[StreamEventHandler], ctx: LogContext) -> None:
        if handler is None or handler.on_raw_line is None:
            return
        try:
            await handler.on_raw_line(line)
        except Exception as exc:  # observer failures must not alter decoding
            log_event(
                self._logger,
                "stream.observer_error",
                ctx,
                level=logging.WARNING,
                error=str(exc),
                error_type=exc.__class__.__name__,
            )

    def _envelope(self, line: str, ctx: LogContext) -> Optional[StreamEnvelope]:
        try:
            envelope = self.parse_envelope(line)
        except MalformedRecordError as exc:
            self._log_skip(ctx, None, exc)
            return None
        if envelope is None:
            self._log_skip(ctx, None, None)
        return envelope

    def _log_skip(self, ctx: LogContext, kind: Optional[str], exc: Optional[BaseException]) -> None:
        log_event(
            self._logger,
            "stream.decode_error",
            ctx,
            level=logging.DEBUG,
            code="DECODE",
            kind=kind,
            error=str(exc) if exc is not None else "unrecognized record",
        )


def is_terminal_increment(result: ChatResult) -> bool:
    """True for the synthesized ``APPEND_ASSISTANT_MESSAGE``/``FINISH_DATA`` increments."""
    return result.stream_kind is not StreamInternalKind.NONE


__all__ = ["LineStreamDecoder", "StreamEnvelope", "is_terminal_increment"]
