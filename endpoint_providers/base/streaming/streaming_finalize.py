"""Finalize logging for stream decode loops.

Emits exactly one consolidated event per stream: ``stream.decoder.end`` on a
clean end, ``stream.decoder.cancelled`` after cooperative cancellation, and
``stream.decoder.error`` after a transport failure.
"""
from __future__ import annotations

import logging
from typing import Optional

from ..cancellation import CancelledError
from ..errors import ErrorCode, ProviderError
from ..logging import LogContext, normalized_log_event
from .streaming_metrics import StreamMetrics


def log_stream_finalize(
    *,
    logger: logging.Logger,
    ctx: LogContext,
    metrics: StreamMetrics,
    finish_reason: Optional[str],
    appended: bool,
    failure: Optional[BaseException] = None,
) -> None:
    """Write the terminal log event for one decode loop."""
    if failure is None:
        event, error_code, level = "stream.decoder.end", None, logging.INFO
    elif isinstance(failure, CancelledError):
        event, error_code, level = "stream.decoder.cancelled", ErrorCode.CANCELLED.value, logging.INFO
    else:
        code = failure.code if isinstance(failure, ProviderError) else ErrorCode.UNKNOWN
        event, error_code, level = "stream.decoder.error", code.value, logging.WARNING
    normalized_log_event(
        logger,
        event,
        ctx,
        phase="finalize",
        attempt=None,
        emitted=metrics.emitted > 0,
        tokens=metrics.tokens,
        error_code=error_code,
        level=level,
        emitted_count=metrics.emitted,
        lines=metrics.lines,
        skipped=metrics.skipped,
        appended_assistant_message=appended,
        finish_reason=finish_reason,
        time_to_first_token_ms=metrics.time_to_first_token_ms,
        total_duration_ms=metrics.total_duration_ms,
        error=str(failure) if failure is not None else None,
    )


__all__ = ["log_stream_finalize"]
