"""Streaming package for the endpoint layer.

Exposes the vendor-neutral decode loop, its per-stream accumulator, line
readers, metrics and finalize logging under a single namespace.
"""

from .accumulator import StreamAccumulator, ToolCallIdGenerator
from .collect import accumulate_results, collect_stream
from .decoder import LineStreamDecoder, StreamEnvelope, is_terminal_increment
from .events import RawLineObserver, StreamEventHandler
from .line_reader import AsyncIterLineReader, IterLineReader, LineReader, as_line_reader, read_line_cancellable
from .streaming_finalize import log_stream_finalize
from .streaming_metrics import StreamMetrics

__all__ = [
    "StreamAccumulator",
    "ToolCallIdGenerator",
    "accumulate_results",
    "collect_stream",
    "LineStreamDecoder",
    "StreamEnvelope",
    "is_terminal_increment",
    "RawLineObserver",
    "StreamEventHandler",
    "AsyncIterLineReader",
    "IterLineReader",
    "LineReader",
    "as_line_reader",
    "read_line_cancellable",
    "log_stream_finalize",
    "StreamMetrics",
]
