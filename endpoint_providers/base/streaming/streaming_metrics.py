"""Streaming metrics collected by one decode loop.

Isolated within the streaming package so the decoder loop stays small.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..models import ChatUsage


@dataclass
class StreamMetrics:
    """Per-stream counters reported in the finalize log event.

    Attributes:
        lines: Non-blank lines read from the transport.
        skipped: Lines dropped as malformed or of an unknown kind.
        emitted: Increments yielded before finalize.
        time_to_first_token_ms: Delay until the first text delta.
        total_duration_ms: Wall time of the whole decode.
        tokens: Token usage mapping when the vendor reported it.
    """

    lines: int = 0
    skipped: int = 0
    emitted: int = 0
    time_to_first_token_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    tokens: Optional[Dict[str, Any]] = None
    started_at: float = field(default_factory=lambda: time.perf_counter())

    def _elapsed_ms(self) -> float:
        return round((time.perf_counter() - self.started_at) * 1000.0, 3)

    def mark_emitted(self, *, is_text: bool) -> None:
        self.emitted += 1
        if is_text and self.time_to_first_token_ms is None:
            self.time_to_first_token_ms = self._elapsed_ms()

    def close(self, usage: Optional[ChatUsage]) -> None:
        self.total_duration_ms = self._elapsed_ms()
        self.tokens = usage.to_dict() if usage is not None else None


__all__ = ["StreamMetrics"]
