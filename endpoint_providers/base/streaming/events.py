"""Stream event hooks supplied by callers.

The raw-line observer sees each non-blank line before the decoder interprets
it. It is awaited in-line, so a slow observer backpressures the decode loop and
ordering is preserved. Observer failures are logged and never change parsing.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

RawLineObserver = Callable[[str], Awaitable[None]]


@dataclass(frozen=True)
class StreamEventHandler:
    """Optional callbacks for a single stream decode."""

    on_raw_line: Optional[RawLineObserver] = None


__all__ = ["RawLineObserver", "StreamEventHandler"]
