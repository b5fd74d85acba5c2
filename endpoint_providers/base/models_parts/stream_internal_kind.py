"""
Stream-control marker carried by every canonical increment.

Ordinary deltas carry ``NONE``. The decoder's finalize step emits at most one
``APPEND_ASSISTANT_MESSAGE`` (commit the accumulated text as the assistant
message) followed by exactly one ``FINISH_DATA`` (the turn is over).
"""
from __future__ import annotations

from enum import Enum


class StreamInternalKind(str, Enum):
    """Marker distinguishing plain deltas from synthesized terminal increments."""

    NONE = "none"
    APPEND_ASSISTANT_MESSAGE = "append_assistant_message"
    FINISH_DATA = "finish_data"


__all__ = ["StreamInternalKind"]
