"""
One candidate slice of a canonical result.

Streaming increments populate ``delta``; non-streaming results populate
``message``. ``finish_reason`` is set on the terminal increment only.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .chat_message import ChatMessage
from .finish_reason import FinishReason


@dataclass(frozen=True)
class ChatChoice:
    """A single choice within a :class:`ChatResult`."""

    delta: Optional[ChatMessage] = None
    message: Optional[ChatMessage] = None
    finish_reason: Optional[FinishReason] = None
    index: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "delta": self.delta.to_dict() if self.delta else None,
            "message": self.message.to_dict() if self.message else None,
            "finish_reason": self.finish_reason.value if self.finish_reason else None,
        }


__all__ = ["ChatChoice"]
