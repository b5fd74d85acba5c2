"""
Canonical increment of an in-progress or completed chat completion.

A stream is a sequence of ``ChatResult`` values: ordinary deltas
(``stream_kind=NONE``), optional vendor-extension increments, then the
synthesized terminal pair (``APPEND_ASSISTANT_MESSAGE`` when text was produced,
and always ``FINISH_DATA`` last). Non-streaming calls return a single result
whose choices carry ``message`` instead of ``delta``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from .chat_choice import ChatChoice
from .chat_usage import ChatUsage
from .finish_reason import FinishReason
from .stream_internal_kind import StreamInternalKind
from .tool_call import ToolCall


@dataclass(frozen=True)
class ChatResult:
    """One canonical increment (or a complete non-streaming result).

    Attributes:
        id: Vendor correlation id; may only be known after the first records.
        choices: Ordered choices of this increment.
        usage: Token usage; present only on terminal increments.
        stream_kind: Stream-control marker.
        vendor_extensions: Optional vendor data outside the canonical shape
            (citations, search queries/results), keyed by vendor name.
        provider: Vendor that produced the result.
        model: Model name when known.
    """

    id: Optional[str] = None
    choices: Tuple[ChatChoice, ...] = ()
    usage: Optional[ChatUsage] = None
    stream_kind: StreamInternalKind = StreamInternalKind.NONE
    vendor_extensions: Optional[Mapping[str, Any]] = None
    provider: Optional[str] = None
    model: Optional[str] = None

    @property
    def delta_text(self) -> str:
        """Concatenated delta text across choices (empty for control increments)."""
        return "".join(c.delta.text for c in self.choices if c.delta is not None)

    @property
    def text(self) -> str:
        """Text of the first choice's message, falling back to its delta."""
        for choice in self.choices:
            msg = choice.message or choice.delta
            if msg is not None:
                return msg.text
        return ""

    @property
    def tool_calls(self) -> Tuple[ToolCall, ...]:
        """All tool calls across choices, in order."""
        calls: Tuple[ToolCall, ...] = ()
        for choice in self.choices:
            msg = choice.message or choice.delta
            if msg is not None:
                calls += msg.tool_calls
        return calls

    @property
    def finish_reason(self) -> Optional[FinishReason]:
        return next((c.finish_reason for c in self.choices if c.finish_reason is not None), None)

    @property
    def is_finish(self) -> bool:
        return self.stream_kind is StreamInternalKind.FINISH_DATA

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON-friendly canonical increment format."""
        return {
            "id": self.id,
            "provider": self.provider,
            "model": self.model,
            "choices": [c.to_dict() for c in self.choices],
            "usage": self.usage.to_dict() if self.usage else None,
            "stream_kind": self.stream_kind.value,
            "vendor_extensions": dict(self.vendor_extensions) if self.vendor_extensions else None,
        }


__all__ = ["ChatResult"]
