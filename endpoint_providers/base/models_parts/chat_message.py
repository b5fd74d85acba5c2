"""
Canonical chat message used for deltas and complete messages.

``content`` holds plain text; ``parts`` optionally keeps the ordered structured
parts it was flattened from; ``tool_calls`` lists requested tool invocations.
Instances are immutable: streaming text is accumulated by the decode loop and
only materialized as a message at commit time.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional, Tuple

from .content_part import ContentPart
from .tool_call import ToolCall


Role = Literal["system", "user", "assistant", "tool"]


@dataclass(frozen=True)
class ChatMessage:
    """A role-tagged message with text, structured parts, and tool calls."""

    role: Optional[Role] = None
    content: Optional[str] = None
    parts: Tuple[ContentPart, ...] = ()
    tool_calls: Tuple[ToolCall, ...] = ()

    @property
    def text(self) -> str:
        """Flattened text: ``content`` if set, else the joined text parts."""
        if self.content is not None:
            return self.content
        return "".join(p.text for p in self.parts if p.type == "text" and p.text)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"role": self.role, "content": self.content}
        if self.parts:
            out["parts"] = [p.to_dict() for p in self.parts]
        if self.tool_calls:
            out["tool_calls"] = [c.to_dict() for c in self.tool_calls]
        return out


__all__ = ["ChatMessage", "Role"]
