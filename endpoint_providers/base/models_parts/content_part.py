"""
Structured content part model for canonical messages.

Vendors may emit assistant content as several parts (text, citations,
documents). ``ContentPart`` captures a normalized shape so a message can keep
its ordered parts while still exposing a flattened text view.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Literal, Mapping, Optional


ContentPartType = Literal[
    "text",          # Plain text content
    "json",          # JSON content as string
    "tool_call",     # Tool call metadata
    "citation",      # Citation / grounding metadata
    "document",      # Retrieved document or search result
    "image",         # Image content (path/URL/base64)
    "other",         # Catch-all (vendor-specific type info in data)
]


@dataclass(frozen=True)
class ContentPart:
    """A single piece of structured message content.

    Attributes:
        type: The semantic kind of the part, e.g. ``"text"`` or ``"citation"``.
        text: Optional textual content for human-readable parts.
        data: Optional vendor payload for non-text parts.
    """

    type: ContentPartType
    text: Optional[str] = None
    data: Optional[Mapping[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the part."""
        out = asdict(self)
        if self.data is not None:
            out["data"] = dict(self.data)
        return out


__all__ = [
    "ContentPart",
    "ContentPartType",
]
