"""
Token accounting attached to terminal increments.

Usage is reported once per completion: on the non-streaming result, or on the
synthesized terminal increments of a stream. It is never copied onto deltas.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ChatUsage:
    """Prompt/completion/total token counts for one completion."""

    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None
    provider: Optional[str] = None

    @classmethod
    def from_counts(
        cls,
        prompt: Optional[int],
        completion: Optional[int],
        total: Optional[int] = None,
        *,
        provider: Optional[str] = None,
    ) -> "ChatUsage":
        """Build usage deriving ``total`` from prompt + completion when absent."""
        if total is None and prompt is not None and completion is not None:
            total = prompt + completion
        return cls(prompt_tokens=prompt, completion_tokens=completion, total_tokens=total, provider=provider)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "prompt": self.prompt_tokens,
            "completion": self.completion_tokens,
            "total": self.total_tokens,
        }


__all__ = ["ChatUsage"]
