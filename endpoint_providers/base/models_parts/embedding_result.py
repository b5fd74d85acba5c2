"""
Canonical result of an embeddings call.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .chat_usage import ChatUsage


@dataclass(frozen=True)
class EmbeddingResult:
    """Vectors returned for each input text, in input order."""

    embeddings: Tuple[Tuple[float, ...], ...]
    id: Optional[str] = None
    model: Optional[str] = None
    usage: Optional[ChatUsage] = None
    provider: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "model": self.model,
            "provider": self.provider,
            "embeddings": [list(v) for v in self.embeddings],
            "usage": self.usage.to_dict() if self.usage else None,
        }


__all__ = ["EmbeddingResult"]
