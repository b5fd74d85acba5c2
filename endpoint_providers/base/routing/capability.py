"""
Abstract REST surfaces a vendor may or may not expose.

Vendors declare the subset they serve by mapping each supported capability to
the URL fragment of their API (see :class:`CapabilityRouter`).
"""
from __future__ import annotations

from enum import Enum


class CapabilityEndpoint(str, Enum):
    """Enumerated capability endpoints."""

    CHAT = "chat"
    EMBEDDINGS = "embeddings"
    MODELS = "models"
    COMPLETIONS = "completions"
    RERANK = "rerank"
    TOKENIZE = "tokenize"

    @classmethod
    def parse(cls, value: "str | CapabilityEndpoint") -> "CapabilityEndpoint":
        """Accept an enum member or its (case-insensitive) value."""
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())


__all__ = ["CapabilityEndpoint"]
