"""
Canonical finish reasons and vendor value mapping.

Vendors report why generation stopped with their own vocabularies; adapters
translate them through :meth:`FinishReason.from_vendor` so consumers only see
this closed set. Anything unrecognized becomes ``UNKNOWN``.
"""
from __future__ import annotations

from enum import Enum
from typing import Mapping, Optional


class FinishReason(str, Enum):
    """Why a completion (or stream) ended."""

    UNKNOWN = "unknown"
    STOP = "stop"
    LENGTH = "length"
    TOOL_CALLS = "tool_calls"
    CONTENT_FILTER = "content_filter"
    ERROR = "error"
    CANCELLED = "cancelled"
    TIMEOUT = "timeout"

    @classmethod
    def from_vendor(
        cls,
        value: Optional[str],
        mapping: Mapping[str, "FinishReason"],
    ) -> "FinishReason":
        """Translate a vendor finish-reason string (case-insensitive)."""
        if not value:
            return cls.UNKNOWN
        return mapping.get(value.strip().upper(), cls.UNKNOWN)


__all__ = ["FinishReason"]
