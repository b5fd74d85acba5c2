"""Structured logging context object for endpoint providers.

Defines :class:`LogContext`, a dataclass carrying the fields shared by every
log event of one call: vendor, model, capability, and the correlation ids that
arrive from the vendor mid-stream. ``to_dict`` merges ``extra`` and prunes
``None`` values for clean structured output.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict, field, replace
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Structured context for endpoint logging events."""

    provider: Optional[str] = None
    model: Optional[str] = None
    capability: Optional[str] = None
    request_id: Optional[str] = None
    response_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}

    def with_response_id(self, response_id: Optional[str]) -> "LogContext":
        """Return a copy carrying the vendor correlation id."""
        return replace(self, response_id=response_id, extra=dict(self.extra))


__all__ = ["LogContext"]
