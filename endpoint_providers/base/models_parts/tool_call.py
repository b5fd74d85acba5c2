"""
Tool invocation request carried by a canonical message.

The ``id`` is unique per call within one result. When a vendor omits it the
adapter synthesizes one from the function name plus a random suffix (see
``endpoint_providers.base.streaming.accumulator.ToolCallIdGenerator``).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from .function_call import FunctionCall


@dataclass(frozen=True)
class ToolCall:
    """A single tool call (currently always a function call)."""

    id: str
    function: FunctionCall
    type: str = "function"

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "type": self.type, "function": self.function.to_dict()}


__all__ = ["ToolCall"]
