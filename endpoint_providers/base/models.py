"""Canonical, vendor-neutral result model.

Re-exports the one-class-per-module implementations under
``endpoint_providers.base.models_parts``. All types are frozen dataclasses:
an increment never changes after the decoder yields it.
"""

from .models_parts import (
    ChatChoice,
    ChatMessage,
    ChatResult,
    ChatUsage,
    ContentPart,
    ContentPartType,
    EmbeddingResult,
    FinishReason,
    FunctionCall,
    ModelInfo,
    ModelListResult,
    Role,
    StreamInternalKind,
    ToolCall,
)

__all__ = [
    "ChatChoice",
    "ChatMessage",
    "ChatResult",
    "ChatUsage",
    "ContentPart",
    "ContentPartType",
    "EmbeddingResult",
    "FinishReason",
    "FunctionCall",
    "ModelInfo",
    "ModelListResult",
    "Role",
    "StreamInternalKind",
    "ToolCall",
]
