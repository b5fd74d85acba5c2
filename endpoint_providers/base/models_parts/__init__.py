"""Canonical result model parts (one class per module).

Prefer importing from ``endpoint_providers.base.models``.
"""

from .stream_internal_kind import StreamInternalKind
from .finish_reason import FinishReason
from .content_part import ContentPart, ContentPartType
from .function_call import FunctionCall
from .tool_call import ToolCall
from .chat_usage import ChatUsage
from .chat_message import ChatMessage, Role
from .chat_choice import ChatChoice
from .chat_result import ChatResult
from .embedding_result import EmbeddingResult
from .model_info import ModelInfo
from .model_list_result import ModelListResult

__all__ = [
    "StreamInternalKind",
    "FinishReason",
    "ContentPart",
    "ContentPartType",
    "FunctionCall",
    "ToolCall",
    "ChatUsage",
    "ChatMessage",
    "Role",
    "ChatChoice",
    "ChatResult",
    "EmbeddingResult",
    "ModelInfo",
    "ModelListResult",
]
