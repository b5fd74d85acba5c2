"""Pydantic records for the Cohere wire format.

Streaming
---------
Cohere streams newline-delimited JSON objects, not server-sent events. Every
record carries ``event_type`` and ``is_finished``; the remaining fields depend
on the event type. Unknown fields are ignored so vendor additions never break
decoding.

Non-streaming
-------------
Complete chat, embed and model-listing bodies. Both the v2 envelope
(``message.content`` parts, ``usage``) and the older v1 envelope (``text``,
``meta``) are accepted.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class _Record(BaseModel):
    model_config = ConfigDict(extra="ignore")


# ---- shared pieces ----
class BilledUnits(_Record):
    input_tokens: Optional[int] = None
    output_tokens: Optional[int] = None


class UsageMeta(_Record):
    """``meta`` (v1) or ``usage`` (v2) block; both carry ``billed_units``."""

    billed_units: Optional[BilledUnits] = None
    tokens: Optional[BilledUnits] = None

    def counts(self) -> Optional[BilledUnits]:
        return self.billed_units or self.tokens


class InboundTool(_Record):
    """A tool call as Cohere reports it (v1 ``parameters``, object or JSON text)."""

    name: str
    parameters: Union[str, Dict[str, Any], None] = None
    id: Optional[str] = None


class ToolFunction(_Record):
    name: str
    arguments: Union[str, Dict[str, Any], None] = None


class InboundToolV2(_Record):
    """A v2 tool call: ``{"id", "type", "function": {"name", "arguments"}}``."""

    id: Optional[str] = None
    type: str = "function"
    function: ToolFunction


# ---- stream records ----
class StreamEventBase(_Record):
    event_type: str
    is_finished: bool = False


class TextGenerationEvent(_Record):
    text: str


class StreamStartEvent(_Record):
    generation_id: Optional[str] = None


class ToolCallsGenerationEvent(_Record):
    tool_calls: List[InboundTool] = Field(default_factory=list)


class CitationGenerationEvent(_Record):
    citations: List[Dict[str, Any]] = Field(default_factory=list)


class SearchQueriesGenerationEvent(_Record):
    search_queries: List[Dict[str, Any]] = Field(default_factory=list)


class SearchResultsEvent(_Record):
    search_results: List[Dict[str, Any]] = Field(default_factory=list)
    documents: Optional[List[Dict[str, Any]]] = None


class StreamEndResponse(_Record):
    generation_id: Optional[str] = None
    response_id: Optional[str] = None
    finish_reason: Optional[str] = None
    meta: Optional[UsageMeta] = None
    usage: Optional[UsageMeta] = None

    def billed(self) -> Optional[BilledUnits]:
        for block in (self.meta, self.usage):
            if block is not None and block.counts() is not None:
                return block.counts()
        return None


class StreamEndEvent(_Record):
    finish_reason: Optional[str] = None
    response: Optional[StreamEndResponse] = None


# ---- complete responses ----
class MessageContentPart(_Record):
    type: str = "text"
    text: Optional[str] = None


class ResponseMessage(_Record):
    role: str = "assistant"
    content: Union[str, List[MessageContentPart], None] = None
    tool_calls: List[InboundToolV2] = Field(default_factory=list)
    tool_plan: Optional[str] = None
    citations: Optional[List[Dict[str, Any]]] = None


class ChatResponse(_Record):
    id: Optional[str] = None
    generation_id: Optional[str] = None
    finish_reason: Optional[str] = None
    message: Optional[ResponseMessage] = None
    text: Optional[str] = None
    tool_calls: Optional[List[InboundTool]] = None
    citations: Optional[List[Dict[str, Any]]] = None
    search_queries: Optional[List[Dict[str, Any]]] = None
    search_results: Optional[List[Dict[str, Any]]] = None
    usage: Optional[UsageMeta] = None
    meta: Optional[UsageMeta] = None


class EmbedByType(_Record):
    float_: Optional[List[List[float]]] = Field(default=None, alias="float")


class EmbedResponse(_Record):
    id: Optional[str] = None
    embeddings: Union[List[List[float]], EmbedByType]
    meta: Optional[UsageMeta] = None


class ModelEntry(_Record):
    name: str
    endpoints: List[str] = Field(default_factory=list)
    context_length: Optional[int] = None


class ModelsResponse(_Record):
    models: List[ModelEntry] = Field(default_factory=list)
    next_page_token: Optional[str] = None


__all__ = [
    "BilledUnits",
    "UsageMeta",
    "InboundTool",
    "InboundToolV2",
    "ToolFunction",
    "StreamEventBase",
    "TextGenerationEvent",
    "StreamStartEvent",
    "ToolCallsGenerationEvent",
    "CitationGenerationEvent",
    "SearchQueriesGenerationEvent",
    "SearchResultsEvent",
    "StreamEndResponse",
    "StreamEndEvent",
    "MessageContentPart",
    "ResponseMessage",
    "ChatResponse",
    "EmbedByType",
    "EmbedResponse",
    "ModelEntry",
    "ModelsResponse",
]
