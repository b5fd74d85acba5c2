"""Cohere vendor tables: capability fragments, finish reasons, stream kinds."""

from __future__ import annotations

from typing import Dict

from ..base.models import FinishReason
from ..base.routing import CapabilityEndpoint

PROVIDER_NAME = "cohere"

CAPABILITY_FRAGMENTS: Dict[CapabilityEndpoint, str] = {
    CapabilityEndpoint.CHAT: "chat",
    CapabilityEndpoint.EMBEDDINGS: "embed",
    CapabilityEndpoint.MODELS: "models",
}

FINISH_REASONS: Dict[str, FinishReason] = {
    "COMPLETE": FinishReason.STOP,
    "STOP_SEQUENCE": FinishReason.STOP,
    "MAX_TOKENS": FinishReason.LENGTH,
    "TOOL_CALL": FinishReason.TOOL_CALLS,
    "ERROR_TOXIC": FinishReason.CONTENT_FILTER,
    "ERROR": FinishReason.ERROR,
    "ERROR_LIMIT": FinishReason.ERROR,
    "USER_CANCEL": FinishReason.CANCELLED,
    "TIMEOUT": FinishReason.TIMEOUT,
}

# Stream record discriminators
STREAM_START = "stream-start"
STREAM_END = "stream-end"
TEXT_GENERATION = "text-generation"
TOOL_CALLS_GENERATION = "tool-calls-generation"
CITATION_GENERATION = "citation-generation"
SEARCH_QUERIES_GENERATION = "search-queries-generation"
SEARCH_RESULTS = "search-results"

__all__ = [
    "PROVIDER_NAME",
    "CAPABILITY_FRAGMENTS",
    "FINISH_REASONS",
    "STREAM_START",
    "STREAM_END",
    "TEXT_GENERATION",
    "TOOL_CALLS_GENERATION",
    "CITATION_GENERATION",
    "SEARCH_QUERIES_GENERATION",
    "SEARCH_RESULTS",
]
