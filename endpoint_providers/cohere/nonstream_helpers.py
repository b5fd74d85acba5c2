"""Cohere non-streaming deserializers.

Each function takes ``(raw_json, raw_request_body, context)`` and returns a
canonical result, raising ``MalformedRecordError`` when the body does not
match the expected envelope. The model name is taken from the log context
when present, otherwise from the request body that produced the response.
"""

from __future__ import annotations

import json
from typing import Any, List, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..base.errors import MalformedRecordError
from ..base.models import (
    ChatChoice,
    ChatMessage,
    ChatResult,
    ChatUsage,
    ContentPart,
    EmbeddingResult,
    FinishReason,
    FunctionCall,
    ModelInfo,
    ModelListResult,
    ToolCall,
)
from ..base.streaming import ToolCallIdGenerator
from .constants import FINISH_REASONS, PROVIDER_NAME
from .stream_decoder import canonical_arguments, usage_from_billed
from .wire import ChatResponse, EmbedResponse, ModelsResponse, ResponseMessage, UsageMeta

M = TypeVar("M", bound=BaseModel)


def _parse(record: Type[M], raw_json: str) -> M:
    try:
        return record.model_validate_json(raw_json)
    except ValidationError as exc:
        raise MalformedRecordError(
            f"invalid {record.__name__} body: {exc.error_count()} error(s)",
            provider=PROVIDER_NAME,
            raw=exc,
        ) from exc


def _model_name(raw_request_body: Optional[str], context: Any) -> Optional[str]:
    model = getattr(context, "model", None)
    if model:
        return model
    if not raw_request_body:
        return None
    try:
        body = json.loads(raw_request_body)
    except ValueError:
        return None
    return body.get("model") if isinstance(body, dict) else None


def _usage(*blocks: Optional[UsageMeta]) -> Optional[ChatUsage]:
    for block in blocks:
        if block is not None and block.counts() is not None:
            return usage_from_billed(block.counts())
    return None


def _message_v2(message: ResponseMessage, ids: ToolCallIdGenerator) -> ChatMessage:
    if isinstance(message.content, str):
        parts: Tuple[ContentPart, ...] = (ContentPart(type="text", text=message.content),)
    else:
        parts = tuple(ContentPart(type="text", text=p.text) for p in message.content or () if p.type == "text")
    if message.citations:
        parts += tuple(ContentPart(type="citation", data=c) for c in message.citations)
    calls = tuple(
        ToolCall(
            id=ids.resolve(c.id, c.function.name),
            function=FunctionCall(name=c.function.name, arguments=canonical_arguments(c.function.arguments)),
        )
        for c in message.tool_calls
    )
    text = "".join(p.text for p in parts if p.type == "text" and p.text)
    return ChatMessage(role="assistant", content=text, parts=parts, tool_calls=calls)


def _message_v1(resp: ChatResponse, ids: ToolCallIdGenerator) -> ChatMessage:
    calls = tuple(
        ToolCall(
            id=ids.resolve(c.id, c.name),
            function=FunctionCall(name=c.name, arguments=canonical_arguments(c.parameters)),
        )
        for c in resp.tool_calls or ()
    )
    parts: Tuple[ContentPart, ...] = (ContentPart(type="text", text=resp.text),) if resp.text else ()
    parts += tuple(ContentPart(type="citation", data=c) for c in resp.citations or ())
    return ChatMessage(role="assistant", content=resp.text or "", parts=parts, tool_calls=calls)


def deserialize_chat(raw_json: str, raw_request_body: Optional[str] = None, context: Any = None) -> ChatResult:
    """Complete chat body (v2 ``message`` envelope, or v1 ``text``)."""
    resp = _parse(ChatResponse, raw_json)
    ids = ToolCallIdGenerator()
    message = _message_v2(resp.message, ids) if resp.message is not None else _message_v1(resp, ids)
    extensions = {
        k: v
        for k, v in (("search_queries", resp.search_queries), ("search_results", resp.search_results))
        if v
    }
    return ChatResult(
        id=resp.id or resp.generation_id,
        choices=(ChatChoice(message=message, finish_reason=FinishReason.from_vendor(resp.finish_reason, FINISH_REASONS)),),
        usage=_usage(resp.usage, resp.meta),
        vendor_extensions={PROVIDER_NAME: extensions} if extensions else None,
        provider=PROVIDER_NAME,
        model=_model_name(raw_request_body, context),
    )


def deserialize_embeddings(raw_json: str, raw_request_body: Optional[str] = None, context: Any = None) -> EmbeddingResult:
    """Embed body: ``embeddings`` as a list (v1) or ``{"float": [...]}`` (v2)."""
    resp = _parse(EmbedResponse, raw_json)
    vectors: List[List[float]] = resp.embeddings if isinstance(resp.embeddings, list) else (resp.embeddings.float_ or [])
    return EmbeddingResult(
        embeddings=tuple(tuple(v) for v in vectors),
        id=resp.id,
        model=_model_name(raw_request_body, context),
        usage=_usage(resp.meta),
        provider=PROVIDER_NAME,
    )


def deserialize_models(raw_json: str, raw_request_body: Optional[str] = None, context: Any = None) -> ModelListResult:
    """Model listing body."""
    resp = _parse(ModelsResponse, raw_json)
    return ModelListResult(
        models=tuple(
            ModelInfo(
                name=m.name,
                endpoints=tuple(m.endpoints),
                context_length=m.context_length,
                provider=PROVIDER_NAME,
            )
            for m in resp.models
        ),
        next_page_token=resp.next_page_token,
        provider=PROVIDER_NAME,
    )


__all__ = ["deserialize_chat", "deserialize_embeddings", "deserialize_models"]
