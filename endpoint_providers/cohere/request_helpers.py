"""Serialize canonical requests into Cohere v2 payloads."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Sequence

from ..base.dto import ChatRequest, MessageDTO, ToolSpecDTO


def _message_payload(msg: MessageDTO) -> Dict[str, Any]:
    out: Dict[str, Any] = {"role": msg.role}
    text = msg.text()
    if msg.role == "tool":
        out["tool_call_id"] = msg.tool_call_id
        out["content"] = text
        return out
    if msg.tool_calls:
        out["tool_calls"] = [
            {
                "id": c.id,
                "type": "function",
                "function": {"name": c.name, "arguments": json.dumps(c.arguments, ensure_ascii=False)},
            }
            for c in msg.tool_calls
        ]
        if text:
            out["tool_plan"] = text
        return out
    out["content"] = text
    return out


def _tool_payload(tool: ToolSpecDTO) -> Dict[str, Any]:
    fn: Dict[str, Any] = {"name": tool.name, "parameters": tool.parameters}
    if tool.description:
        fn["description"] = tool.description
    return {"type": "function", "function": fn}


def build_chat_payload(request: ChatRequest, *, model: Optional[str], stream: bool) -> Dict[str, Any]:
    """Return the Cohere ``/chat`` body for ``request``.

    ``request.extra`` is merged last so callers can pass vendor fields such as
    ``documents`` or ``citation_options`` unchanged.
    """
    payload: Dict[str, Any] = {
        "model": request.model or model,
        "messages": [_message_payload(m) for m in request.messages],
        "stream": stream,
    }
    if request.tools:
        payload["tools"] = [_tool_payload(t) for t in request.tools]
    if request.max_tokens is not None:
        payload["max_tokens"] = request.max_tokens
    if request.temperature is not None:
        payload["temperature"] = request.temperature
    payload.update(request.extra)
    return payload


def build_embed_payload(
    texts: Sequence[str],
    *,
    model: Optional[str],
    input_type: str = "search_document",
) -> Dict[str, Any]:
    """Return the Cohere ``/embed`` body requesting float vectors."""
    items: List[str] = [str(t) for t in texts]
    return {
        "model": model,
        "texts": items,
        "input_type": input_type,
        "embedding_types": ["float"],
    }


__all__ = ["build_chat_payload", "build_embed_payload"]
