"""Collect a canonical stream into one complete result.

Consumers that do not render deltas (CLI non-interactive mode, tests, batch
jobs) fold the increments of a stream back into a single ``ChatResult`` shaped
like a non-streaming response.
"""

from __future__ import annotations

from typing import AsyncIterable, Iterable, List, Optional

from ..models import (
    ChatChoice,
    ChatMessage,
    ChatResult,
    ChatUsage,
    FinishReason,
    StreamInternalKind,
    ToolCall,
)


def accumulate_results(results: Iterable[ChatResult]) -> ChatResult:
    """Fold stream increments into one complete ``ChatResult``.

    - Text comes from the ``APPEND_ASSISTANT_MESSAGE`` increment when present,
      otherwise from the concatenated deltas.
    - Tool calls are collected in order across increments.
    - Usage and finish reason come from ``FINISH_DATA``.
    - Vendor extensions are merged into lists keyed by extension name.
    """
    items: List[ChatResult] = list(results)
    if not items:
        return ChatResult(choices=(ChatChoice(message=ChatMessage(role="assistant", content=""),
                                              finish_reason=FinishReason.UNKNOWN),))

    deltas: List[str] = []
    committed: Optional[str] = None
    tool_calls: List[ToolCall] = []
    usage: Optional[ChatUsage] = None
    finish: FinishReason = FinishReason.UNKNOWN
    extensions: dict = {}
    for item in items:
        if item.stream_kind is StreamInternalKind.APPEND_ASSISTANT_MESSAGE:
            committed = item.text
        elif item.stream_kind is StreamInternalKind.FINISH_DATA:
            finish = item.finish_reason or FinishReason.UNKNOWN
        else:
            deltas.append(item.delta_text)
            tool_calls.extend(item.tool_calls)
        if item.usage is not None:
            usage = item.usage
        for key, value in (item.vendor_extensions or {}).items():
            extensions.setdefault(key, []).append(value)

    last = items[-1]
    text = committed if committed is not None else "".join(deltas)
    message = ChatMessage(role="assistant", content=text, tool_calls=tuple(tool_calls))
    return ChatResult(
        id=next((i.id for i in reversed(items) if i.id), None),
        choices=(ChatChoice(message=message, finish_reason=finish),),
        usage=usage,
        vendor_extensions=extensions or None,
        provider=last.provider,
        model=last.model,
    )


async def collect_stream(results: AsyncIterable[ChatResult]) -> List[ChatResult]:
    """Drain an async stream into a list (propagates the stream's errors)."""
    return [r async for r in results]


__all__ = ["accumulate_results", "collect_stream"]
