"""Per-stream accumulation state owned by a single decode loop.

The accumulator is never shared: each ``decode`` call creates one, and it dies
with the loop. It collects plaintext fragments, usage, finish reason and the
vendor correlation id, and it produces the synthesized terminal increments
exactly once.
"""
from __future__ import annotations

import secrets
from typing import Any, Iterable, List, Mapping, Optional, Set, Tuple

from ..models import (
    ChatChoice,
    ChatMessage,
    ChatResult,
    ChatUsage,
    FinishReason,
    FunctionCall,
    StreamInternalKind,
    ToolCall,
)


class ToolCallIdGenerator:
    """Issue tool-call ids unique within one decode loop.

    Synthesized ids are the function name plus a random hex suffix. Ids the
    vendor supplied are recorded so a synthesized id can never collide with
    one.
    """

    def __init__(self, *, suffix_bytes: int = 6) -> None:
        self._issued: Set[str] = set()
        self._suffix_bytes = suffix_bytes

    def reserve(self, call_id: str) -> str:
        self._issued.add(call_id)
        return call_id

    def next_id(self, function_name: Optional[str]) -> str:
        prefix = (function_name or "call").strip() or "call"
        while True:
            candidate = f"{prefix}_{secrets.token_hex(self._suffix_bytes)}"
            if candidate not in self._issued:
                self._issued.add(candidate)
                return candidate

    def resolve(self, vendor_id: Optional[str], function_name: Optional[str]) -> str:
        """Keep a vendor id verbatim, or synthesize one when it is missing.

        A vendor id this generator already issued is replaced by a synthesized
        one so ids stay unique.
        """
        if vendor_id and vendor_id not in self._issued:
            return self.reserve(vendor_id)
        return self.next_id(function_name)


class StreamAccumulator:
    """Mutable state of one decode loop.

    Only finished, immutable :class:`ChatResult` values leave the accumulator;
    the running text is exposed to callers solely through the
    ``APPEND_ASSISTANT_MESSAGE`` increment produced by :meth:`finalize`.
    """

    def __init__(self, *, provider: str, model: Optional[str] = None) -> None:
        self.provider = provider
        self.model = model
        self.response_id: Optional[str] = None
        self.usage: Optional[ChatUsage] = None
        self.finish_reason: FinishReason = FinishReason.UNKNOWN
        self.tool_call_ids = ToolCallIdGenerator()
        self._fragments: List[str] = []
        self._text_seen = False
        self._terminal = False
        self._finalized = False

    # ---- state ----
    @property
    def terminal(self) -> bool:
        """Whether the vendor signalled the end of the stream."""
        return self._terminal

    @property
    def finalized(self) -> bool:
        return self._finalized

    @property
    def text(self) -> str:
        return "".join(self._fragments)

    @property
    def has_text(self) -> bool:
        """True once at least one text record was observed."""
        return self._text_seen

    def mark_terminal(self) -> None:
        self._terminal = True

    def append_text(self, fragment: str) -> None:
        self._text_seen = True
        self._fragments.append(fragment)

    def set_usage(self, usage: Optional[ChatUsage]) -> None:
        if usage is not None:
            self.usage = usage

    def set_finish_reason(self, reason: Optional[FinishReason]) -> None:
        if reason is not None and reason is not FinishReason.UNKNOWN:
            self.finish_reason = reason

    # ---- increment builders ----
    def _result(self, **kwargs: Any) -> ChatResult:
        return ChatResult(id=self.response_id, provider=self.provider, model=self.model, **kwargs)

    def text_delta(self, text: str) -> ChatResult:
        """Immediate passthrough increment for one text fragment."""
        return self._result(choices=(ChatChoice(delta=ChatMessage(role="assistant", content=text)),))

    def tool_calls_delta(self, calls: Iterable[Tuple[Optional[str], str, str]]) -> ChatResult:
        """One increment holding every call as a single tool-role choice.

        ``calls`` yields ``(vendor_id, function_name, arguments_json)``.
        """
        tool_calls = tuple(
            ToolCall(
                id=self.tool_call_ids.resolve(vendor_id, name),
                function=FunctionCall(name=name, arguments=arguments),
            )
            for vendor_id, name, arguments in calls
        )
        return self._result(choices=(ChatChoice(delta=ChatMessage(role="tool", tool_calls=tool_calls)),))

    def extension(self, payload: Mapping[str, Any]) -> ChatResult:
        """Increment carrying vendor-extension data and no choices."""
        return self._result(vendor_extensions=dict(payload))

    def finalize(self) -> Tuple[ChatResult, ...]:
        """Return the terminal increments; empty on every call after the first."""
        if self._finalized:
            return ()
        self._finalized = True
        out: List[ChatResult] = []
        if self._text_seen:
            out.append(
                self._result(
                    choices=(ChatChoice(delta=ChatMessage(role="assistant", content=self.text)),),
                    usage=self.usage,
                    stream_kind=StreamInternalKind.APPEND_ASSISTANT_MESSAGE,
                )
            )
        out.append(
            self._result(
                choices=(ChatChoice(finish_reason=self.finish_reason),),
                usage=self.usage,
                stream_kind=StreamInternalKind.FINISH_DATA,
            )
        )
        return tuple(out)


__all__ = ["StreamAccumulator", "ToolCallIdGenerator"]
