"""
Pydantic DTOs for outbound chat requests.

Purpose
-------
Validate the vendor-agnostic chat request before an adapter serializes it into
its own envelope. Tool definitions arrive from an external schema producer as
plain JSON-schema mappings; this module only checks their outer shape.

Validation either succeeds or raises ``pydantic.ValidationError``; callers at
the edge (CLI, service) report it as a usage error.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, model_validator


Role = Literal["system", "user", "assistant", "tool"]


class ContentPartDTO(BaseModel):
    """A structured content part within an outbound message."""

    type: Literal["text", "json", "document", "image", "other"]
    text: Optional[str] = None
    data: Optional[Dict[str, Any]] = None


class ToolCallDTO(BaseModel):
    """A tool call previously requested by the assistant, replayed as history."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    arguments: Dict[str, Any] = Field(default_factory=dict)


class MessageDTO(BaseModel):
    """Represents one outbound chat message.

    Rules:
        - ``content`` is a string or a list of parts; it may be empty only for
          assistant messages that carry ``tool_calls``.
        - ``tool`` messages must reference the call they answer via
          ``tool_call_id``.
    """

    role: Role
    content: Union[str, List[ContentPartDTO]] = ""
    tool_calls: List[ToolCallDTO] = Field(default_factory=list)
    tool_call_id: Optional[str] = None

    @model_validator(mode="after")
    def _validate_content(self) -> "MessageDTO":
        has_content = bool(self.content.strip()) if isinstance(self.content, str) else bool(self.content)
        if not has_content and not (self.role == "assistant" and self.tool_calls):
            raise ValueError("message content must be non-empty")
        if self.role == "tool" and not self.tool_call_id:
            raise ValueError("tool messages require tool_call_id")
        return self

    def text(self) -> str:
        """Flattened text of the message content."""
        if isinstance(self.content, str):
            return self.content
        return "\n".join(p.text for p in self.content if p.text)


class ToolSpecDTO(BaseModel):
    """Function tool definition produced by the external schema generator."""

    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    parameters: Dict[str, Any] = Field(default_factory=lambda: {"type": "object", "properties": {}})


class ChatRequest(BaseModel):
    """Vendor-agnostic chat request.

    Parameters:
        model: Target model identifier; adapters fall back to their configured
            default when ``None``.
        messages: Ordered, non-empty list of messages.
        tools: Optional tool definitions.
        max_tokens: Positive completion budget when set.
        temperature: Within [0.0, 2.0] when set.
        stream: Whether the caller wants the streaming protocol.
        extra: Vendor passthrough fields merged into the payload last.
    """

    model: Optional[str] = None
    messages: List[MessageDTO] = Field(..., min_length=1)
    tools: Optional[List[ToolSpecDTO]] = None
    max_tokens: Optional[int] = Field(default=None, gt=0)
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    stream: bool = False
    extra: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_prompt(cls, prompt: str, *, model: Optional[str] = None, system: Optional[str] = None, **kwargs: Any) -> "ChatRequest":
        """Shortcut for a single user turn with an optional system message."""
        messages = [MessageDTO(role="system", content=system)] if system else []
        messages.append(MessageDTO(role="user", content=prompt))
        return cls(model=model, messages=messages, **kwargs)


__all__ = [
    "Role",
    "ContentPartDTO",
    "ToolCallDTO",
    "MessageDTO",
    "ToolSpecDTO",
    "ChatRequest",
]
