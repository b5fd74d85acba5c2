"""Outbound request DTOs (pydantic)."""

from .chat import ChatRequest, ContentPartDTO, MessageDTO, ToolCallDTO, ToolSpecDTO

__all__ = ["ChatRequest", "ContentPartDTO", "MessageDTO", "ToolCallDTO", "ToolSpecDTO"]
