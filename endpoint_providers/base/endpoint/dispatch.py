"""Inbound non-streaming dispatcher.

Maps a requested result type (``ChatResult``, ``EmbeddingResult``,
``ModelListResult``, ...) to the vendor deserializer that knows its envelope.
The mapping is explicit and built once per provider; requesting a type with no
entry returns ``None`` (the "unsupported result type" outcome) rather than
raising, so callers can probe several optional shapes cheaply.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Type, TypeVar

from ..logging import LogContext, log_event

T = TypeVar("T")

# deserializer(raw_json, raw_request_body, context) -> result | None
Deserializer = Callable[[str, Optional[str], Any], Optional[Any]]


class InboundDispatcher:
    """Type-keyed deserialization table for one vendor."""

    def __init__(
        self,
        *,
        provider: str,
        handlers: Mapping[type, Deserializer],
        logger: logging.Logger,
    ) -> None:
        self._provider = provider
        self._handlers: Dict[type, Deserializer] = dict(handlers)
        self._logger = logger

    def supported_types(self) -> Tuple[type, ...]:
        return tuple(self._handlers)

    def deserialize(
        self,
        result_type: Type[T],
        raw_json: str,
        raw_request_body: Optional[str] = None,
        context: Any = None,
    ) -> Optional[T]:
        """Deserialize ``raw_json`` into ``result_type``.

        Returns ``None`` when the type has no registered deserializer or the
        deserializer found nothing to return. Malformed payloads for a known
        type propagate the deserializer's ``MalformedRecordError``.
        """
        fn = self._handlers.get(result_type)
        if fn is None:
            log_event(
                self._logger,
                "nonstream.unsupported_result_type",
                LogContext(provider=self._provider),
                level=logging.DEBUG,
                result_type=getattr(result_type, "__name__", str(result_type)),
            )
            return None
        result = fn(raw_json, raw_request_body, context)
        if result is None:
            return None
        return result  # type: ignore[return-value]


__all__ = ["Deserializer", "InboundDispatcher"]
