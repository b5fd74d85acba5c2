"""Cohere stream decoder.

Cohere streams one JSON object per line (no ``data:`` framing). Each record
is first parsed as the minimal ``{event_type, is_finished}`` envelope and
then, by discriminator, as its full record:

- ``stream-start``: captures ``generation_id`` as the stream id; no increment.
- ``text-generation``: yields a text delta and appends to the accumulator.
- ``tool-calls-generation``: one increment with a tool-role choice holding
  every call; missing ids are synthesized, ``parameters`` become JSON text.
- ``citation-generation`` / ``search-queries-generation`` /
  ``search-results``: parsed always; surfaced as ``vendor_extensions``
  increments only when ``surface_ancillary_events`` is enabled.
- ``stream-end``: records usage (``billed_units``) and finish reason, then
  ends the stream.
"""

from __future__ import annotations

import json
import logging
from typing import Callable, Dict, Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..base.errors import MalformedRecordError
from ..base.models import ChatResult, ChatUsage, FinishReason
from ..base.streaming import LineStreamDecoder, StreamAccumulator, StreamEnvelope
from .constants import (
    CITATION_GENERATION,
    FINISH_REASONS,
    PROVIDER_NAME,
    SEARCH_QUERIES_GENERATION,
    SEARCH_RESULTS,
    STREAM_END,
    STREAM_START,
    TEXT_GENERATION,
    TOOL_CALLS_GENERATION,
)
from .wire import (
    BilledUnits,
    CitationGenerationEvent,
    SearchQueriesGenerationEvent,
    SearchResultsEvent,
    StreamEndEvent,
    StreamEventBase,
    StreamStartEvent,
    TextGenerationEvent,
    ToolCallsGenerationEvent,
)

R = TypeVar("R", bound=BaseModel)
_Handler = Callable[[str, StreamAccumulator], List[ChatResult]]


def usage_from_billed(billed: Optional[BilledUnits]) -> Optional[ChatUsage]:
    """Canonical usage from Cohere ``billed_units`` (``None`` when absent)."""
    if billed is None:
        return None
    return ChatUsage.from_counts(billed.input_tokens, billed.output_tokens, provider=PROVIDER_NAME)


def canonical_arguments(parameters: object) -> str:
    """Dump tool parameters to canonical JSON text (``{}`` when missing)."""
    if parameters is None:
        return "{}"
    if isinstance(parameters, str):
        if not parameters.strip():
            return "{}"
        try:
            parameters = json.loads(parameters)
        except ValueError:
            return parameters
    return json.dumps(parameters, ensure_ascii=False, separators=(",", ":"))


class CohereStreamDecoder(LineStreamDecoder):
    """Translate Cohere stream records into canonical increments."""

    def __init__(self, *, logger: logging.Logger, surface_ancillary_events: bool = False) -> None:
        super().__init__(
            provider=PROVIDER_NAME,
            logger=logger,
            surface_ancillary_events=surface_ancillary_events,
        )
        self._handlers: Dict[str, _Handler] = {
            STREAM_START: self._on_stream_start,
            TEXT_GENERATION: self._on_text,
            TOOL_CALLS_GENERATION: self._on_tool_calls,
            CITATION_GENERATION: self._on_citations,
            SEARCH_QUERIES_GENERATION: self._on_search_queries,
            SEARCH_RESULTS: self._on_search_results,
            STREAM_END: self._on_stream_end,
        }

    def _parse(self, record: Type[R], line: str) -> R:
        try:
            return record.model_validate_json(line)
        except ValidationError as exc:
            raise MalformedRecordError(
                f"invalid {record.__name__} record: {exc.error_count()} error(s)",
                provider=self.provider,
                raw=exc,
            ) from exc

    # ---- hooks ----
    def parse_envelope(self, line: str) -> Optional[StreamEnvelope]:
        base = self._parse(StreamEventBase, line)
        if base.event_type not in self._handlers:
            return None
        return StreamEnvelope(kind=base.event_type, is_finished=base.is_finished)

    def dispatch(self, envelope: StreamEnvelope, line: str, acc: StreamAccumulator) -> Iterable[ChatResult]:
        return self._handlers[envelope.kind](line, acc)

    # ---- record handlers ----
    def _on_stream_start(self, line: str, acc: StreamAccumulator) -> List[ChatResult]:
        event = self._parse(StreamStartEvent, line)
        if event.generation_id:
            acc.response_id = event.generation_id
        return []

    def _on_text(self, line: str, acc: StreamAccumulator) -> List[ChatResult]:
        event = self._parse(TextGenerationEvent, line)
        acc.append_text(event.text)
        return [acc.text_delta(event.text)]

    def _on_tool_calls(self, line: str, acc: StreamAccumulator) -> List[ChatResult]:
        event = self._parse(ToolCallsGenerationEvent, line)
        if not event.tool_calls:
            return []
        calls = [(c.id, c.name, canonical_arguments(c.parameters)) for c in event.tool_calls]
        return [acc.tool_calls_delta(calls)]

    def _ancillary(self, acc: StreamAccumulator, key: str, value: object) -> List[ChatResult]:
        if not self.surface_ancillary_events:
            return []
        return [acc.extension({PROVIDER_NAME: {key: value}})]

    def _on_citations(self, line: str, acc: StreamAccumulator) -> List[ChatResult]:
        event = self._parse(CitationGenerationEvent, line)
        return self._ancillary(acc, "citations", event.citations)

    def _on_search_queries(self, line: str, acc: StreamAccumulator) -> List[ChatResult]:
        event = self._parse(SearchQueriesGenerationEvent, line)
        return self._ancillary(acc, "search_queries", event.search_queries)

    def _on_search_results(self, line: str, acc: StreamAccumulator) -> List[ChatResult]:
        event = self._parse(SearchResultsEvent, line)
        return self._ancillary(acc, "search_results", event.search_results)

    def _on_stream_end(self, line: str, acc: StreamAccumulator) -> List[ChatResult]:
        # stream-end is terminal even when its payload is unusable
        acc.mark_terminal()
        event = self._parse(StreamEndEvent, line)
        response = event.response
        if response is not None:
            acc.set_usage(usage_from_billed(response.billed()))
            if acc.response_id is None:
                acc.response_id = response.generation_id or response.response_id
        vendor_reason = event.finish_reason or (response.finish_reason if response is not None else None)
        acc.set_finish_reason(FinishReason.from_vendor(vendor_reason, FINISH_REASONS))
        return []


__all__ = ["CohereStreamDecoder", "canonical_arguments", "usage_from_billed"]
