"""Vendor-neutral pieces of the streaming package.

Uses a tiny pipe-delimited decoder to show the loop does not assume JSON,
plus accumulator, id generator, line reader and collection helpers.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional

import pytest

from endpoint_providers.base.errors import MalformedRecordError
from endpoint_providers.base.models import ChatResult, FinishReason, StreamInternalKind
from endpoint_providers.base.streaming import (
    IterLineReader,
    LineStreamDecoder,
    StreamAccumulator,
    StreamEnvelope,
    ToolCallIdGenerator,
    accumulate_results,
    as_line_reader,
    collect_stream,
    is_terminal_increment,
)


class PipeDecoder(LineStreamDecoder):
    """Records look like ``kind|payload``; ``done|reason`` ends the stream."""

    def __init__(self) -> None:
        super().__init__(provider="pipe", logger=logging.getLogger("endpoint_providers.pipe"))

    def parse_envelope(self, line: str) -> Optional[StreamEnvelope]:
        kind, sep, _ = line.partition("|")
        if not sep:
            raise MalformedRecordError("missing separator", provider=self.provider)
        if kind not in ("text", "done", "bad"):
            return None
        return StreamEnvelope(kind=kind, is_finished=kind == "done")

    def dispatch(self, envelope: StreamEnvelope, line: str, acc: StreamAccumulator) -> Iterable[ChatResult]:
        payload = line.split("|", 1)[1]
        if envelope.kind == "bad":
            raise MalformedRecordError("bad payload", provider=self.provider)
        if envelope.kind == "done":
            acc.set_finish_reason(FinishReason(payload))
            return []
        acc.append_text(payload)
        return [acc.text_delta(payload)]


@pytest.mark.asyncio
async def test_generic_loop_with_non_json_framing():
    lines = ["text|a", "noise", "other|x", "bad|y", "text|b", "done|stop", "text|after"]
    results = await collect_stream(PipeDecoder().decode(IterLineReader(lines), model="m"))
    assert [r.delta_text for r in results if not is_terminal_increment(r)] == ["a", "b"]  # nosec B101
    assert [r.stream_kind for r in results[-2:]] == [
        StreamInternalKind.APPEND_ASSISTANT_MESSAGE,
        StreamInternalKind.FINISH_DATA,
    ]  # nosec B101
    assert results[-2].text == "ab" and results[-1].finish_reason is FinishReason.STOP  # nosec B101
    assert results[-1].provider == "pipe" and results[-1].model == "m"  # nosec B101


def test_accumulator_finalizes_once():
    acc = StreamAccumulator(provider="p", model="m")
    acc.append_text("x")
    first = acc.finalize()
    assert len(first) == 2 and acc.finalized  # nosec B101
    assert acc.finalize() == ()  # nosec B101


def test_accumulator_keeps_known_finish_reason():
    acc = StreamAccumulator(provider="p")
    acc.set_finish_reason(FinishReason.LENGTH)
    acc.set_finish_reason(FinishReason.UNKNOWN)
    acc.set_finish_reason(None)
    acc.set_usage(None)
    (finish,) = acc.finalize()
    assert finish.finish_reason is FinishReason.LENGTH and finish.usage is None  # nosec B101


def test_tool_call_ids_never_collide_with_vendor_ids(monkeypatch):
    gen = ToolCallIdGenerator()
    tokens = iter(["aaa", "aaa", "bbb", "ccc"])
    monkeypatch.setattr("endpoint_providers.base.streaming.accumulator.secrets.token_hex", lambda n: next(tokens))
    assert gen.resolve("search_aaa", "search") == "search_aaa"  # nosec B101
    # first candidate collides with the reserved vendor id, so a new suffix is drawn
    assert gen.resolve(None, "search") == "search_bbb"  # nosec B101
    assert ToolCallIdGenerator().next_id(None) == "call_ccc"  # nosec B101


def test_repeated_vendor_id_is_replaced_within_one_result():
    acc = StreamAccumulator(provider="p")
    inc = acc.tool_calls_delta([("x", "find", "{}"), ("x", "find", "{}"), ("y", "find", "{}")])
    ids = [c.id for c in inc.tool_calls]
    assert ids[0] == "x" and ids[2] == "y"  # nosec B101
    assert ids[1].startswith("find_") and len(set(ids)) == 3  # nosec B101


class _RejectingReader:
    """Reader whose first read fails with a non-transport provider error."""

    async def read_line(self) -> Optional[str]:
        raise MalformedRecordError("reader rejected frame", provider="pipe")


@pytest.mark.asyncio
async def test_provider_error_from_reader_still_finalizes():
    results: List[ChatResult] = []
    with pytest.raises(MalformedRecordError):
        async for item in PipeDecoder().decode(_RejectingReader()):
            results.append(item)
    assert [r.stream_kind for r in results] == [StreamInternalKind.FINISH_DATA]  # nosec B101


@pytest.mark.asyncio
async def test_line_readers_normalize_sources():
    reader = as_line_reader(["a\r\n", b"b\n"])
    assert [await reader.read_line() for _ in range(3)] == ["a", "b", None]  # nosec B101
    assert await reader.read_line() is None  # nosec B101
    assert as_line_reader(reader) is reader  # nosec B101
    blob = as_line_reader("x\ny")
    assert [await blob.read_line(), await blob.read_line()] == ["x", "y"]  # nosec B101


def test_accumulate_results_for_empty_and_delta_only_streams():
    empty = accumulate_results([])
    assert empty.text == "" and empty.finish_reason is FinishReason.UNKNOWN  # nosec B101

    acc = StreamAccumulator(provider="p", model="m")
    acc.response_id = "r1"
    items: List[ChatResult] = [acc.text_delta("he"), acc.text_delta("y")]
    merged = accumulate_results(items)
    assert merged.text == "hey" and merged.id == "r1" and merged.model == "m"  # nosec B101
    assert merged.choices[0].message.role == "assistant"  # nosec B101
