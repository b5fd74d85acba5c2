"""Cohere complete-body deserializers (chat v1/v2, embed, models)."""
from __future__ import annotations

import json

import pytest

from endpoint_providers.base.errors import MalformedRecordError
from endpoint_providers.base.logging import LogContext
from endpoint_providers.base.models import ChatResult, EmbeddingResult, FinishReason, ModelListResult
from endpoint_providers.cohere.nonstream_helpers import _usage
from endpoint_providers.cohere.wire import UsageMeta

V2_CHAT = {
    "id": "resp-1",
    "finish_reason": "COMPLETE",
    "message": {
        "role": "assistant",
        "content": [{"type": "text", "text": "Hello "}, {"type": "text", "text": "there"}],
        "citations": [{"start": 0, "end": 5, "text": "Hello"}],
    },
    "usage": {"billed_units": {"input_tokens": 5, "output_tokens": 2}, "tokens": {"input_tokens": 70, "output_tokens": 2}},
}


def test_v2_chat_body(make_cohere):
    ctx = LogContext(provider="cohere", model="command-a")
    result = make_cohere().deserialize(ChatResult, json.dumps(V2_CHAT), None, ctx)
    assert result.id == "resp-1" and result.text == "Hello there"  # nosec B101
    assert result.finish_reason is FinishReason.STOP and result.model == "command-a"  # nosec B101
    assert result.usage.prompt_tokens == 5 and result.usage.total_tokens == 7  # nosec B101
    parts = result.choices[0].message.parts
    assert [p.type for p in parts] == ["text", "text", "citation"]  # nosec B101


def test_v2_tool_calls_with_string_arguments(make_cohere):
    body = {
        "id": "resp-2",
        "finish_reason": "TOOL_CALL",
        "message": {
            "role": "assistant",
            "tool_plan": "look it up",
            "tool_calls": [
                {"id": "tc_1", "type": "function", "function": {"name": "search", "arguments": '{"q":"x"}'}},
                {"type": "function", "function": {"name": "search", "arguments": {"q": "y"}}},
            ],
        },
    }
    result = make_cohere().deserialize(ChatResult, json.dumps(body), json.dumps({"model": "command-r"}))
    calls = result.tool_calls
    assert calls[0].id == "tc_1" and calls[0].function.parsed_arguments() == {"q": "x"}  # nosec B101
    assert calls[1].id.startswith("search_") and calls[1].function.arguments == '{"q":"y"}'  # nosec B101
    assert result.finish_reason is FinishReason.TOOL_CALLS and result.model == "command-r"  # nosec B101


def test_v1_chat_body_with_search_extensions(make_cohere):
    body = {
        "generation_id": "gen-7",
        "text": "Answer",
        "finish_reason": "MAX_TOKENS",
        "tool_calls": [{"name": "calc", "parameters": {"x": 1}}],
        "search_queries": [{"text": "q"}],
        "search_results": [{"document_ids": ["d1"]}],
        "meta": {"billed_units": {"input_tokens": 1, "output_tokens": 9}},
    }
    result = make_cohere().deserialize(ChatResult, json.dumps(body))
    assert result.id == "gen-7" and result.text == "Answer"  # nosec B101
    assert result.finish_reason is FinishReason.LENGTH and result.usage.total_tokens == 10  # nosec B101
    assert result.tool_calls[0].function.arguments == '{"x":1}'  # nosec B101
    assert set(result.vendor_extensions["cohere"]) == {"search_queries", "search_results"}  # nosec B101
    assert result.model is None  # nosec B101


def test_embeddings_v2_and_v1_shapes(make_cohere):
    provider = make_cohere()
    v2 = provider.deserialize(EmbeddingResult, json.dumps({"id": "e1", "embeddings": {"float": [[0.1, 0.2], [0.3, 0.4]]}}))
    v1 = provider.deserialize(EmbeddingResult, json.dumps({"id": "e2", "embeddings": [[1.0]], "meta": {"billed_units": {"input_tokens": 3}}}))
    assert v2.embeddings == ((0.1, 0.2), (0.3, 0.4))  # nosec B101
    assert v1.embeddings == ((1.0,),) and v1.usage.prompt_tokens == 3  # nosec B101


def test_models_listing(make_cohere):
    body = {
        "models": [
            {"name": "command-r", "endpoints": ["chat"], "context_length": 128000},
            {"name": "embed-english-v3.0", "endpoints": ["embed"]},
        ],
        "next_page_token": "p2",
    }
    result = make_cohere().deserialize(ModelListResult, json.dumps(body))
    assert result.names() == ("command-r", "embed-english-v3.0")  # nosec B101
    assert result.models[0].context_length == 128000 and result.next_page_token == "p2"  # nosec B101


@pytest.mark.parametrize("result_type, raw", [(ChatResult, "{"), (EmbeddingResult, "{}"), (ModelListResult, "[]")])
def test_malformed_bodies_raise(make_cohere, result_type, raw):
    with pytest.raises(MalformedRecordError):
        make_cohere().deserialize(result_type, raw)


def test_usage_taken_from_first_block_with_counts():
    assert _usage(None, UsageMeta()) is None  # nosec B101
    usage = _usage(UsageMeta(), UsageMeta.model_validate({"billed_units": {"input_tokens": 4, "output_tokens": 1}}))
    assert (usage.prompt_tokens, usage.completion_tokens, usage.total_tokens) == (4, 1, 5)  # nosec B101
