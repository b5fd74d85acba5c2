from __future__ import annotations

import json

import httpx

from endpoint_providers.service.cli import main
from endpoint_providers.service.cli.cli_actions import EXIT_FAILURE, EXIT_OK, EXIT_USAGE
from endpoint_providers.service.cli.cli_parser import build_parser


def _mock(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def test_no_subcommand_prints_help(capsys):
    assert main([]) == EXIT_USAGE  # nosec B101
    assert "endpoint-providers" in capsys.readouterr().err  # nosec B101


def test_url_command_plain_and_json(capsys):
    assert main(["url", "--capability", "embeddings"]) == EXIT_OK  # nosec B101
    assert capsys.readouterr().out.strip() == "https://api.cohere.ai/v2/embed"  # nosec B101
    assert main(["url", "--capability", "models", "--suffix", "/x", "--json"]) == EXIT_OK  # nosec B101
    data = json.loads(capsys.readouterr().out)
    assert data == {"provider": "cohere", "capability": "models", "url": "https://api.cohere.ai/v2/models/x"}  # nosec B101


def test_unsupported_capability_exits_with_usage_code(capsys):
    assert main(["url", "--capability", "rerank"]) == EXIT_USAGE  # nosec B101
    err = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
    assert err["type"] == "ConfigurationError" and err["code"] == "unsupported"  # nosec B101


def test_unknown_provider_exits_with_usage_code(capsys):
    assert main(["url", "--provider", "nope"]) == EXIT_USAGE  # nosec B101
    assert json.loads(capsys.readouterr().err.strip().splitlines()[-1])["code"] == "not_found"  # nosec B101


def test_request_command_redacts_credential(monkeypatch, capsys):
    monkeypatch.setenv("COHERE_API_KEY", "co-secret-value")  # pragma: allowlist secret - dummy test value
    assert main(["request", "--prompt", "hello", "--stream"]) == EXIT_OK  # nosec B101
    out = capsys.readouterr().out
    assert "co-secret-value" not in out  # nosec B101
    data = json.loads(out)
    assert data["headers"]["Authorization"] == "Bearer ***" and data["streaming"] is True  # nosec B101
    assert json.loads(data["body"])["messages"][0]["content"] == "hello"  # nosec B101


def test_decode_command_replays_recorded_stream(tmp_path, capsys):
    recording = tmp_path / "stream.ndjson"
    recording.write_text(
        "\n".join(
            [
                json.dumps({"event_type": "text-generation", "is_finished": False, "text": "a"}),
                "garbage",
                json.dumps({"event_type": "stream-end", "is_finished": True, "finish_reason": "COMPLETE"}),
            ]
        ),
        encoding="utf-8",
    )
    assert main(["decode", str(recording)]) == EXIT_OK  # nosec B101
    rows = [json.loads(line) for line in capsys.readouterr().out.strip().splitlines()]
    assert [r["stream_kind"] for r in rows] == ["none", "append_assistant_message", "finish_data"]  # nosec B101


def test_decode_missing_file_is_usage_error(tmp_path):
    assert main(["decode", str(tmp_path / "missing.ndjson")]) == EXIT_USAGE  # nosec B101


def test_chat_command_prints_reply(capsys):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"message": {"content": [{"type": "text", "text": "pong"}]}, "finish_reason": "COMPLETE"})

    assert main(["chat", "--prompt", "ping"], http_client=_mock(handler)) == EXIT_OK  # nosec B101
    assert capsys.readouterr().out.strip() == "pong"  # nosec B101


def test_chat_stream_prints_deltas(capsys):
    body = "\n".join(
        json.dumps(r)
        for r in (
            {"event_type": "text-generation", "is_finished": False, "text": "po"},
            {"event_type": "text-generation", "is_finished": False, "text": "ng"},
            {"event_type": "stream-end", "is_finished": True, "finish_reason": "COMPLETE"},
        )
    )
    client = _mock(lambda r: httpx.Response(200, content=body.encode("utf-8")))
    assert main(["chat", "--prompt", "ping", "--stream"], http_client=client) == EXIT_OK  # nosec B101
    assert capsys.readouterr().out.strip() == "pong"  # nosec B101


def test_chat_transport_failure_exits_with_failure_code(capsys, events):
    client = _mock(lambda r: httpx.Response(503, text="down"))
    assert main(["chat", "--prompt", "ping"], http_client=client) == EXIT_FAILURE  # nosec B101
    err = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
    assert err["code"] == "unavailable"  # nosec B101
    assert any(e["event"] == "cli.error" for e in events())  # nosec B101


def test_invalid_request_fields_are_usage_errors():
    assert main(["chat", "--prompt", "ping", "--temperature", "9"], http_client=_mock(lambda r: httpx.Response(200))) == EXIT_USAGE  # nosec B101


def test_models_and_embed_commands(capsys):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/embed"):
            return httpx.Response(200, json={"embeddings": {"float": [[0.1, 0.2, 0.3]]}})
        return httpx.Response(200, json={"models": [{"name": "command-r"}, {"name": "command-a"}]})

    assert main(["models"], http_client=_mock(handler)) == EXIT_OK  # nosec B101
    assert capsys.readouterr().out.split() == ["command-r", "command-a"]  # nosec B101
    assert main(["embed", "hello", "--json"], http_client=_mock(handler)) == EXIT_OK  # nosec B101
    assert len(json.loads(capsys.readouterr().out)["embeddings"][0]) == 3  # nosec B101


def test_parser_stream_flags():
    parser = build_parser()
    assert parser.parse_args(["chat", "--prompt", "x"]).stream is False  # nosec B101
    assert parser.parse_args(["chat", "--prompt", "x", "--stream"]).stream is True  # nosec B101
    assert parser.parse_args(["chat", "--prompt", "x", "--stream", "no"]).stream is False  # nosec B101
    assert parser.parse_args(["chat", "--prompt", "x", "--no-stream"]).stream is False  # nosec B101
