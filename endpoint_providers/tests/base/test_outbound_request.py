from __future__ import annotations

import json

import httpx
import pytest

from endpoint_providers.base import constants
from endpoint_providers.base.constants import NDJSON_CONTENT_TYPE, REDACTED, USER_AGENT
from endpoint_providers.base.endpoint import OutboundRequest, build_outbound_request, read_credential
from endpoint_providers.base.errors import ConfigurationError


def test_request_carries_user_agent_protocol_and_bearer():
    req = build_outbound_request(
        "https://api.cohere.ai/v2/chat", "post", {"a": 1}, credential=" co-live-key ", protocol_version="2"
    )
    assert req.method == "POST"  # nosec B101
    assert req.headers["User-Agent"] == USER_AGENT  # nosec B101
    assert req.headers["Authorization"] == "Bearer co-live-key"  # nosec B101  # pragma: allowlist secret - dummy test value
    assert req.http_version == "2"  # nosec B101
    assert json.loads(req.body) == {"a": 1}  # nosec B101


def test_missing_credential_sends_anonymous_request():
    for credential in (None, "", "   ", lambda: None):
        req = build_outbound_request("https://x/chat", "GET", credential=credential)
        assert "Authorization" not in req.headers  # nosec B101
        assert req.body is None and "Content-Type" not in req.headers  # nosec B101


def test_credential_callable_is_read_per_build():
    keys = iter(["first", "second"])
    source = lambda: next(keys)  # noqa: E731
    a = build_outbound_request("https://x/chat", credential=source)
    b = build_outbound_request("https://x/chat", credential=source)
    assert a.headers["Authorization"] == "Bearer first"  # nosec B101
    assert b.headers["Authorization"] == "Bearer second"  # nosec B101
    assert read_credential(None) is None  # nosec B101


def test_streaming_flag_only_changes_accept_header():
    plain = build_outbound_request("https://x/chat", "POST", {"m": 1})
    streamed = build_outbound_request("https://x/chat", "POST", {"m": 1}, True)
    assert streamed.headers["Accept"] == NDJSON_CONTENT_TYPE  # nosec B101
    assert plain.headers["Accept"] == "application/json"  # nosec B101
    assert plain.body == streamed.body and plain.url == streamed.url  # nosec B101
    assert streamed.streaming and not plain.streaming  # nosec B101


def test_redacted_view_masks_credential():
    req = build_outbound_request("https://x/chat", credential="secret-value")
    view = req.to_dict(redact=True)
    assert view["headers"]["Authorization"] == f"Bearer {REDACTED}"  # nosec B101
    assert "secret-value" not in json.dumps(view)  # nosec B101
    assert req.to_dict(redact=False)["headers"]["Authorization"] == "Bearer secret-value"  # nosec B101


def test_to_httpx_builds_request_on_client():
    req = OutboundRequest(method="POST", url="https://x/chat", headers={"X-A": "1"}, body=b"{}")
    client = httpx.AsyncClient()
    built = req.to_httpx(client, timeout=httpx.Timeout(5.0))
    assert built.method == "POST" and str(built.url) == "https://x/chat"  # nosec B101
    assert built.headers["X-A"] == "1" and built.content == b"{}"  # nosec B101


def test_provider_request_hook_can_replace_request(make_cohere):
    seen = []

    def hook(request, body, streaming):
        seen.append((body, streaming))
        headers = dict(request.headers, **{"X-Trace": "abc"})
        return OutboundRequest(request.method, request.url, headers, request.body, request.http_version, streaming)

    provider = make_cohere(request_hook=hook)
    req = provider.build_request(provider.resolve_url("chat"), "POST", {"q": 1}, True)
    assert req.headers["X-Trace"] == "abc"  # nosec B101
    assert seen == [({"q": 1}, True)]  # nosec B101
    with pytest.raises(ConfigurationError):
        provider.install_request_hook(lambda *a: None)


def test_request_hook_returning_none_keeps_request(make_cohere):
    provider = make_cohere(request_hook=lambda *a: None)
    req = provider.build_request("https://x/chat")
    assert req.headers["Authorization"].startswith("Bearer ")  # nosec B101


def test_provider_rejects_unknown_protocol_version(make_cohere):
    with pytest.raises(ConfigurationError):
        make_cohere(protocol_version="3")


def test_constants_export_only_request_shaping_values():
    assert set(constants.__all__) == {  # nosec B101
        "USER_AGENT",
        "DEFAULT_PROTOCOL_VERSION",
        "SUPPORTED_PROTOCOL_VERSIONS",
        "JSON_CONTENT_TYPE",
        "NDJSON_CONTENT_TYPE",
        "REDACTED",
    }
    assert not hasattr(constants, "MISSING_API_KEY_ERROR")  # nosec B101
