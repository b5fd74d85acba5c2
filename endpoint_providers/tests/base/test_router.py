from __future__ import annotations

import pytest

from endpoint_providers.base.errors import ConfigurationError, ErrorCode
from endpoint_providers.base.routing import CapabilityEndpoint, CapabilityRouter, UrlContext

FRAGMENTS = {
    CapabilityEndpoint.CHAT: "chat",
    CapabilityEndpoint.EMBEDDINGS: "embed",
    CapabilityEndpoint.MODELS: "models",
}


def _router(**kwargs) -> CapabilityRouter:
    kwargs.setdefault("base_url", "https://api.cohere.ai/v2/")
    return CapabilityRouter(provider="cohere", fragments=FRAGMENTS, **kwargs)


def test_default_template_joins_base_fragment_and_suffix():
    router = _router()
    assert router.resolve(CapabilityEndpoint.CHAT) == "https://api.cohere.ai/v2/chat"  # nosec B101
    assert router.resolve("embeddings") == "https://api.cohere.ai/v2/embed"  # nosec B101
    assert router.resolve("models", "?page_size=5") == "https://api.cohere.ai/v2/models?page_size=5"  # nosec B101


def test_unsupported_capability_raises_configuration_error():
    router = _router()
    with pytest.raises(ConfigurationError) as ei:
        router.resolve(CapabilityEndpoint.RERANK)
    assert str(ei.value.message) == "cohere doesn't support endpoint rerank"  # nosec B101
    assert ei.value.code is ErrorCode.UNSUPPORTED  # nosec B101
    assert not router.supports("rerank")  # nosec B101


def test_unknown_capability_name_is_configuration_error():
    with pytest.raises(ConfigurationError):
        _router().resolve("teleport")


def test_resolver_template_receives_fragment_suffix_and_model():
    seen = []

    def resolver(capability, suffix, ctx: UrlContext) -> str:
        seen.append((capability, suffix, ctx))
        return "https://proxy.internal/cohere/{0}{1}?model={2}"

    router = _router(url_resolver=resolver)
    url = router.resolve(CapabilityEndpoint.EMBEDDINGS, "/v1", model="embed-english-v3.0")
    assert url == "https://proxy.internal/cohere/embed/v1?model=embed-english-v3.0"  # nosec B101
    cap, suffix, ctx = seen[0]
    assert cap is CapabilityEndpoint.EMBEDDINGS and suffix == "/v1"  # nosec B101
    assert ctx.endpoint_fragment == "embed" and ctx.model == "embed-english-v3.0"  # nosec B101


def test_resolver_does_not_bypass_capability_check():
    router = _router(url_resolver=lambda *_: "https://proxy/{0}")
    with pytest.raises(ConfigurationError):
        router.resolve(CapabilityEndpoint.TOKENIZE)


def test_resolver_template_with_bad_placeholder_is_configuration_error():
    router = _router(url_resolver=lambda *_: "https://proxy/{5}")
    with pytest.raises(ConfigurationError):
        router.resolve(CapabilityEndpoint.CHAT)


def test_resolver_installs_once():
    router = _router()
    first = lambda *_: "https://a/{0}"  # noqa: E731
    router.install_resolver(first)
    router.install_resolver(first)
    with pytest.raises(ConfigurationError):
        router.install_resolver(lambda *_: "https://b/{0}")
