"""Cohere endpoint provider.

Purpose:
    Adapter for the Cohere REST API: chat (streaming and complete),
    embeddings and model listing. Supplies the vendor tables and hooks the
    generic :class:`EndpointProvider` needs; it performs no I/O itself.

URLs:
    ``https://api.cohere.ai/v2/{fragment}{suffix}`` with fragments ``chat``,
    ``embed`` and ``models``. Any other capability raises
    ``ConfigurationError``. A custom URL resolver may replace the template.

Authentication:
    ``Authorization: Bearer <key>`` from the credential source, read on every
    request build; no header when no key is configured.

Streaming:
    Newline-delimited JSON records decoded by :class:`CohereStreamDecoder`.
"""

from __future__ import annotations

from typing import Mapping, Optional, Sequence

from ..base.dto import ChatRequest
from ..base.endpoint import Deserializer, EndpointProvider, ProviderInit
from ..base.models import ChatResult, EmbeddingResult, ModelListResult
from ..base.routing import CapabilityEndpoint
from ..base.streaming import LineStreamDecoder
from ..config.defaults import COHERE_DEFAULT_BASE_URL, COHERE_DEFAULT_EMBED_MODEL
from .constants import CAPABILITY_FRAGMENTS, PROVIDER_NAME
from .nonstream_helpers import deserialize_chat, deserialize_embeddings, deserialize_models
from .request_helpers import build_chat_payload, build_embed_payload
from .stream_decoder import CohereStreamDecoder


class CohereEndpointProvider(EndpointProvider):
    """Built-in Cohere provider."""

    provider_name = PROVIDER_NAME
    default_base_url = COHERE_DEFAULT_BASE_URL

    def __init__(self, init: Optional[ProviderInit] = None) -> None:
        super().__init__(init)

    def capability_fragments(self) -> Mapping[CapabilityEndpoint, str]:
        return CAPABILITY_FRAGMENTS

    def result_deserializers(self) -> Mapping[type, Deserializer]:
        return {
            ChatResult: deserialize_chat,
            EmbeddingResult: deserialize_embeddings,
            ModelListResult: deserialize_models,
        }

    def make_stream_decoder(self) -> LineStreamDecoder:
        return CohereStreamDecoder(logger=self._logger, surface_ancillary_events=self._surface_ancillary_events)

    def build_chat_body(self, request: ChatRequest, *, stream: bool) -> dict:
        return build_chat_payload(request, model=self._model, stream=stream)

    def build_embed_body(self, texts: Sequence[str], *, model: Optional[str] = None) -> dict:
        return build_embed_payload(texts, model=model or COHERE_DEFAULT_EMBED_MODEL)


__all__ = ["CohereEndpointProvider"]
