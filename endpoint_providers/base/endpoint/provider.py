"""EndpointProvider: the per-vendor adapter contract.

Purpose:
- Turn an abstract capability into a vendor URL, shape outbound requests,
  deserialize non-streaming bodies, and decode the vendor's line stream into
  canonical ``ChatResult`` increments.

Subclasses supply only vendor tables and hooks:
- ``provider_name`` and ``default_base_url``
- ``capability_fragments()``: supported capabilities and their URL fragments
- ``result_deserializers()``: result type to deserializer mapping
- ``make_stream_decoder()``: a ``LineStreamDecoder`` subclass instance
- ``build_chat_body()``: the vendor chat envelope for a ``ChatRequest``

External dependencies:
- None at this layer. The provider performs no network I/O; the transport
  executor in ``endpoint_providers.service`` sends what ``build_request``
  returns and feeds the response back.

Concurrency:
- A provider is read-only after construction (apart from the resolver and
  request hook, each installable once) and may serve concurrent calls. Every
  ``decode_stream`` call owns its own accumulator.
"""

from __future__ import annotations

import abc
import logging
from typing import Any, AsyncIterator, Mapping, Optional, Sequence, Type, TypeVar

from ..cancellation import CancellationToken
from ..constants import SUPPORTED_PROTOCOL_VERSIONS
from ..dto import ChatRequest
from ..errors import ConfigurationError
from ..logging import LogContext, get_logger, log_event
from ..models import ChatResult
from ..routing import CapabilityEndpoint, CapabilityRouter, UrlResolver
from ..streaming import LineStreamDecoder, StreamEventHandler, as_line_reader
from .dispatch import Deserializer, InboundDispatcher
from .outbound import OutboundRequest, build_outbound_request
from .provider_init import ProviderInit, RequestHook

T = TypeVar("T")


class EndpointProvider(abc.ABC):
    """Base class for vendor endpoint adapters."""

    provider_name: str = "base"
    default_base_url: str = ""

    def __init__(self, init: Optional[ProviderInit] = None) -> None:
        init = init or ProviderInit()
        if init.protocol_version not in SUPPORTED_PROTOCOL_VERSIONS:
            raise ConfigurationError(
                f"unsupported protocol version '{init.protocol_version}'",
                provider=self.provider_name,
            )
        self._credential = init.api_key
        self._model = init.default_model
        self._protocol_version = init.protocol_version
        self._request_hook: Optional[RequestHook] = init.request_hook
        self._logger = get_logger(self.provider_name)
        self._router = CapabilityRouter(
            provider=self.provider_name,
            base_url=init.base_url or self.default_base_url,
            fragments=self.capability_fragments(),
            url_resolver=init.url_resolver,
        )
        self._dispatcher = InboundDispatcher(
            provider=self.provider_name,
            handlers=self.result_deserializers(),
            logger=self._logger,
        )
        self._surface_ancillary_events = init.surface_ancillary_events
        self._decoder = self.make_stream_decoder()

    # ----- Vendor surface -----
    @abc.abstractmethod
    def capability_fragments(self) -> Mapping[CapabilityEndpoint, str]:
        """Return supported capabilities mapped to their URL fragment."""

    @abc.abstractmethod
    def result_deserializers(self) -> Mapping[type, Deserializer]:
        """Return the non-streaming result type to deserializer table."""

    @abc.abstractmethod
    def make_stream_decoder(self) -> LineStreamDecoder:
        """Create the vendor stream decoder (called once at construction)."""

    @abc.abstractmethod
    def build_chat_body(self, request: ChatRequest, *, stream: bool) -> dict:
        """Serialize ``request`` into the vendor chat envelope."""

    def build_embed_body(self, texts: Sequence[str], *, model: Optional[str] = None) -> dict:
        """Serialize an embeddings request; vendors without embeddings keep this default."""
        raise ConfigurationError(
            f"{self.provider_name} doesn't support endpoint embeddings",
            provider=self.provider_name,
            model=model,
        )

    # ----- Basic info -----
    @property
    def logger(self) -> logging.Logger:
        return self._logger

    @property
    def base_url(self) -> str:
        return self._router.base_url

    @property
    def protocol_version(self) -> str:
        return self._protocol_version

    @property
    def surface_ancillary_events(self) -> bool:
        return self._surface_ancillary_events

    def default_model(self) -> Optional[str]:
        """Return the model used when a call does not name one."""
        return self._model

    def supports(self, capability: "CapabilityEndpoint | str") -> bool:
        return self._router.supports(capability)

    # ----- Delegates (set once) -----
    def install_url_resolver(self, resolver: UrlResolver) -> None:
        self._router.install_resolver(resolver)

    def install_request_hook(self, hook: RequestHook) -> None:
        if self._request_hook is not None and hook is not self._request_hook:
            raise ConfigurationError("request hook already installed", provider=self.provider_name)
        self._request_hook = hook

    # ----- Adapter operations -----
    def resolve_url(
        self,
        capability: "CapabilityEndpoint | str",
        path_suffix: Optional[str] = None,
        model: Optional[str] = None,
    ) -> str:
        """Return the absolute vendor URL for ``capability``.

        Raises ``ConfigurationError`` when the vendor does not support it.
        """
        return self._router.resolve(capability, path_suffix, model or self._model)

    def build_request(
        self,
        url: str,
        method: str = "POST",
        body: Any = None,
        streaming: bool = False,
        *,
        extra_headers: Optional[Mapping[str, str]] = None,
    ) -> OutboundRequest:
        """Build the outbound request, reading the credential now."""
        request = build_outbound_request(
            url,
            method,
            body,
            streaming,
            credential=self._credential,
            protocol_version=self._protocol_version,
            extra_headers=extra_headers,
        )
        if self._request_hook is not None:
            request = self._request_hook(request, body, streaming) or request
        log_event(
            self._logger,
            "request.build",
            LogContext(provider=self.provider_name, model=self._model),
            level=logging.DEBUG,
            method=request.method,
            url=request.url,
            streaming=streaming,
            authenticated="Authorization" in request.headers,
        )
        return request

    def deserialize(
        self,
        result_type: Type[T],
        raw_json: str,
        raw_request_body: Optional[str] = None,
        context: Optional[LogContext] = None,
    ) -> Optional[T]:
        """Deserialize a complete response body into ``result_type``.

        Returns ``None`` for result types this vendor does not produce.
        Raises ``MalformedRecordError`` for an unparseable body.
        """
        return self._dispatcher.deserialize(result_type, raw_json, raw_request_body, context)

    def decode_stream(
        self,
        reader: Any,
        context: Optional[LogContext] = None,
        event_handler: Optional[StreamEventHandler] = None,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> AsyncIterator[ChatResult]:
        """Lazily decode a vendor line stream into canonical increments.

        ``reader`` is a ``LineReader``, an async iterable of lines (such as
        ``httpx.Response.aiter_lines()``) or a plain iterable of lines.
        """
        model = (context.model if context is not None else None) or self._model
        ctx = context or LogContext(provider=self.provider_name, model=model, capability="chat")
        return self._decoder.decode(
            as_line_reader(reader),
            model=model,
            event_handler=event_handler,
            cancellation_token=cancellation_token,
            ctx=ctx,
        )


__all__ = ["EndpointProvider"]
