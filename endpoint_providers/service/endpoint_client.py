"""Transport executor for endpoint providers.

Purpose:
    Send the requests an :class:`EndpointProvider` builds and feed the
    responses back through its deserializers or stream decoder. Adapters stay
    free of I/O; this is the single place that talks to the network.

External dependencies:
    - ``httpx`` (``AsyncClient``) via the pooled clients in
      ``endpoint_providers.base.http``, or a caller-supplied client (tests pass
      one built on ``httpx.MockTransport``).

Timeout strategy:
    - Per-request ``httpx.Timeout`` derived from :func:`get_timeout_config`:
      the stream budget bounds the idle time between streamed lines.

Error semantics:
    - Connection failures and non-2xx statuses raise ``TransportError`` with
      a code from ``classify_exception`` and the HTTP status when known.
    - Mid-stream failures and cooperative cancellation are raised by the
      decoder after the terminal increments were yielded.
    - No retries are performed here.
"""

from __future__ import annotations

import logging
from typing import AsyncIterator, Optional, Sequence

import httpx

from ..base.cancellation import CancellationToken, CancelledError
from ..base.dto import ChatRequest
from ..base.endpoint import EndpointProvider, OutboundRequest
from ..base.errors import ErrorCode, MalformedRecordError, ProviderError, TransportError
from ..base.http import HttpxLineReader, get_httpx_client
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import ChatResult, EmbeddingResult, ModelListResult, StreamInternalKind
from ..base.routing import CapabilityEndpoint
from ..base.streaming import StreamEventHandler
from ..base.timeouts import TimeoutConfig, get_timeout_config

_ERROR_BODY_PREVIEW = 500


class EndpointClient:
    """Execute chat, embeddings and model-listing calls for one provider.

    Parameters
    ----------
    provider:
        The configured vendor adapter.
    http_client:
        Optional ``httpx.AsyncClient``; the pooled client is used otherwise.
    timeouts:
        Optional timeout override; defaults to :func:`get_timeout_config`.
    """

    def __init__(
        self,
        provider: EndpointProvider,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        timeouts: Optional[TimeoutConfig] = None,
    ) -> None:
        self._provider = provider
        self._http_client = http_client
        self._timeouts = timeouts
        self._logger = get_logger(f"client.{provider.provider_name}")

    @property
    def provider(self) -> EndpointProvider:
        return self._provider

    # ----- plumbing -----
    def _client(self, purpose: str) -> httpx.AsyncClient:
        if self._http_client is not None:
            return self._http_client
        return get_httpx_client(purpose, http_version=self._provider.protocol_version)

    def _timeout(self, *, streaming: bool) -> httpx.Timeout:
        return (self._timeouts or get_timeout_config()).to_httpx(streaming=streaming)

    def _ctx(self, model: Optional[str], capability: CapabilityEndpoint) -> LogContext:
        return LogContext(provider=self._provider.provider_name, model=model, capability=capability.value)

    def _status_error(self, response: httpx.Response, model: Optional[str]) -> TransportError:
        exc = httpx.HTTPStatusError(
            f"HTTP {response.status_code}: {response.text[:_ERROR_BODY_PREVIEW]}",
            request=response.request,
            response=response,
        )
        return TransportError.from_exception(exc, provider=self._provider.provider_name, model=model)

    async def _send(self, outbound: OutboundRequest, model: Optional[str]) -> str:
        """Send a non-streaming request and return the response text."""
        client = self._client("default")
        try:
            response = await client.send(outbound.to_httpx(client, timeout=self._timeout(streaming=False)))
        except httpx.HTTPError as exc:
            raise TransportError.from_exception(exc, provider=self._provider.provider_name, model=model) from exc
        if response.is_error:
            raise self._status_error(response, model)
        return response.text

    def _log_error(self, event: str, ctx: LogContext, exc: BaseException) -> None:
        code = exc.code.value if isinstance(exc, ProviderError) else ErrorCode.CANCELLED.value
        normalized_log_event(
            self._logger,
            event,
            ctx,
            phase="finalize",
            emitted=False,
            tokens=None,
            error_code=code,
            level=logging.WARNING,
            error=str(exc),
        )

    # ----- chat -----
    async def chat(self, request: ChatRequest) -> ChatResult:
        """Complete (non-streaming) chat call."""
        model = request.model or self._provider.default_model()
        ctx = self._ctx(model, CapabilityEndpoint.CHAT)
        normalized_log_event(self._logger, "chat.start", ctx, phase="start", attempt=1, emitted=None, tokens=None, stream=False)
        body = self._provider.build_chat_body(request, stream=False)
        outbound = self._provider.build_request(
            self._provider.resolve_url(CapabilityEndpoint.CHAT, model=model), "POST", body, streaming=False
        )
        try:
            raw = await self._send(outbound, model)
            result = self._provider.deserialize(ChatResult, raw, outbound.body.decode("utf-8") if outbound.body else None, ctx)
        except (TransportError, MalformedRecordError) as exc:
            self._log_error("chat.error", ctx, exc)
            raise
        if result is None:
            raise MalformedRecordError("empty chat response", provider=self._provider.provider_name, model=model)
        normalized_log_event(
            self._logger, "chat.end", ctx.with_response_id(result.id), phase="finalize", emitted=bool(result.text), tokens=result.usage
        )
        return result

    async def stream_chat(
        self,
        request: ChatRequest,
        *,
        event_handler: Optional[StreamEventHandler] = None,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> AsyncIterator[ChatResult]:
        """Streaming chat call yielding canonical increments.

        The HTTP response is closed when the stream ends, fails, or the
        consumer stops iterating.
        """
        model = request.model or self._provider.default_model()
        ctx = self._ctx(model, CapabilityEndpoint.CHAT)
        normalized_log_event(self._logger, "chat.start", ctx, phase="start", attempt=1, emitted=None, tokens=None, stream=True)
        body = self._provider.build_chat_body(request, stream=True)
        outbound = self._provider.build_request(
            self._provider.resolve_url(CapabilityEndpoint.CHAT, model=model), "POST", body, streaming=True
        )
        client = self._client("stream")
        try:
            response = await client.send(outbound.to_httpx(client, timeout=self._timeout(streaming=True)), stream=True)
        except httpx.HTTPError as exc:
            err = TransportError.from_exception(exc, provider=self._provider.provider_name, model=model)
            self._log_error("chat.error", ctx, err)
            raise err from exc

        try:
            if response.is_error:
                await response.aread()
                raise self._status_error(response, model)
            finish: Optional[ChatResult] = None
            async for item in self._provider.decode_stream(
                HttpxLineReader(response),
                context=ctx,
                event_handler=event_handler,
                cancellation_token=cancellation_token,
            ):
                if item.stream_kind is StreamInternalKind.FINISH_DATA:
                    finish = item
                yield item
            normalized_log_event(
                self._logger,
                "chat.end",
                ctx.with_response_id(finish.id if finish else None),
                phase="finalize",
                emitted=True,
                tokens=finish.usage if finish else None,
                stream=True,
            )
        except (TransportError, CancelledError) as exc:
            self._log_error("chat.error", ctx, exc)
            raise
        finally:
            await response.aclose()

    # ----- embeddings / models -----
    async def embed(self, texts: Sequence[str], *, model: Optional[str] = None) -> EmbeddingResult:
        """Embed ``texts`` and return vectors in input order."""
        body = self._provider.build_embed_body(texts, model=model)
        model = body.get("model") or model
        ctx = self._ctx(model, CapabilityEndpoint.EMBEDDINGS)
        outbound = self._provider.build_request(
            self._provider.resolve_url(CapabilityEndpoint.EMBEDDINGS, model=model), "POST", body
        )
        raw = await self._send(outbound, model)
        result = self._provider.deserialize(EmbeddingResult, raw, outbound.body.decode("utf-8") if outbound.body else None, ctx)
        if result is None:
            raise MalformedRecordError("empty embeddings response", provider=self._provider.provider_name, model=model)
        return result

    async def list_models(self, *, page_token: Optional[str] = None, page_size: Optional[int] = None) -> ModelListResult:
        """List one page of vendor models."""
        query = httpx.QueryParams(
            {k: v for k, v in (("page_size", page_size), ("page_token", page_token)) if v is not None}
        )
        suffix = f"?{query}" if query else None
        outbound = self._provider.build_request(
            self._provider.resolve_url(CapabilityEndpoint.MODELS, suffix), "GET"
        )
        raw = await self._send(outbound, None)
        result = self._provider.deserialize(ModelListResult, raw)
        if result is None:
            raise MalformedRecordError("empty model list response", provider=self._provider.provider_name)
        return result


__all__ = ["EndpointClient"]
