"""Endpoint adapter contract and the request/response plumbing around it."""

from .dispatch import Deserializer, InboundDispatcher
from ..streaming.events import RawLineObserver, StreamEventHandler
from .outbound import CredentialSource, OutboundRequest, build_outbound_request, read_credential, serialize_body
from .provider_init import ProviderInit, RequestHook
from .provider import EndpointProvider

__all__ = [
    "Deserializer",
    "InboundDispatcher",
    "RawLineObserver",
    "StreamEventHandler",
    "CredentialSource",
    "OutboundRequest",
    "build_outbound_request",
    "read_credential",
    "serialize_body",
    "ProviderInit",
    "RequestHook",
    "EndpointProvider",
]
