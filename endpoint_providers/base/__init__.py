"""
Endpoint Base Package

Exports the vendor-agnostic contract, canonical result model, request DTOs,
streaming primitives and the provider factory used by vendor adapters and by
the service layer.

Layout:
- Endpoint: the ``EndpointProvider`` adapter contract and request plumbing
- Models: frozen canonical results (``ChatResult`` and friends)
- DTO: pydantic outbound request validation
- Streaming: the generic line decoder and its per-stream accumulator
- Factory: lazy creation of adapters by canonical vendor name
"""

from .cancellation import CancellationToken, CancelledError
from .dto import ChatRequest, MessageDTO, ToolSpecDTO
from .endpoint import EndpointProvider, OutboundRequest, ProviderInit
from .errors import (
    ConfigurationError,
    ErrorCode,
    MalformedRecordError,
    ProviderError,
    TransportError,
)
from .factory import ProviderFactory, UnknownProviderError
from .models import (
    ChatChoice,
    ChatMessage,
    ChatResult,
    ChatUsage,
    EmbeddingResult,
    FinishReason,
    FunctionCall,
    ModelInfo,
    ModelListResult,
    StreamInternalKind,
    ToolCall,
)
from .repositories.keys import KeyResolution, KeysRepository
from .routing import CapabilityEndpoint, UrlContext
from .streaming import StreamEventHandler, accumulate_results
from .timeouts import TimeoutConfig, get_timeout_config

__all__ = [
    # Contract
    "EndpointProvider",
    "OutboundRequest",
    "ProviderInit",
    "CapabilityEndpoint",
    "UrlContext",
    "StreamEventHandler",
    # Models
    "ChatChoice",
    "ChatMessage",
    "ChatResult",
    "ChatUsage",
    "EmbeddingResult",
    "FinishReason",
    "FunctionCall",
    "ModelInfo",
    "ModelListResult",
    "StreamInternalKind",
    "ToolCall",
    "accumulate_results",
    # DTO
    "ChatRequest",
    "MessageDTO",
    "ToolSpecDTO",
    # Errors & cancellation
    "ConfigurationError",
    "ErrorCode",
    "MalformedRecordError",
    "ProviderError",
    "TransportError",
    "CancellationToken",
    "CancelledError",
    # Factory & repositories
    "ProviderFactory",
    "UnknownProviderError",
    "KeyResolution",
    "KeysRepository",
    # Timeouts
    "TimeoutConfig",
    "get_timeout_config",
]
