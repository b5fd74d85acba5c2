"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `endpoint_providers.base.errors` for the stable surface.
"""

from .error_code import ErrorCode, RETRYABLE_CODES
from .provider_error import ProviderError
from .classification import classify_exception
from .configuration_error import ConfigurationError
from .malformed_record_error import MalformedRecordError
from .transport_error import TransportError

__all__ = [
    "ErrorCode",
    "RETRYABLE_CODES",
    "ProviderError",
    "classify_exception",
    "ConfigurationError",
    "MalformedRecordError",
    "TransportError",
]
