"""Unified endpoint error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``endpoint_providers.base.errors_parts`` to keep a stable import path.

Taxonomy
--------
- ``ConfigurationError``: capability unsupported by the vendor; raised at
  URL-build time and fatal to the single call.
- ``MalformedRecordError``: one record fails to parse; the stream decoder
  skips it, non-streaming deserialization surfaces it.
- ``TransportError``: connection failure or premature close; fatal to the
  stream after best-effort finalize.
- ``CancelledError`` (see ``base.cancellation``): cooperative cancellation,
  kept distinct from ``TransportError``.
"""

from .errors_parts.error_code import ErrorCode, RETRYABLE_CODES
from .errors_parts.provider_error import ProviderError
from .errors_parts.classification import classify_exception
from .errors_parts.configuration_error import ConfigurationError
from .errors_parts.malformed_record_error import MalformedRecordError
from .errors_parts.transport_error import TransportError

__all__ = [
    "ErrorCode",
    "RETRYABLE_CODES",
    "ProviderError",
    "classify_exception",
    "ConfigurationError",
    "MalformedRecordError",
    "TransportError",
]
