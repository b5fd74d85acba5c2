"""
Normalized endpoint error codes (taxonomy).

Defines the `ErrorCode` enumeration shared by endpoint providers, the stream
decoder and the transport executor. Values are lowercase snake_case and are
considered a stable public contract for logging and analytics.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"
    TRANSIENT = "transient"
    TRANSPORT = "transport"
    UNSUPPORTED = "unsupported"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    SERVER_ERROR = "server_error"
    INTERNAL = "internal"
    UNAVAILABLE = "unavailable"
    UNKNOWN = "unknown"


# Codes that upstream retry policies may treat as transient. This layer never
# retries on its own; the set only feeds the ``retryable`` hint.
RETRYABLE_CODES = frozenset(
    {
        ErrorCode.TRANSIENT,
        ErrorCode.TRANSPORT,
        ErrorCode.RATE_LIMIT,
        ErrorCode.TIMEOUT,
        ErrorCode.UNAVAILABLE,
    }
)


__all__ = ["ErrorCode", "RETRYABLE_CODES"]
