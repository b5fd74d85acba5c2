"""
Malformed vendor record error.

Raised by vendor deserializers when a payload cannot be parsed into the
expected envelope. The stream decoder catches it per line and skips the
record; non-streaming callers receive it directly.
"""
from __future__ import annotations

from typing import Optional

from .error_code import ErrorCode
from .provider_error import ProviderError


class MalformedRecordError(ProviderError):
    """Raised when a single vendor record fails to parse."""

    def __init__(
        self,
        message: str,
        *,
        provider: str,
        model: Optional[str] = None,
        raw: Optional[BaseException] = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.VALIDATION,
            message=message,
            provider=provider,
            model=model,
            retryable=False,
            raw=raw,
        )


__all__ = ["MalformedRecordError"]
