"""
Transport error raised when the connection or response body fails.

Fatal to the stream it interrupts. The stream decoder raises it only after
finalizing whatever content had been accumulated, so callers can still commit
partial assistant text.
"""
from __future__ import annotations

from typing import Optional

from .classification import _extract_status, classify_exception
from .error_code import RETRYABLE_CODES, ErrorCode
from .provider_error import ProviderError


class TransportError(ProviderError):
    """Raised when the underlying transport fails mid-call or mid-stream."""

    def __init__(
        self,
        message: str,
        *,
        provider: str,
        model: Optional[str] = None,
        code: ErrorCode = ErrorCode.TRANSPORT,
        raw: Optional[BaseException] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(
            code=code,
            message=message,
            provider=provider,
            model=model,
            retryable=code in RETRYABLE_CODES,
            raw=raw,
        )
        self.status_code = status_code

    @classmethod
    def from_exception(
        cls,
        exc: BaseException,
        *,
        provider: str,
        model: Optional[str] = None,
    ) -> "TransportError":
        """Wrap an arbitrary transport exception, classifying its code."""
        if isinstance(exc, TransportError):
            return exc
        code = classify_exception(exc)
        if code in (ErrorCode.UNKNOWN, ErrorCode.INTERNAL):
            code = ErrorCode.TRANSPORT
        return cls(
            str(exc) or exc.__class__.__name__,
            provider=provider,
            model=model,
            code=code,
            raw=exc,
            status_code=_extract_status(exc),
        )


__all__ = ["TransportError"]
