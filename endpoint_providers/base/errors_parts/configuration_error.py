"""
Configuration error raised at URL-build or provider-lookup time.

Signals a request the configured vendor cannot serve at all, such as asking
for a capability the vendor does not expose. Fatal to the single call.
"""
from __future__ import annotations

from typing import Optional

from .error_code import ErrorCode
from .provider_error import ProviderError


class ConfigurationError(ProviderError):
    """Raised when a vendor cannot serve the requested capability or setup."""

    def __init__(
        self,
        message: str,
        *,
        provider: str,
        model: Optional[str] = None,
        code: ErrorCode = ErrorCode.UNSUPPORTED,
    ) -> None:
        super().__init__(code=code, message=message, provider=provider, model=model, retryable=False)


__all__ = ["ConfigurationError"]
