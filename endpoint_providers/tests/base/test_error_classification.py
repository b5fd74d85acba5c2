from __future__ import annotations

import asyncio

import httpx
import pytest

from endpoint_providers.base.cancellation import CancelledError
from endpoint_providers.base.errors import (
    ConfigurationError,
    ErrorCode,
    MalformedRecordError,
    TransportError,
    classify_exception,
)


def _status_error(status: int) -> httpx.HTTPStatusError:
    request = httpx.Request("POST", "https://api.cohere.ai/v2/chat")
    response = httpx.Response(status, request=request)
    return httpx.HTTPStatusError(f"HTTP {status}", request=request, response=response)


@pytest.mark.parametrize(
    "status, code",
    [
        (400, ErrorCode.VALIDATION),
        (401, ErrorCode.AUTH),
        (404, ErrorCode.NOT_FOUND),
        (429, ErrorCode.RATE_LIMIT),
        (498, ErrorCode.AUTH),
        (503, ErrorCode.UNAVAILABLE),
        (520, ErrorCode.SERVER_ERROR),
    ],
)
def test_http_status_mapping(status, code):
    assert classify_exception(_status_error(status)) is code  # nosec B101


def test_timeouts_and_cancellation():
    assert classify_exception(httpx.ReadTimeout("slow")) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(asyncio.TimeoutError()) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(CancelledError("stop")) is ErrorCode.CANCELLED  # nosec B101


def test_transport_failures():
    assert classify_exception(httpx.ConnectError("refused")) is ErrorCode.TRANSPORT  # nosec B101
    assert classify_exception(ConnectionResetError()) is ErrorCode.TRANSPORT  # nosec B101


def test_transport_error_from_exception_keeps_status_and_retryable():
    err = TransportError.from_exception(_status_error(429), provider="cohere", model="command-r")
    assert err.code is ErrorCode.RATE_LIMIT and err.retryable  # nosec B101
    assert err.status_code == 429 and err.model == "command-r"  # nosec B101

    auth = TransportError.from_exception(_status_error(401), provider="cohere")
    assert auth.code is ErrorCode.AUTH and not auth.retryable  # nosec B101


def test_unclassifiable_reader_failure_becomes_transport():
    err = TransportError.from_exception(RuntimeError("boom"), provider="cohere")
    assert err.code is ErrorCode.TRANSPORT and isinstance(err.raw, RuntimeError)  # nosec B101
    assert TransportError.from_exception(err, provider="x") is err  # nosec B101


def test_provider_error_subclasses_keep_their_codes():
    assert classify_exception(ConfigurationError("no", provider="cohere")) is ErrorCode.UNSUPPORTED  # nosec B101
    assert classify_exception(MalformedRecordError("bad", provider="cohere")) is ErrorCode.VALIDATION  # nosec B101
    assert "cohere" in str(ConfigurationError("no", provider="cohere"))  # nosec B101
