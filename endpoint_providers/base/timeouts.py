"""Unified timeout configuration for the transport executor.

Timeouts are a transport concern: the stream decoder never enforces one. This
module centralizes the values handed to ``httpx`` so no call site carries an
ad hoc numeric literal.

Supported environment variables (all optional, positive floats):
    PT_TIMEOUT_START_SECONDS   connect + first byte budget
    PT_TIMEOUT_STREAM_SECONDS  idle budget between streamed lines
    PT_TIMEOUT_HTTP_SECONDS    non-streaming request budget

The configuration is cached per process and refreshed when any of the
variables above changes, so tests can adjust them at runtime.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Tuple

import httpx

_ENV_NAMES = (
    "PT_TIMEOUT_START_SECONDS",
    "PT_TIMEOUT_STREAM_SECONDS",
    "PT_TIMEOUT_HTTP_SECONDS",
)


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        start_timeout_seconds: Budget for connecting and receiving headers.
        stream_timeout_seconds: Idle budget while waiting for the next line.
        http_timeout_seconds: Budget for a complete non-streaming exchange.
    """

    start_timeout_seconds: float = 30.0
    stream_timeout_seconds: float = 60.0
    http_timeout_seconds: float = 30.0

    def to_httpx(self, *, streaming: bool) -> httpx.Timeout:
        """Translate into an ``httpx.Timeout`` for one request."""
        read = self.stream_timeout_seconds if streaming else self.http_timeout_seconds
        return httpx.Timeout(read, connect=self.start_timeout_seconds)


_CACHED: Optional[TimeoutConfig] = None
_CACHE_KEY: Optional[Tuple[str, ...]] = None


def _parse_env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig`."""
    global _CACHED, _CACHE_KEY  # noqa: PLW0603 - documented module cache
    key = tuple(os.getenv(n, "") for n in _ENV_NAMES)
    if _CACHED is not None and key == _CACHE_KEY:
        return _CACHED
    defaults = TimeoutConfig()
    _CACHED = TimeoutConfig(
        start_timeout_seconds=_parse_env_float("PT_TIMEOUT_START_SECONDS", defaults.start_timeout_seconds),
        stream_timeout_seconds=_parse_env_float("PT_TIMEOUT_STREAM_SECONDS", defaults.stream_timeout_seconds),
        http_timeout_seconds=_parse_env_float("PT_TIMEOUT_HTTP_SECONDS", defaults.http_timeout_seconds),
    )
    _CACHE_KEY = key
    return _CACHED


__all__ = ["TimeoutConfig", "get_timeout_config"]
