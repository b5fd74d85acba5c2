"""Shared fixtures for the endpoint provider test suite.

Provides config isolation, structured log capture, a deterministic clock,
Cohere provider construction and NDJSON stream helpers.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Callable, Iterator, List

import pytest

from endpoint_providers.base.endpoint import ProviderInit
from endpoint_providers.cohere import CohereEndpointProvider
from endpoint_providers.config import reset_config_cache

_CONFIG_ENV = (
    "COHERE_API_KEY",
    "CO_API_KEY",
    "COHERE_MODEL",
    "COHERE_BASE_URL",
    "COHERE_PROTOCOL_VERSION",
    "COHERE_SURFACE_ANCILLARY_EVENTS",
    "PROVIDERS_CONFIG_FILE",
)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Keep the developer's environment and .env file out of every test."""
    for name in _CONFIG_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "missing.env"))
    monkeypatch.setenv("ENDPOINT_PROVIDERS_LOG_LEVEL", "DEBUG")
    reset_config_cache()
    yield
    reset_config_cache()


@pytest.fixture()
def log_capture() -> Iterator[List[logging.LogRecord]]:
    records: List[logging.LogRecord] = []
    handler = logging.Handler()
    handler.emit = lambda record: records.append(record)  # type: ignore
    root = logging.getLogger()
    root.addHandler(handler)
    try:
        yield records
    finally:
        root.removeHandler(handler)


@pytest.fixture()
def events(log_capture) -> Callable[[], List[dict]]:
    """Return a callable parsing captured records into event payloads."""

    def _parsed() -> List[dict]:
        out = []
        for record in log_capture:
            try:
                payload = json.loads(record.getMessage())
            except ValueError:
                continue
            if isinstance(payload, dict) and "event" in payload:
                payload["_level"] = record.levelno
                out.append(payload)
        return out

    return _parsed


@pytest.fixture()
def fake_clock(monkeypatch):
    """Provide a deterministic perf_counter sequence.

    Usage: fake_clock.advance(ms) to move time forward.
    """
    state = {"t": 0.0}

    def perf_counter():
        return state["t"]

    def advance(ms: float):
        state["t"] += ms / 1000.0

    monkeypatch.setattr(time, "perf_counter", perf_counter)
    return type("Clock", (), {"advance": staticmethod(advance)})


@pytest.fixture()
def make_cohere() -> Callable[..., CohereEndpointProvider]:
    """Build a Cohere provider from ``ProviderInit`` keyword arguments."""

    def _make(**kwargs: Any) -> CohereEndpointProvider:
        kwargs.setdefault("api_key", "co-live-key")  # pragma: allowlist secret - dummy test value
        kwargs.setdefault("default_model", "command-r-plus")
        return CohereEndpointProvider(ProviderInit(**kwargs))

    return _make


@pytest.fixture()
def ndjson() -> Callable[..., List[str]]:
    """Serialize records into stream lines (strings pass through untouched)."""

    def _lines(*records: Any) -> List[str]:
        return [r if isinstance(r, str) else json.dumps(r) for r in records]

    return _lines
