"""Focused tests for endpoint_providers.base.logging.

Covers:
- _parse_level string parsing
- _coerce_tokens stability
- normalized_log_event emits required keys
- logger hierarchy and file handler management
"""
from __future__ import annotations

import json
import logging

from endpoint_providers.base.log_support import JsonFormatter, LogContext
from endpoint_providers.base.logging import (
    BASE_LOGGER_NAME,
    REQUIRED_NORMALIZED_KEYS,
    _coerce_tokens,  # type: ignore[attr-defined]
    _parse_level,  # type: ignore[attr-defined]
    configure_logger,
    get_logger,
    log_event,
    normalized_log_event,
)
from endpoint_providers.base.models import ChatUsage


class _ListHandler(logging.Handler):
    """Capture log records into a list for assertions."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.messages: list[str] = []

    def emit(self, record: logging.LogRecord) -> None:  # pragma: no cover - exercised via tests
        self.messages.append(record.getMessage())


def _attach(name: str) -> tuple[logging.Logger, _ListHandler]:
    logger = get_logger(name, json_mode=False)
    handler = _ListHandler()
    logger.handlers[:] = [handler]
    logger.propagate = False
    return logger, handler


def test_parse_level_variants():
    assert _parse_level(None) == logging.INFO  # nosec B101
    assert _parse_level("debug") == logging.DEBUG  # nosec B101
    assert _parse_level("WARN") == logging.WARNING  # nosec B101
    assert _parse_level("unknown", default=logging.ERROR) == logging.ERROR  # nosec B101


def test_get_logger_nests_under_base_name():
    logger = get_logger("cohere")
    assert logger.name == f"{BASE_LOGGER_NAME}.cohere"  # nosec B101
    assert get_logger(f"{BASE_LOGGER_NAME}.cohere") is logger  # nosec B101
    assert logging.getLogger(BASE_LOGGER_NAME).propagate is True  # nosec B101


def test_normalized_log_event_emits_required_keys():
    logger, handler = _attach("test.logging.normalized")
    ctx = LogContext(provider="cohere", model="command-r")
    normalized_log_event(
        logger,
        "stream.decoder.end",
        ctx,
        phase="finalize",
        attempt=None,
        error_code="timeout",
        emitted=True,
        tokens={"prompt": 10, "completion": 5},
        finish_reason="stop",
    )

    assert handler.messages, "expected a log message"  # nosec B101
    payload = json.loads(handler.messages[-1])
    for key in REQUIRED_NORMALIZED_KEYS:
        assert key in payload  # nosec B101
    assert payload["event"] == "stream.decoder.end" and payload["provider"] == "cohere"  # nosec B101
    assert payload["attempt"] is None and payload["finish_reason"] == "stop"  # nosec B101


def test_normalized_log_event_omits_error_code_when_clean():
    logger, handler = _attach("test.logging.clean")
    normalized_log_event(logger, "chat.end", LogContext(provider="cohere"), phase="finalize")
    payload = json.loads(handler.messages[-1])
    assert "error_code" not in payload and payload["structured"] is True  # nosec B101


def test_extra_fields_merge_after_normalized_keys():
    logger, handler = _attach("test.logging.extra")
    normalized_log_event(logger, "x", None, phase="start", note="kept", skipped=None)
    payload = json.loads(handler.messages[-1])
    assert payload["phase"] == "start" and payload["note"] == "kept"  # nosec B101
    assert "skipped" not in payload and payload["emitted"] is None  # nosec B101


def test_coerce_tokens_shapes():
    assert _coerce_tokens(None) is None  # nosec B101
    assert _coerce_tokens({"total": 3}) == {"total": 3}  # nosec B101
    usage = ChatUsage.from_counts(2, 1)
    assert _coerce_tokens(usage) == {"prompt": 2, "completion": 1, "total": 3}  # nosec B101
    assert _coerce_tokens(7) == {"value": "7"}  # nosec B101


def test_log_event_drops_none_unless_kept():
    logger, handler = _attach("test.logging.none")
    log_event(logger, "a", None, missing=None, present=1)
    log_event(logger, "b", None, keep_none=True, missing=None)
    first, second = (json.loads(m) for m in handler.messages[-2:])
    assert "missing" not in first and first["present"] == 1  # nosec B101
    assert second["missing"] is None  # nosec B101


def test_json_formatter_hoists_event_fields():
    record = logging.LogRecord("endpoint_providers.x", logging.INFO, __file__, 1, json.dumps({"event": "e", "k": 1}), None, None)
    out = json.loads(JsonFormatter().format(record))
    assert out["event"] == "e" and out["k"] == 1 and out["level"] == "INFO"  # nosec B101


def test_configure_logger_attaches_and_removes_file_handler(tmp_path):
    path = tmp_path / "logs" / "endpoint.log"
    logger = configure_logger(level="WARNING", file_path=str(path))
    try:
        assert any(getattr(h, "baseFilename", None) == str(path) for h in logger.handlers)  # nosec B101
        assert logger.level == logging.WARNING  # nosec B101
    finally:
        configure_logger(level=logging.DEBUG, file_path=None)
    assert not any(getattr(h, "baseFilename", None) for h in logger.handlers)  # nosec B101
