"""Focused tests for aichat_providers.base.logging.

Covers:
- _parse_level string parsing
- normalized_log_event emits required keys and never lets extras override them
- JsonFormatter hoists JSON messages
- configure_logger attaches and removes a rotating file handler
"""
from __future__ import annotations

import json
import logging

from aichat_providers.base.log_support import JsonFormatter, LogContext
from aichat_providers.base.logging import (
    REQUIRED_NORMALIZED_KEYS,
    _parse_level,  # type: ignore[attr-defined]
    close_file_handlers,
    configure_logger,
    get_logger,
    log_event,
    normalized_log_event,
)


class _ListHandler(logging.Handler):
    """Capture log records into a list for assertions."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.messages: list[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(record.getMessage())


def _capture(name: str) -> tuple[logging.Logger, _ListHandler]:
    logger = get_logger(name)
    handler = _ListHandler()
    logger.handlers[:] = [handler]
    logger.propagate = False
    return logger, handler


def test_parse_level_variants():
    assert _parse_level(None) == logging.INFO  # nosec B101
    assert _parse_level("debug") == logging.DEBUG  # nosec B101
    assert _parse_level("WARN") == logging.WARNING  # nosec B101
    assert _parse_level("unknown", default=logging.ERROR) == logging.ERROR  # nosec B101


def test_get_logger_prefixes_names():
    assert get_logger("routing").name == "aichat.routing"
    assert get_logger("aichat.ollama").name == "aichat.ollama"
    assert get_logger().name == "aichat"


def test_normalized_log_event_emits_required_keys():
    logger, handler = _capture("aichat.test.normalized")
    try:
        ctx = LogContext(provider="OPENAI", model="gpt-4o-mini", request_id="r1")
        normalized_log_event(
            logger,
            "route.error",
            ctx,
            phase="fallback",
            attempt=2,
            error_code="timeout",
            emitted=None,
            attempt_extra=None,
        )
        payload = json.loads(handler.messages[-1])
        for key in REQUIRED_NORMALIZED_KEYS:
            assert key in payload, f"missing {key}"
        assert payload["event"] == "route.error"
        assert payload["structured"] is True
        assert payload["attempt"] == 2
        assert payload["emitted"] is None
        assert payload["provider"] == "OPENAI" and payload["request_id"] == "r1"
        assert "attempt_extra" not in payload
    finally:
        logger.handlers[:] = []
        logger.propagate = True


def test_normalized_log_event_omits_error_code_on_success():
    logger, handler = _capture("aichat.test.no_error")
    try:
        normalized_log_event(logger, "chat.end", None, phase="finalize", emitted=True, structured="nope")
        payload = json.loads(handler.messages[-1])
        assert "error_code" not in payload
        assert payload["structured"] is True
    finally:
        logger.handlers[:] = []
        logger.propagate = True


def test_log_event_drops_none_unless_kept():
    logger, handler = _capture("aichat.test.log_event")
    try:
        log_event(logger, "x", LogContext(provider="P"), a=None, b=1)
        log_event(logger, "y", None, keep_none=True, a=None)
        first, second = (json.loads(m) for m in handler.messages)
        assert first == {"event": "x", "provider": "P", "b": 1}
        assert second == {"event": "y", "a": None}
    finally:
        logger.handlers[:] = []
        logger.propagate = True


def test_json_formatter_hoists_event_fields():
    record = logging.LogRecord(
        name="aichat.routing",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg=json.dumps({"event": "route.primary_failed", "error_code": "timeout"}),
        args=None,
        exc_info=None,
    )
    line = json.loads(JsonFormatter().format(record))
    assert line["event"] == "route.primary_failed"
    assert line["level"] == "WARNING"
    assert line["logger"] == "aichat.routing"
    assert "msg" not in line
    assert line["ts"].endswith("Z")


def test_json_formatter_keeps_plain_messages():
    record = logging.LogRecord("aichat", logging.INFO, __file__, 1, "hello %s", ("world",), None)
    line = json.loads(JsonFormatter().format(record))
    assert line["msg"] == "hello world"


def test_configure_logger_file_handler(tmp_path):
    path = tmp_path / "logs" / "aichat.log"
    try:
        logger = configure_logger(level="DEBUG", file_path=str(path), json_mode=True)
        assert logger.level == logging.DEBUG
        log_event(get_logger("aichat.test.file"), "file.event", None, value=3)
        for h in logger.handlers:
            h.flush()
        lines = path.read_text(encoding="utf-8").strip().splitlines()
        assert json.loads(lines[-1])["event"] == "file.event"
    finally:
        close_file_handlers()
        configure_logger(level=logging.INFO)
