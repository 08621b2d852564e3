"""Pytest configuration for the aichat_providers test suite.

Every test runs against a scrubbed environment: provider credentials, routing
overrides and config-file pointers from the developer's shell (or a local
``.env``) must not leak into assertions. Cached config and pooled HTTP
clients are reset around each test.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Iterator, List

import pytest

from aichat_providers.base.http import close_all_clients
from aichat_providers.base.logging import BASE_LOGGER_NAME, get_logger
from aichat_providers.config import reset_config_cache

_ENV_PREFIXES = ("AICHAT_", "OPENAI_", "ANTHROPIC_", "OLLAMA_", "MOCK_")
_ENV_NAMES = ("CLAUDE_API_KEY", "DOTENV_FILE")


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Strip package-related env vars and point ``DOTENV_FILE`` at nothing."""

    for name in list(os.environ):
        if name.startswith(_ENV_PREFIXES) or name in _ENV_NAMES:
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "missing.env"))
    reset_config_cache()
    yield
    reset_config_cache()
    close_all_clients()


class _ListHandler(logging.Handler):
    """Capture formatted log messages into a list for assertions."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.messages: List[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(record.getMessage())


class LogCapture:
    """Parsed view over JSON events emitted on the ``aichat`` logger."""

    def __init__(self, handler: _ListHandler) -> None:
        self._handler = handler

    @property
    def events(self) -> List[Dict[str, Any]]:
        out: List[Dict[str, Any]] = []
        for msg in self._handler.messages:
            try:
                parsed = json.loads(msg)
            except ValueError:
                continue
            if isinstance(parsed, dict):
                out.append(parsed)
        return out

    def named(self, event: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e.get("event") == event]


@pytest.fixture()
def log_capture() -> Iterator[LogCapture]:
    """Attach a list handler to the shared base logger for one test."""

    base = get_logger(BASE_LOGGER_NAME)
    handler = _ListHandler()
    base.addHandler(handler)
    try:
        yield LogCapture(handler)
    finally:
        base.removeHandler(handler)
