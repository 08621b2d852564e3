"""Base structured logging utilities for the routing and adapter layers.

All modules obtain loggers through :func:`get_logger`, which lazily installs a
single stderr handler on the shared ``aichat`` logger; child loggers
(``aichat.routing``, ``aichat.ollama``, ...) propagate to it. Events are
emitted as one JSON object per line via :func:`log_event` or, when the
canonical key set is wanted, :func:`normalized_log_event`.

Environment:
    AICHAT_LOG_LEVEL   DEBUG/INFO/WARNING/ERROR/CRITICAL (default INFO)
    AICHAT_LOG_FORMAT  ``json`` (default) or ``plain``
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "aichat"
PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_BASE_LOGGER_ATTR = "_aichat_logger_initialized"
_CONSOLE_HANDLER_ATTR = "_aichat_console_handler"
_FILE_HANDLER_ATTR = "_aichat_file_handler"


def _parse_level(value: str | None, default: int = logging.INFO) -> int:
    """Parse a logging level name case-insensitively, falling back to ``default``."""
    if not value:
        return default
    mapping = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARN": logging.WARNING,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return mapping.get(value.strip().upper(), default)


def _json_mode_default() -> bool:
    return os.getenv("AICHAT_LOG_FORMAT", "json").strip().lower() != "plain"


def _make_formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(PLAIN_FORMAT)


def _ensure_base_logger(json_mode: bool, level: int) -> logging.Logger:
    """Initialize (once) and return the shared ``aichat`` logger."""
    logger = logging.getLogger(BASE_LOGGER_NAME)
    desired_level = _parse_level(os.getenv("AICHAT_LOG_LEVEL"), default=level)
    if getattr(logger, _BASE_LOGGER_ATTR, False):
        if logger.level != desired_level:
            logger.setLevel(desired_level)
        for existing in logger.handlers:
            if getattr(existing, _CONSOLE_HANDLER_ATTR, False):
                existing.setLevel(desired_level)
                # sys.stderr may have been swapped (and the old one closed).
                if isinstance(existing, logging.StreamHandler) and existing.stream is not sys.stderr:
                    existing.stream = sys.stderr
        return logger

    logger.setLevel(desired_level)
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(desired_level)
    handler.setFormatter(_make_formatter(json_mode))
    setattr(handler, _CONSOLE_HANDLER_ATTR, True)
    logger.handlers[:] = [handler]
    logger.propagate = False
    setattr(logger, _BASE_LOGGER_ATTR, True)
    return logger


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: Optional[bool] = None, level: int = logging.INFO) -> logging.Logger:
    """Return a logger under the shared ``aichat`` hierarchy.

    Names outside the hierarchy are prefixed (``"routing"`` becomes
    ``"aichat.routing"``) so that every logger reaches the base handler.
    """
    if json_mode is None:
        json_mode = _json_mode_default()
    base_logger = _ensure_base_logger(json_mode=json_mode, level=level)
    if name == BASE_LOGGER_NAME:
        return base_logger
    if not name.startswith(BASE_LOGGER_NAME + "."):
        name = f"{BASE_LOGGER_NAME}.{name}"
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    return logger


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: Optional[bool] = None,
) -> logging.Logger:
    """Reconfigure the shared logger at runtime.

    Parameters
    ----------
    level: int | str | None
        New level (number or name). ``None`` keeps the current level.
    file_path: Optional[str]
        When set, attach (or re-point) a rotating file handler writing to
        this path. When ``None``, remove any file handler managed here.
    json_mode: Optional[bool]
        Formatter for the file handler; defaults to ``AICHAT_LOG_FORMAT``.

    Handlers not created by this module are left untouched.
    """
    if json_mode is None:
        json_mode = _json_mode_default()
    logger = get_logger(BASE_LOGGER_NAME, json_mode=json_mode)

    if level is not None:
        resolved = _parse_level(level, default=logger.level) if isinstance(level, str) else level
        logger.setLevel(resolved)
        for h in logger.handlers:
            h.setLevel(resolved)

    managed = [h for h in logger.handlers if getattr(h, _FILE_HANDLER_ATTR, False)]
    if file_path is None:
        for h in managed:
            logger.removeHandler(h)
            h.close()
        return logger

    abs_path = os.path.abspath(os.path.expanduser(file_path))
    os.makedirs(os.path.dirname(abs_path), exist_ok=True)

    existing: Optional[logging.FileHandler] = None
    for h in managed:
        if getattr(h, "baseFilename", None) == abs_path:
            existing = h
        else:
            logger.removeHandler(h)
            h.close()

    if existing is None:
        # 10MB x 5 backups
        existing = RotatingFileHandler(abs_path, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
        setattr(existing, _FILE_HANDLER_ATTR, True)
        logger.addHandler(existing)
    existing.setFormatter(_make_formatter(json_mode))
    existing.setLevel(logger.level)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Emit a structured log event as a single JSON message.

    Keys whose value is ``None`` are dropped unless ``keep_none`` is set.
    Context fields are merged first; explicit ``fields`` win on conflict.
    """
    payload: Dict[str, Any] = {"event": event}
    if ctx:
        payload |= ctx.to_dict()
    if keep_none:
        payload.update(fields)
    else:
        payload.update({k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


REQUIRED_NORMALIZED_KEYS = (
    "structured",
    "phase",
    "attempt",
    "error_code",
    "emitted",
)


def normalized_log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    attempt: int | None = None,
    error_code: str | None = None,
    emitted: bool | None = None,
    level: int = logging.INFO,
    **extra_fields: Any,
) -> None:
    """Emit an event carrying the canonical key set.

    ``structured``, ``phase``, ``attempt`` and ``emitted`` are always present
    (``None`` encoded as JSON ``null``); ``error_code`` is omitted when there
    is no error. Extra fields never overwrite the canonical ones.
    """
    base_fields: Dict[str, Any] = {
        "structured": True,
        "phase": phase,
        "attempt": attempt,
        "emitted": emitted,
    }
    if error_code is not None:
        base_fields["error_code"] = error_code
    for k, v in extra_fields.items():
        if v is None or k in base_fields:
            continue
        base_fields[k] = v
    log_event(logger, event, ctx, level=level, keep_none=True, **base_fields)


def close_file_handlers() -> None:
    """Close file handlers managed by :func:`configure_logger` (test teardown)."""
    logger = logging.getLogger(BASE_LOGGER_NAME)
    for h in list(logger.handlers):
        if getattr(h, _FILE_HANDLER_ATTR, False):
            logger.removeHandler(h)
            with contextlib.suppress(OSError):
                h.close()


__all__ = [
    "LogContext",
    "BASE_LOGGER_NAME",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
    "close_file_handlers",
    "REQUIRED_NORMALIZED_KEYS",
]
