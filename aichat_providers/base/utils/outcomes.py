"""Outcome shaping shared by adapters.

Adapters funnel every invocation result through these helpers so that
success/failure logging and :class:`ProviderError` normalization look the
same regardless of backend.
"""
from __future__ import annotations

import logging
from typing import Optional

from ..errors import wrap_exception
from ..logging import LogContext, normalized_log_event
from ..models import ProviderOutcome


def success_outcome(
    provider_name: str,
    text: str,
    *,
    logger: logging.Logger,
    ctx: LogContext,
    latency_ms: Optional[float],
) -> ProviderOutcome:
    """Log ``chat.end`` and return a successful outcome."""
    normalized_log_event(
        logger,
        "chat.end",
        ctx,
        phase="finalize",
        emitted=True,
        latency_ms=latency_ms,
        response_chars=len(text),
    )
    return ProviderOutcome.success(provider_name, text, latency_ms=latency_ms)


def error_outcome(
    provider_name: str,
    exc: BaseException,
    *,
    logger: logging.Logger,
    ctx: LogContext,
    model: Optional[str] = None,
    latency_ms: Optional[float] = None,
) -> ProviderOutcome:
    """Classify ``exc``, log ``chat.error`` and return a failed outcome."""
    error = wrap_exception(exc, provider=provider_name, model=model)
    normalized_log_event(
        logger,
        "chat.error",
        ctx,
        phase="finalize",
        level=logging.WARNING,
        emitted=False,
        error_code=error.code.value,
        error=error.message,
        latency_ms=latency_ms,
    )
    return ProviderOutcome.failure(error, latency_ms=latency_ms)


__all__ = ["success_outcome", "error_outcome"]
