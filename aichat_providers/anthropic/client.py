"""AnthropicProvider adapter.

This module implements the Anthropic integration using the official
``anthropic`` SDK Messages API (``client.messages.create``).

Key behaviors:
* The SDK client is constructed lazily; a missing ``ANTHROPIC_API_KEY`` (or
  ``CLAUDE_API_KEY``) is reported as an ``AUTH`` failure on invocation, not
  at registry build time.
* SDK retries are disabled (``max_retries=0``); the orchestrator's single
  fallback hop is the only retry in the system.
* ``max_tokens`` is required by the Messages API and comes from
  ``ANTHROPIC_MAX_TOKENS`` or the config file (default 1024).
* ``ANTHROPIC_BASE_URL`` points the SDK at a proxy or gateway; the SDK
  timeout is plain seconds from ``AICHAT_TIMEOUT_HTTP_SECONDS``.
"""

from __future__ import annotations

import threading
import time
from typing import Any, Optional

import anthropic

from ..base.constants import MISSING_API_KEY_ERROR
from ..base.errors import ErrorCode, ProviderError
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import ProviderOutcome
from ..base.timeouts import get_timeout_config
from ..base.utils import error_outcome, normalize_provider_name, resolve_system_prompt, success_outcome
from ..config import get_provider_config
from ..config.defaults import ANTHROPIC_DEFAULT_MAX_TOKENS, ANTHROPIC_DEFAULT_MODEL
from .helpers import build_params, extract_text


class AnthropicProvider:
    """Adapter for Anthropic's Messages API."""

    def __init__(
        self,
        name: Optional[str] = None,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        base_url: Optional[str] = None,
        client: Any = None,
    ) -> None:
        overrides = {
            "api_key": api_key,
            "model": model,
            "max_tokens": max_tokens,
            "base_url": base_url,
        }
        cfg = get_provider_config("anthropic", overrides=overrides)
        self._name = normalize_provider_name(name) or "ANTHROPIC"
        self._api_key: Optional[str] = cfg.get("api_key")
        self._model: str = cfg.get("model") or ANTHROPIC_DEFAULT_MODEL
        self._max_tokens = int(cfg.get("max_tokens") or ANTHROPIC_DEFAULT_MAX_TOKENS)
        self._base_url: Optional[str] = cfg.get("base_url")
        self._client = client
        self._client_lock = threading.Lock()
        self._logger = get_logger("aichat.anthropic")

    @property
    def provider_name(self) -> str:
        """Return the routing name this adapter is registered under."""
        return self._name

    def default_model(self) -> str:
        return self._model

    def _create_client(self) -> Any:
        """Return the SDK client, constructing ``anthropic.Anthropic`` once.

        Raises:
            ProviderError: ``AUTH`` when no API key is configured.
        """
        if self._client is not None:
            return self._client
        if not self._api_key:
            raise ProviderError(
                code=ErrorCode.AUTH,
                message=MISSING_API_KEY_ERROR,
                provider=self._name,
                model=self._model,
            )
        with self._client_lock:
            if self._client is None:
                self._client = anthropic.Anthropic(
                    api_key=self._api_key,
                    base_url=self._base_url or None,
                    timeout=get_timeout_config().http_timeout_seconds,
                    max_retries=0,
                )
        return self._client

    def invoke(self, message: str, system_prompt: Optional[str] = None) -> ProviderOutcome:
        """Send one Messages API request and report the outcome."""
        prompt = resolve_system_prompt(system_prompt)
        ctx = LogContext(provider=self._name, model=self._model)
        normalized_log_event(
            self._logger,
            "chat.start",
            ctx,
            phase="start",
            message=message,
            system_prompt=prompt,
            max_tokens=self._max_tokens,
        )
        params = build_params(
            model=self._model,
            max_tokens=self._max_tokens,
            message=message,
            system_prompt=prompt,
        )
        t0 = time.perf_counter()
        try:
            resp = self._create_client().messages.create(**params)
            text = extract_text(resp, provider_name=self._name, model=self._model)
        except Exception as exc:
            return error_outcome(
                self._name,
                exc,
                logger=self._logger,
                ctx=ctx,
                model=self._model,
                latency_ms=(time.perf_counter() - t0) * 1000.0,
            )
        return success_outcome(
            self._name,
            text,
            logger=self._logger,
            ctx=ctx,
            latency_ms=(time.perf_counter() - t0) * 1000.0,
        )


__all__ = ["AnthropicProvider"]
