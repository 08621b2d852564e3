"""OpenAI provider adapter.

Sends one user message plus a system prompt through the official ``openai``
SDK (``client.chat.completions.create``) and returns a
:class:`ProviderOutcome`.

The SDK client is created lazily on first use so that a process without
``OPENAI_API_KEY`` can still build its registry; the missing key surfaces as
an ``AUTH`` failure when this provider is actually invoked. SDK retries are
disabled (``max_retries=0``) because the orchestrator owns the single
fallback hop.
"""

from __future__ import annotations

import threading
import time
from typing import Any, Optional

from openai import OpenAI

from ..base.constants import MISSING_API_KEY_ERROR
from ..base.errors import ErrorCode, ProviderError
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import ProviderOutcome
from ..base.timeouts import get_timeout_config
from ..base.utils import error_outcome, normalize_provider_name, resolve_system_prompt, success_outcome
from ..config import get_provider_config
from ..config.defaults import OPENAI_DEFAULT_BASE_URL, OPENAI_DEFAULT_MODEL
from .helpers import build_messages, extract_text

__all__ = ["OpenAIProvider"]


class OpenAIProvider:
    """Adapter for OpenAI (and OpenAI-compatible) chat completions."""

    def __init__(
        self,
        name: Optional[str] = None,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        client: Any = None,
    ) -> None:
        """
        Args:
            name: Routing name; defaults to ``"OPENAI"``.
            api_key: Overrides ``OPENAI_API_KEY`` / config file.
            model: Overrides ``OPENAI_MODEL``; default ``gpt-4o-mini``.
            base_url: Overrides ``OPENAI_BASE_URL`` for compatible gateways.
            client: Pre-built SDK client (tests pass a stub).
        """
        cfg = get_provider_config(
            "openai", overrides={"api_key": api_key, "model": model, "base_url": base_url}
        )
        self._name = normalize_provider_name(name) or "OPENAI"
        self._api_key: Optional[str] = cfg.get("api_key")
        self._model: str = cfg.get("model") or OPENAI_DEFAULT_MODEL
        self._base_url: Optional[str] = cfg.get("base_url")
        self._client = client
        self._client_lock = threading.Lock()
        self._logger = get_logger("aichat.openai")

    @property
    def provider_name(self) -> str:
        return self._name

    def default_model(self) -> str:
        return self._model

    def _get_client(self) -> Any:
        """Return the SDK client, constructing it once on first use."""
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
                self._client = OpenAI(
                    api_key=self._api_key,
                    base_url=self._base_url or OPENAI_DEFAULT_BASE_URL,
                    timeout=get_timeout_config().http_timeout_seconds,
                    max_retries=0,
                )
        return self._client

    def invoke(self, message: str, system_prompt: Optional[str] = None) -> ProviderOutcome:
        """Request one chat completion; failures come back as outcomes."""
        prompt = resolve_system_prompt(system_prompt)
        ctx = LogContext(provider=self._name, model=self._model)
        normalized_log_event(
            self._logger,
            "chat.start",
            ctx,
            phase="start",
            message=message,
            system_prompt=prompt,
        )
        t0 = time.perf_counter()
        try:
            resp = self._get_client().chat.completions.create(
                model=self._model,
                messages=build_messages(message, prompt),
            )
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
