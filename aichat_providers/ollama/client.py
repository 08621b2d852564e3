"""Ollama provider adapter.

Purpose:
        Sends one message plus a persona prompt to the local Ollama HTTP API
        (default ``http://localhost:11434``) and reports the result as a
        :class:`ProviderOutcome`.

External dependencies:
        - HTTP client only (``httpx``) through the shared pool. No SDK or API
          key is required since Ollama is a local daemon.

Timeout strategy:
        - Pooled clients carry ``get_timeout_config().as_httpx_timeout()``.

Error handling:
        - Transport errors, non-2xx statuses and malformed bodies are
          classified with ``classify_exception`` and returned as failed
          outcomes. Nothing is retried here; the orchestrator owns fallback.
"""

from __future__ import annotations

import time
from typing import Any, Optional

import httpx

from ..base.http import get_httpx_client
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import ProviderOutcome
from ..base.utils import error_outcome, normalize_provider_name, resolve_system_prompt, success_outcome
from ..config import get_provider_config
from ..config.defaults import OLLAMA_DEFAULT_HOST, OLLAMA_DEFAULT_MODEL
from .helpers import GENERATE_PATH, build_payload, extract_text


def _coerce_non_empty_str(candidate: Any, fallback: str) -> str:
    """Return a stripped string derived from ``candidate`` or ``fallback``."""
    if candidate is None:
        return fallback
    coerced = str(candidate).strip()
    return coerced or fallback


class OllamaProvider:
    """Adapter for a locally running Ollama daemon."""

    def __init__(
        self,
        name: Optional[str] = None,
        host: Optional[str] = None,
        model: Optional[str] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        """Initialize the Ollama adapter.

        Parameters
        ----------
        name:
            Routing name; defaults to ``"OLLAMA"``. Deployments register the
            local runtime under an alias such as ``"PRIMARY"``.
        host:
            Base URL of the daemon. Falls back to configuration
            (``OLLAMA_HOST``, config file) and then ``http://localhost:11434``.
        model:
            Model tag, resolved the same way (``OLLAMA_MODEL``).
        client:
            Optional pre-built ``httpx.Client`` (tests inject a
            ``MockTransport``); defaults to the shared pool.
        """
        cfg = get_provider_config("ollama", overrides={"host": host, "model": model})
        self._name = normalize_provider_name(name) or "OLLAMA"
        self._host = _coerce_non_empty_str(cfg.get("host"), OLLAMA_DEFAULT_HOST)
        self._model = _coerce_non_empty_str(cfg.get("model"), OLLAMA_DEFAULT_MODEL)
        self._client = client
        self._logger = get_logger("aichat.ollama")

    @property
    def provider_name(self) -> str:
        return self._name

    def default_model(self) -> str:
        return self._model

    def invoke(self, message: str, system_prompt: Optional[str] = None) -> ProviderOutcome:
        """Generate a reply with exactly one ``/api/generate`` call."""
        prompt = resolve_system_prompt(system_prompt)
        ctx = LogContext(provider=self._name, model=self._model)
        normalized_log_event(
            self._logger,
            "chat.start",
            ctx,
            phase="start",
            message=message,
            system_prompt=prompt,
            host=self._host,
        )
        payload = build_payload(model=self._model, message=message, system_prompt=prompt)
        t0 = time.perf_counter()
        try:
            client = self._client or get_httpx_client(self._host, purpose="ollama.chat")
            resp = client.post(GENERATE_PATH, json=payload)
            resp.raise_for_status()
            text = extract_text(resp.json(), provider_name=self._name, model=self._model)
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


__all__ = ["OllamaProvider"]
