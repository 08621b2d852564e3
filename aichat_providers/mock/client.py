"""Deterministic mock provider backed by JSON fixtures for offline use.

Purpose
-------
Provide an adapter that satisfies the ``ChatProvider`` contract without any
network traffic, so the orchestrator, the HTTP service and local demos can
run with no model runtime or API keys. Replies are looked up by message in a
small JSON catalog; a configured ``error`` code turns the adapter into a
deterministic failing backend for fallback drills.

External dependencies
---------------------
Standard library only. Fixtures are loaded via ``importlib.resources``.
"""

from __future__ import annotations

import json
import threading
from importlib import resources
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..base.errors import ErrorCode, ProviderError
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import ProviderOutcome
from ..base.utils import error_outcome, normalize_provider_name, resolve_system_prompt, success_outcome

_FIXTURE_RESOURCE = "chat_replies.json"


def load_fixture_catalog(resource: str = _FIXTURE_RESOURCE) -> Dict[str, Any]:
    """Load the JSON reply catalog bundled with the mock provider.

    Parameters
    ----------
    resource: str, default ``chat_replies.json``
        Name of the resource file located under ``aichat_providers.mock.fixtures``.

    Returns
    -------
    Dict[str, Any]
        Parsed catalog with a ``model`` label and a ``responses`` mapping.
    """

    package = "aichat_providers.mock.fixtures"
    data = resources.files(package).joinpath(resource).read_text(encoding="utf-8")
    return json.loads(data)


class MockProvider:
    """Adapter that returns canned replies instead of calling a model."""

    def __init__(
        self,
        name: str = "MOCK",
        *,
        reply: Optional[str] = None,
        error: Optional[ErrorCode] = None,
        catalog: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """Initialize the mock provider.

        Parameters
        ----------
        name: str, default ``"MOCK"``
            Routing name; tests register mocks under real names such as
            ``"PRIMARY"`` to stand in for live backends.
        reply: Optional[str]
            Fixed reply returned for every message, bypassing the catalog.
        error: Optional[ErrorCode]
            When set, every invocation fails with this code.
        catalog: Optional[Mapping[str, Any]]
            Pre-parsed catalog; defaults to the bundled fixture file.
        """

        self._name = normalize_provider_name(name) or "MOCK"
        self._reply = reply
        self._error = error
        self._catalog = catalog if catalog is not None else load_fixture_catalog()
        self._model = str(self._catalog.get("model", "mock"))
        self._responses: Mapping[str, Any] = self._catalog.get("responses", {}) or {}
        self._calls: List[Tuple[str, str]] = []
        self._lock = threading.Lock()
        self._logger = get_logger(f"aichat.mock.{self._name.lower()}")

    @property
    def provider_name(self) -> str:
        return self._name

    def default_model(self) -> str:
        return self._model

    @property
    def calls(self) -> List[Tuple[str, str]]:
        """Snapshot of ``(message, resolved_system_prompt)`` pairs received."""
        with self._lock:
            return list(self._calls)

    def invoke(self, message: str, system_prompt: Optional[str] = None) -> ProviderOutcome:
        """Return the scripted reply (or scripted failure) for ``message``."""

        prompt = resolve_system_prompt(system_prompt)
        with self._lock:
            self._calls.append((message, prompt))
        ctx = LogContext(provider=self._name, model=self._model)
        normalized_log_event(self._logger, "chat.start", ctx, phase="start", message=message, system_prompt=prompt)
        if self._error is not None:
            exc = ProviderError(
                code=self._error,
                message=f"mock provider configured to fail with {self._error.value}",
                provider=self._name,
                model=self._model,
            )
            return error_outcome(self._name, exc, logger=self._logger, ctx=ctx, model=self._model, latency_ms=0.0)
        return success_outcome(self._name, self._select_reply(message), logger=self._logger, ctx=ctx, latency_ms=0.0)

    def _select_reply(self, message: str) -> str:
        """Return the fixed reply, then exact, lower-cased and wildcard catalog hits."""

        if self._reply is not None:
            return self._reply
        key = message.strip()
        raw = self._responses.get(key) or self._responses.get(key.lower()) or self._responses.get("*")
        return str(raw) if raw is not None else ""


__all__ = ["MockProvider", "load_fixture_catalog"]
