"""ChatProvider Protocol (single-class module).

Defines the minimal capability every backend adapter implements.
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from ..models import ProviderOutcome


@runtime_checkable
class ChatProvider(Protocol):
    """Minimal interface for chat backends.

    Implementations send one message plus a persona prompt to a single
    backend and report the result as a :class:`ProviderOutcome`. They hold no
    per-request state and may be invoked concurrently.
    """

    @property
    def provider_name(self) -> str:
        """Upper-cased routing identifier, e.g. ``"OLLAMA"`` or ``"OPENAI"``."""
        ...

    def invoke(self, message: str, system_prompt: Optional[str] = None) -> ProviderOutcome:
        """Execute exactly one outbound chat call.

        Failure handling: do not raise for backend failures (timeouts, HTTP
        errors, malformed payloads, missing credentials); return
        ``ProviderOutcome.failure(ProviderError(...))`` instead.
        """
        ...
