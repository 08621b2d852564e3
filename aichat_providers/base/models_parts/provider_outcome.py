"""
ProviderOutcome result value returned by adapters.

Adapters never raise for backend failures; they return an outcome carrying
either the generated text or a :class:`ProviderError`. The orchestrator
branches on :attr:`ProviderOutcome.ok` to decide whether to fall back.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..errors import ProviderError


@dataclass(frozen=True)
class ProviderOutcome:
    """Result of a single adapter invocation.

    Attributes:
        provider: Name of the adapter that produced this outcome.
        text: Generated text on success, else ``None``.
        error: Structured failure on error, else ``None``.
        latency_ms: Wall-clock duration of the outbound call when measured.
    """

    provider: str
    text: Optional[str] = None
    error: Optional[ProviderError] = None
    latency_ms: Optional[float] = None

    @property
    def ok(self) -> bool:
        """Return True when the invocation produced text without an error."""
        return self.error is None

    @classmethod
    def success(cls, provider: str, text: str, *, latency_ms: Optional[float] = None) -> "ProviderOutcome":
        return cls(provider=provider, text=text, latency_ms=latency_ms)

    @classmethod
    def failure(cls, error: ProviderError, *, latency_ms: Optional[float] = None) -> "ProviderOutcome":
        return cls(provider=error.provider, error=error, latency_ms=latency_ms)


__all__ = [
    "ProviderOutcome",
]
