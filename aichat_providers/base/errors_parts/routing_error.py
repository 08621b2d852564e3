"""
Terminal routing errors raised by the chat orchestrator.

A routing error means no adapter could be resolved for a request: either the
requested provider name is not registered, or the primary failed and the
fallback provider is not registered. Backend failures of a resolved adapter
are reported as :class:`ProviderError` instead.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .provider_error import ProviderError


class RoutingErrorKind(str, Enum):
    """Categories of terminal routing failures."""

    NO_PROVIDER_FOUND = "no_provider_found"
    NO_FALLBACK_AVAILABLE = "no_fallback_available"


@dataclass
class RoutingError(Exception):
    """Raised when the orchestrator cannot resolve an adapter.

    Attributes:
        kind: Which resolution step failed.
        name: The provider name that could not be resolved.
        cause: For ``NO_FALLBACK_AVAILABLE``, the primary failure that
            triggered the fallback attempt.
    """

    kind: RoutingErrorKind
    name: str
    cause: Optional[ProviderError] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        if self.kind is RoutingErrorKind.NO_PROVIDER_FOUND:
            return f"No AI provider found for: {self.name}"
        return f"No fallback provider available: {self.name}"


__all__ = ["RoutingError", "RoutingErrorKind"]
