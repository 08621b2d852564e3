"""aichat_providers package

Provider-routing layer for a chat assistant: forwards a message to one of
several interchangeable LLM backends (local Ollama, OpenAI, Anthropic),
selected by configuration or per-request override, and retries exactly once
against a fixed fallback backend when the selected one fails.

Public API (re-exported):
    - Version: ``__version__``
    - Exceptions: :class:`ProviderError`, :class:`ErrorCode`,
      :class:`RoutingError`, :class:`RoutingErrorKind`
    - Core: :class:`ChatOrchestrator`, :class:`ProviderRegistry`,
      :class:`ChatRequest`, :class:`ChatResponse`, :class:`ProviderOutcome`
    - Wiring: :func:`create`, :func:`build_registry`, :func:`build_orchestrator`

Typical use::

    from aichat_providers import build_orchestrator

    orchestrator = build_orchestrator()
    text = orchestrator.route("Summarize today's VaR breaches", provider_override="OPENAI")
"""

from .base.errors import (
    ErrorCode,
    ProviderError,
    RoutingError,
    RoutingErrorKind,
)
from .base.factory import (
    ProviderFactory,
    UnknownProviderError,
    build_orchestrator,
    build_registry,
)
from .base.interfaces import ChatProvider
from .base.models import ChatRequest, ChatResponse, ProviderOutcome
from .base.routing import ChatOrchestrator, ProviderRegistry

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Exceptions
    "ProviderError",
    "ErrorCode",
    "RoutingError",
    "RoutingErrorKind",
    "UnknownProviderError",
    # Core
    "ChatProvider",
    "ChatRequest",
    "ChatResponse",
    "ProviderOutcome",
    "ChatOrchestrator",
    "ProviderRegistry",
    # Wiring
    "ProviderFactory",
    "build_registry",
    "build_orchestrator",
]
