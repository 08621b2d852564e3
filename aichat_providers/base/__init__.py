"""
Providers Base Package

Exports provider-agnostic contracts, value objects, the routing core and the
provider factory.

Layers:
- Interfaces: the ``ChatProvider`` adapter boundary
- Models: request/response/outcome value objects
- Routing: read-only registry and the single-fallback orchestrator
- Factory: lazy creation of adapters by family, registry/orchestrator wiring
"""

from .errors import (
    ErrorCode,
    ProviderError,
    RoutingError,
    RoutingErrorKind,
    classify_exception,
)
from .factory import (
    ProviderFactory,
    UnknownProviderError,
    build_orchestrator,
    build_registry,
)
from .interfaces import ChatProvider
from .models import ChatRequest, ChatResponse, ProviderOutcome
from .routing import ChatOrchestrator, ProviderRegistry
from .timeouts import TimeoutConfig, get_timeout_config

__all__ = [
    # Models
    "ChatRequest",
    "ChatResponse",
    "ProviderOutcome",
    # Interfaces
    "ChatProvider",
    # Errors
    "ErrorCode",
    "ProviderError",
    "RoutingError",
    "RoutingErrorKind",
    "classify_exception",
    # Routing
    "ChatOrchestrator",
    "ProviderRegistry",
    # Factory
    "ProviderFactory",
    "UnknownProviderError",
    "build_registry",
    "build_orchestrator",
    # Timeouts
    "TimeoutConfig",
    "get_timeout_config",
]
