"""Provider Factory utilities.

Purpose
-------
Centralize creation of adapter instances implementing the ``ChatProvider``
protocol, and assemble the startup-time registry and orchestrator from
routing configuration. Adapters are imported lazily using ``importlib`` so a
deployment that never routes to Anthropic does not import its SDK.

External dependencies
---------------------
- Standard library only (``importlib``). Provider adapters themselves depend
    on ``httpx`` or vendor SDKs, but are imported on demand.

Timeout and fallback semantics
------------------------------
- No timeouts are introduced here. The factory performs no retries or
    fallbacks; it either returns an instance or raises a clear error.

Scope
-----
Supported adapter families: ``ollama``, ``openai``, ``anthropic``, ``mock``.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Mapping, Optional, Tuple, Type

from .logging import get_logger, log_event
from .routing import ChatOrchestrator, ProviderRegistry


class UnknownProviderError(Exception):
    """Raised when an adapter family cannot be resolved or initialized.

    Failure modes include:
    - The family is not registered in the factory mapping.
    - The adapter module cannot be imported or the adapter class is missing.
    - The adapter constructor raised an exception during initialization.
    """


class ProviderFactory:
    """Create provider adapters from a family name (e.g., ``"ollama"``).

    Design notes
    ------------
    - Uses ``importlib.import_module`` for explicit import semantics.
    - Raises :class:`UnknownProviderError` with precise messages for unknown
      families, import failures, missing classes and constructor errors.
    """

    # Map adapter families to import paths and class names
    _PROVIDERS: Dict[str, Dict[str, str]] = {
        "ollama": {"module": "aichat_providers.ollama.client", "class": "OllamaProvider"},
        "openai": {"module": "aichat_providers.openai.client", "class": "OpenAIProvider"},
        "anthropic": {"module": "aichat_providers.anthropic.client", "class": "AnthropicProvider"},
        "mock": {"module": "aichat_providers.mock.client", "class": "MockProvider"},
    }

    @classmethod
    def create(cls, provider: str, **kwargs: Any) -> Any:
        """Create an adapter instance.

        Parameters
        ----------
        provider:
            Adapter family (e.g., ``"openai"``), case-insensitive.
        **kwargs:
            Adapter constructor kwargs, typically ``name=`` for the routing
            name the instance will be registered under.

        Returns
        -------
        Any
            Instance implementing ``ChatProvider``.

        Raises
        ------
        UnknownProviderError
            If the family is unknown, the adapter module fails to import, the
            adapter class is missing, or the adapter constructor raises.
        """
        name = (provider or "").lower().strip()
        spec = cls._PROVIDERS.get(name)
        if not spec:
            raise UnknownProviderError(f"Unknown provider '{provider}'")

        module_path, class_name = spec["module"], spec["class"]

        try:
            mod = import_module(module_path)
        except Exception as exc:  # pragma: no cover - import failure path
            raise UnknownProviderError(
                f"Failed to import module '{module_path}' for provider '{provider}': {exc}"
            ) from exc

        try:
            klass: Type = getattr(mod, class_name)
        except AttributeError as exc:  # pragma: no cover - mapping defect
            raise UnknownProviderError(
                f"Adapter class '{class_name}' not found in '{module_path}' for provider '{provider}'"
            ) from exc

        try:
            return klass(**kwargs)
        except TypeError as exc:
            raise UnknownProviderError(
                f"Invalid arguments for '{provider}' adapter constructor: {exc}"
            ) from exc
        except Exception as exc:  # pragma: no cover - adapter runtime init error
            raise UnknownProviderError(
                f"Failed to initialize provider '{provider}': {exc}"
            ) from exc

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Return the supported adapter families in deterministic order."""
        return tuple(cls._PROVIDERS.keys())


def build_registry(
    routing_config=None,
    *,
    adapter_kwargs: Optional[Mapping[str, Mapping[str, Any]]] = None,
) -> ProviderRegistry:
    """Construct one adapter per configured route and freeze them in a registry.

    Parameters
    ----------
    routing_config:
        A :class:`~aichat_providers.config.RoutingConfig`; defaults to
        ``get_routing_config()``.
    adapter_kwargs:
        Optional extra constructor kwargs keyed by route name (for example a
        stub SDK ``client`` in tests).

    Raises
    ------
    UnknownProviderError
        When a route names an unsupported family.
    ValueError
        Propagated from :class:`ProviderRegistry` on duplicate names.
    """
    if routing_config is None:
        from ..config import get_routing_config

        routing_config = get_routing_config()
    extra = {k.strip().upper(): v for k, v in (adapter_kwargs or {}).items()}
    adapters = [
        ProviderFactory.create(family, name=name, **dict(extra.get(name, {})))
        for name, family in routing_config.routes.items()
    ]
    registry = ProviderRegistry(adapters)
    log_event(
        get_logger("aichat.factory"),
        "registry.built",
        routes=dict(routing_config.routes),
        default_provider=routing_config.default_provider,
        fallback_provider=routing_config.fallback_provider,
    )
    return registry


def build_orchestrator(routing_config=None, registry: Optional[ProviderRegistry] = None) -> ChatOrchestrator:
    """Wire registry and routing settings into a :class:`ChatOrchestrator`."""
    if routing_config is None:
        from ..config import get_routing_config

        routing_config = get_routing_config()
    if registry is None:
        registry = build_registry(routing_config)
    return ChatOrchestrator.from_config(registry, routing_config)


__all__ = [
    "ProviderFactory",
    "UnknownProviderError",
    "build_registry",
    "build_orchestrator",
]
