"""Read-only, case-insensitive registry of chat adapters.

The registry is built once at startup from a fixed set of adapters and never
changes afterwards, so it can be shared across concurrent requests without
locking. Lookup is an exact match on the upper-cased provider name; there is
no partial or fuzzy matching.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Optional, Tuple

from ..interfaces import ChatProvider
from ..utils.prompts import normalize_provider_name


class ProviderRegistry:
    """Immutable name -> adapter mapping.

    Example usage:
        registry = ProviderRegistry([OllamaProvider(name="PRIMARY"), OpenAIProvider()])
        registry.get("primary")   # -> the Ollama adapter
        registry.get("gemini")    # -> None
    """

    def __init__(self, providers: Iterable[ChatProvider] = ()) -> None:
        """Build the registry.

        Raises
        ------
        ValueError
            When two adapters share a name case-insensitively, or an adapter
            reports an empty name.
        """
        entries: Dict[str, ChatProvider] = {}
        for provider in providers:
            key = normalize_provider_name(provider.provider_name)
            if not key:
                raise ValueError(f"Provider {provider!r} reports an empty name")
            if key in entries:
                raise ValueError(f"Duplicate provider name '{key}'")
            entries[key] = provider
        self._providers = MappingProxyType(entries)

    def get(self, name: Optional[str]) -> Optional[ChatProvider]:
        """Return the adapter registered under ``name`` (case-insensitive)."""
        return self._providers.get(normalize_provider_name(name))

    def names(self) -> Tuple[str, ...]:
        """Return registered names in registration order."""
        return tuple(self._providers)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize_provider_name(name) in self._providers

    def __iter__(self) -> Iterator[ChatProvider]:
        return iter(self._providers.values())

    def __len__(self) -> int:
        return len(self._providers)

    def __repr__(self) -> str:
        return f"ProviderRegistry({list(self._providers)})"


__all__ = ["ProviderRegistry"]
