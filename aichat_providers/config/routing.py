"""Routing configuration: default provider, fallback provider, route table.

Sources (later wins): ``config.defaults`` -> ``routing`` section of the
external config file -> environment:

    AICHAT_DEFAULT_PROVIDER   name used when a request has no override
    AICHAT_FALLBACK_PROVIDER  the single provider retried on primary failure
    AICHAT_PROVIDERS          route table, ``NAME=family`` pairs separated by
                              commas, e.g. ``PRIMARY=ollama,OPENAI=openai``

Names are upper-cased; families are lower-cased.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .defaults import (
    ROUTING_DEFAULT_PROVIDER,
    ROUTING_DEFAULT_ROUTES,
    ROUTING_FALLBACK_PROVIDER,
)


@dataclass(frozen=True)
class RoutingConfig:
    """Immutable routing settings consumed by the orchestrator and factory.

    Attributes:
        default_provider: Provider name used when no override is given.
        fallback_provider: The fixed secondary provider name.
        routes: Provider name -> adapter family used to build the registry.
    """

    default_provider: str = ROUTING_DEFAULT_PROVIDER
    fallback_provider: str = ROUTING_FALLBACK_PROVIDER
    routes: Mapping[str, str] = field(default_factory=lambda: dict(ROUTING_DEFAULT_ROUTES))

    def __post_init__(self) -> None:
        object.__setattr__(self, "default_provider", self.default_provider.strip().upper())
        object.__setattr__(self, "fallback_provider", self.fallback_provider.strip().upper())
        raw = dict(self.routes)
        routes = {k.strip().upper(): v.strip().lower() for k, v in raw.items()}
        if len(routes) != len(raw):
            raise ValueError(f"Route names must be unique case-insensitively: {sorted(raw)}")
        object.__setattr__(self, "routes", routes)


def parse_routes(raw: str) -> Dict[str, str]:
    """Parse ``NAME=family`` pairs into a route table.

    Raises ``ValueError`` on entries without ``=`` or with an empty side, and
    on names repeated case-insensitively.
    """
    routes: Dict[str, str] = {}
    for chunk in raw.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        name, sep, family = chunk.partition("=")
        name, family = name.strip().upper(), family.strip().lower()
        if not sep or not name or not family:
            raise ValueError(f"Invalid route entry '{chunk}'; expected NAME=family")
        if name in routes:
            raise ValueError(f"Duplicate route name '{name}'")
        routes[name] = family
    return routes


def get_routing_config(file_cfg: Optional[Mapping[str, Any]] = None) -> RoutingConfig:
    """Return the merged :class:`RoutingConfig`.

    Parameters:
        file_cfg: Parsed external config; defaults to ``load_external_config()``.
    """
    from . import _load_dotenv_once, load_external_config

    _load_dotenv_once()
    if file_cfg is None:
        file_cfg = load_external_config()
    section = file_cfg.get("routing") if isinstance(file_cfg, Mapping) else None
    section = section if isinstance(section, Mapping) else {}

    default_provider = str(section.get("default_provider") or ROUTING_DEFAULT_PROVIDER)
    fallback_provider = str(section.get("fallback_provider") or ROUTING_FALLBACK_PROVIDER)
    routes: Dict[str, str] = dict(ROUTING_DEFAULT_ROUTES)
    if isinstance(section.get("providers"), Mapping):
        routes = {str(k): str(v) for k, v in section["providers"].items()}

    default_provider = os.getenv("AICHAT_DEFAULT_PROVIDER") or default_provider
    fallback_provider = os.getenv("AICHAT_FALLBACK_PROVIDER") or fallback_provider
    if raw_routes := os.getenv("AICHAT_PROVIDERS"):
        routes = parse_routes(raw_routes)

    return RoutingConfig(
        default_provider=default_provider,
        fallback_provider=fallback_provider,
        routes=routes,
    )


__all__ = ["RoutingConfig", "get_routing_config", "parse_routes"]
