"""aichat_providers.config.env
===========================

Mapping from adapter families to the environment variables holding their
credentials, plus small lookup helpers.

Failure Modes
-------------
Helpers never raise on unknown families or unset variables; they return
``None`` and let the caller decide (adapters report a missing key as an
``AUTH`` provider error at invocation time).
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

# Canonical family -> env var mapping. The local runtime needs no key.
ENV_MAP: Dict[str, str] = {
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
}


# Family -> ordered tuple of acceptable env var names (canonical first)
ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "anthropic": ("ANTHROPIC_API_KEY", "CLAUDE_API_KEY"),
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the value looks like a placeholder rather than a credential.

    Heuristics (case-insensitive): contains 'placeholder', 'changeme',
    'example', or starts with 'test_'.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "example" in v
        or v.startswith("test_")
    )


def get_env_var_candidates(family: str) -> Iterable[str]:
    """Yield acceptable environment variable names, canonical first."""
    f = (family or "").lower()
    canonical = ENV_MAP.get(f)
    if canonical:
        yield canonical
    for alias in ENV_ALIASES.get(f, ()):
        if alias != canonical:
            yield alias


def resolve_provider_key(family: str) -> Tuple[Optional[str], Optional[str]]:
    """Resolve an API key from the process environment.

    Returns ``(value, env_var_used)`` for the first candidate holding a
    non-empty, non-placeholder value; ``(None, None)`` when nothing is set.
    """
    for name in get_env_var_candidates(family):
        val = os.environ.get(name)
        if val and not is_placeholder(val):
            return val, name
    return None, None


__all__ = [
    "ENV_MAP",
    "ENV_ALIASES",
    "is_placeholder",
    "get_env_var_candidates",
    "resolve_provider_key",
]
