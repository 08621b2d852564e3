"""Prompt and name normalization helpers shared across adapters.

Helpers here must be side-effect free so that adapters stay reentrant.
"""
from __future__ import annotations

from typing import Optional

from ..constants import DEFAULT_SYSTEM_PROMPT


def resolve_system_prompt(system_prompt: Optional[str]) -> str:
    """Return ``system_prompt`` verbatim, or the default persona when absent.

    A prompt that is ``None``, empty, or whitespace-only counts as absent.
    Any other value is returned unmodified (no stripping).
    """
    if system_prompt is None or not system_prompt.strip():
        return DEFAULT_SYSTEM_PROMPT
    return system_prompt


def normalize_provider_name(name: Optional[str]) -> str:
    """Return the routing key for a provider name (trimmed, upper-cased)."""
    return (name or "").strip().upper()


__all__ = ["resolve_system_prompt", "normalize_provider_name"]
