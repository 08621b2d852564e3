"""
Provider-agnostic interfaces (Protocols) for the providers layer.

Re-exports Protocols split into single-class modules under
``aichat_providers.base.interfaces_parts`` to keep imports stable.
"""

from __future__ import annotations

from .interfaces_parts import ChatProvider

__all__ = [
    "ChatProvider",
]
