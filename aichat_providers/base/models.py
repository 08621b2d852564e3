"""
Provider-agnostic domain models (DTOs) public surface.

This module re-exports the one-class-per-file implementations under
``aichat_providers.base.models_parts``.
"""

from .models_parts.chat_request import ChatRequest
from .models_parts.chat_response import ChatResponse
from .models_parts.provider_outcome import ProviderOutcome

__all__ = [
    "ChatRequest",
    "ChatResponse",
    "ProviderOutcome",
]
