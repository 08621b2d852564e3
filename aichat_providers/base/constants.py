"""Base shared constants for provider adapters and the routing layer.

Central location to avoid scattering magic strings across adapters.

# pragma: allowlist secret
"""
from __future__ import annotations

# Persona used by every adapter when a request carries no system prompt.
DEFAULT_SYSTEM_PROMPT = (
    "You are an AI Quantitative Trading Assistant. "
    "Be precise. Be analytical. Focus on risk management."
)

# Missing credential sentinel
MISSING_API_KEY_ERROR = "missing_api_key"  # pragma: allowlist secret - generic placeholder string, not a real secret

# User-facing messages at the HTTP edge. Backend details are never returned.
EMPTY_MESSAGE_RESPONSE = "Message cannot be empty."
GENERIC_ERROR_RESPONSE = "Error: Unable to process request at this time."

__all__ = [
    "DEFAULT_SYSTEM_PROMPT",
    "MISSING_API_KEY_ERROR",
    "EMPTY_MESSAGE_RESPONSE",
    "GENERIC_ERROR_RESPONSE",
]
