"""
ChatRequest DTO for provider-agnostic chat invocations.

The request carries the user message, an optional session identifier (kept
for wire compatibility, unused by routing), an optional system prompt and an
optional provider override that takes precedence over the configured default.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ChatRequest:
    """Normalized chat request handed to the orchestrator.

    Attributes:
        message: User input message. Validated as non-empty at the HTTP edge.
        session_id: Optional client session identifier. Not used by routing.
        system_prompt: Optional persona prompt; adapters substitute the
            default trading-assistant persona when absent.
        provider_override: Optional provider name overriding the configured
            default for this request only.
    """

    message: str
    session_id: Optional[str] = None
    system_prompt: Optional[str] = None
    provider_override: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary in the wire field naming."""
        return {
            "message": self.message,
            "sessionId": self.session_id,
            "systemPrompt": self.system_prompt,
            "model": self.provider_override,
        }


__all__ = [
    "ChatRequest",
]
