"""
ChatResponse DTO returned to callers of the orchestrator.

Only the generated text is exposed; which provider answered is an internal
detail surfaced through logs, not through the response value.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class ChatResponse:
    """Immutable chat reply.

    Attributes:
        text: Generated text, or a user-facing status message at the HTTP edge.
    """

    text: str

    def to_dict(self) -> Dict[str, str]:
        """Return the ``{"response": ...}`` payload used by the HTTP layer."""
        return {"response": self.text}


__all__ = [
    "ChatResponse",
]
