"""
Pydantic DTOs for inbound chat requests at the HTTP edge.

Purpose
-------
Validate the JSON body of ``POST /api/chat`` before anything reaches the
orchestrator. Field aliases follow the web client's camelCase wire names
(``sessionId``, ``systemPrompt``); Python attribute names stay snake_case.

External dependencies: Pydantic only (no network calls). No timeouts.

Fallback semantics: Not applicable. Validation either succeeds or raises a
``pydantic.ValidationError``. Blank messages are *not* rejected here: the
handler answers them with the fixed 400 body instead of a validation report.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models import ChatRequest


class ChatBodyDTO(BaseModel):
    """JSON body accepted by ``POST /api/chat``.

    Attributes:
        message: User text. May arrive blank; the handler turns that into 400.
        model: Provider override name (e.g. ``"OPENAI"``), not a model id.
        session_id: Accepted for client compatibility; unused by the core.
        system_prompt: Optional persona override; blank means default.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    message: Optional[str] = None
    model: Optional[str] = None
    session_id: Optional[str] = Field(default=None, alias="sessionId")
    system_prompt: Optional[str] = Field(default=None, alias="systemPrompt")

    def has_message(self) -> bool:
        """Return True when ``message`` contains non-whitespace text."""
        return bool(self.message and self.message.strip())

    def to_request(self) -> ChatRequest:
        """Convert to the core :class:`ChatRequest`.

        Raises:
            ValueError: When the message is blank.
        """
        if not self.has_message():
            raise ValueError("message must be non-empty")
        return ChatRequest(
            message=self.message,  # type: ignore[arg-type]
            session_id=self.session_id,
            system_prompt=self.system_prompt,
            provider_override=self.model,
        )


__all__ = ["ChatBodyDTO"]
