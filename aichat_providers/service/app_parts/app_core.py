from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.responses import JSONResponse

from aichat_providers.base.constants import EMPTY_MESSAGE_RESPONSE, GENERIC_ERROR_RESPONSE
from aichat_providers.base.dto import ChatBodyDTO
from aichat_providers.base.errors import ProviderError, RoutingError
from aichat_providers.base.logging import LogContext, get_logger, normalized_log_event
from aichat_providers.base.routing import ChatOrchestrator

_logger = get_logger("aichat.service")


def get_orchestrator(request: Request) -> ChatOrchestrator:
    """FastAPI dependency returning the orchestrator bound to the app."""
    return request.app.state.orchestrator


def _chat_payload(text: str) -> Dict[str, Any]:
    return {"response": text}


def _error_code_of(exc: Exception) -> str:
    """Return the taxonomy label used in ``http.chat.error`` events."""
    if isinstance(exc, RoutingError):
        return exc.kind.value
    if isinstance(exc, ProviderError):
        return exc.code.value
    return "internal"


def _build_providers_response(orchestrator: ChatOrchestrator) -> Dict[str, Any]:
    """Return the providers endpoint payload from the live registry."""
    return {
        "ok": True,
        "providers": list(orchestrator.registry.names()),
        "default": orchestrator.default_provider,
        "fallback": orchestrator.fallback_provider,
    }


def _handle_chat(orchestrator: ChatOrchestrator, body: ChatBodyDTO, *, method: str) -> JSONResponse:
    """Validate, route and shape one chat exchange.

    Blank messages answer 400 without touching the orchestrator. Routing and
    provider failures answer 500 with a fixed body; details go to the log only.
    """
    ctx = LogContext(extra={"method": method})
    if not body.has_message():
        normalized_log_event(
            _logger,
            "http.chat.rejected",
            ctx,
            phase="validate",
            error_code="validation",
        )
        return JSONResponse(status_code=400, content=_chat_payload(EMPTY_MESSAGE_RESPONSE))

    request = body.to_request()
    normalized_log_event(
        _logger,
        "http.chat.start",
        ctx,
        phase="start",
        override=request.provider_override,
        session_id=request.session_id,
    )
    try:
        response = orchestrator.chat(request)
    except Exception as exc:
        normalized_log_event(
            _logger,
            "http.chat.error",
            ctx,
            phase="finalize",
            level=logging.ERROR,
            error_code=_error_code_of(exc),
            emitted=False,
            error=str(exc),
            exception=exc.__class__.__name__,
        )
        return JSONResponse(status_code=500, content=_chat_payload(GENERIC_ERROR_RESPONSE))

    normalized_log_event(_logger, "http.chat.end", ctx, phase="finalize", emitted=True)
    return JSONResponse(status_code=200, content=response.to_dict())


def _chat_from_query(message: Optional[str], model: Optional[str]) -> ChatBodyDTO:
    """Build the DTO for ``GET /api/chat`` query parameters."""
    return ChatBodyDTO(message=message, model=model)


__all__ = [
    "get_orchestrator",
    "_build_providers_response",
    "_chat_from_query",
    "_handle_chat",
]
