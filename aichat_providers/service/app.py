from __future__ import annotations

import os
from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from aichat_providers.base.dto import ChatBodyDTO
from aichat_providers.base.factory import build_orchestrator
from aichat_providers.base.routing import ChatOrchestrator
from aichat_providers.config.defaults import SERVICE_CORS_DEFAULT_ORIGINS

from .app_parts.app_core import (
    _build_providers_response,
    _chat_from_query,
    _handle_chat,
    get_orchestrator,
)


def _cors_origins() -> list[str]:
    raw = os.getenv("AICHAT_CORS_ORIGINS", SERVICE_CORS_DEFAULT_ORIGINS)
    return [o.strip() for o in raw.split(",") if o.strip()]


def create_app(orchestrator: Optional[ChatOrchestrator] = None) -> FastAPI:
    """Build the chat service.

    The orchestrator (and with it the provider registry) is created once here
    and shared by all requests. Tests pass a pre-built orchestrator wired to
    mock adapters.
    """
    app = FastAPI(title="AI Chat Service", version="0.1.0")
    app.state.orchestrator = orchestrator or build_orchestrator()

    # -----------------------------------------------------------------------
    # CORS configuration
    # -----------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -----------------------------------------------------------------------
    # Health and provider listing
    # -----------------------------------------------------------------------

    @app.get("/api/health")
    def health() -> Dict[str, Any]:
        """Check the health status of the service."""
        return {"ok": True}

    @app.get("/api/providers")
    def get_providers(orch: ChatOrchestrator = Depends(get_orchestrator)) -> Dict[str, Any]:
        """List registered provider names with the default and fallback."""
        return _build_providers_response(orch)

    # -----------------------------------------------------------------------
    # Chat endpoints
    # -----------------------------------------------------------------------

    @app.get("/api/chat")
    def get_chat(
        message: Optional[str] = None,
        model: Optional[str] = None,
        orch: ChatOrchestrator = Depends(get_orchestrator),
    ) -> JSONResponse:
        """Quick query-string chat: ``/api/chat?message=...&model=OPENAI``."""
        return _handle_chat(orch, _chat_from_query(message, model), method="GET")

    @app.post("/api/chat")
    def post_chat(body: ChatBodyDTO, orch: ChatOrchestrator = Depends(get_orchestrator)) -> JSONResponse:
        """Route a chat message and return ``{"response": text}``.

        ``model`` selects the provider for this request; ``systemPrompt``
        replaces the default persona.
        """
        return _handle_chat(orch, body, method="POST")

    return app


app = create_app()
