"""aichat_providers.config.defaults
================================

Central place for small, stable default values used across the package and
the service layer. Every value can be overridden via environment variables or
the optional external config file (see ``aichat_providers.config``).

This module intentionally imports nothing from other package modules to
prevent circular dependencies. Only plain constants live here.
"""

from __future__ import annotations

# ---- Service / HTTP layer ----

# Comma-separated list of allowed origins for the FastAPI app.
SERVICE_CORS_DEFAULT_ORIGINS = "http://localhost:4200,http://localhost:3000,http://localhost:5173"
SERVICE_DEFAULT_HOST = "127.0.0.1"
SERVICE_DEFAULT_PORT = 8080


# ---- Routing ----
# Provider used when a request carries no override.
ROUTING_DEFAULT_PROVIDER = "PRIMARY"
# The single provider retried when the primary invocation fails.
ROUTING_FALLBACK_PROVIDER = "OPENAI"
# Route name -> adapter family. PRIMARY is the local runtime.
ROUTING_DEFAULT_ROUTES = {
    "PRIMARY": "ollama",
    "OPENAI": "openai",
    "ANTHROPIC": "anthropic",
}


# ---- Provider-specific sane defaults ----
OPENAI_DEFAULT_MODEL = "gpt-4o-mini"
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"

ANTHROPIC_DEFAULT_MODEL = "claude-3-5-sonnet-latest"
ANTHROPIC_DEFAULT_MAX_TOKENS = 1024

# Ollama (local daemon) defaults
OLLAMA_DEFAULT_MODEL = "llama3"
OLLAMA_DEFAULT_HOST = "http://localhost:11434"


__all__ = [
    # Service
    "SERVICE_CORS_DEFAULT_ORIGINS",
    "SERVICE_DEFAULT_HOST",
    "SERVICE_DEFAULT_PORT",
    # Routing
    "ROUTING_DEFAULT_PROVIDER",
    "ROUTING_FALLBACK_PROVIDER",
    "ROUTING_DEFAULT_ROUTES",
    # Provider defaults
    "OPENAI_DEFAULT_MODEL",
    "OPENAI_DEFAULT_BASE_URL",
    "ANTHROPIC_DEFAULT_MODEL",
    "ANTHROPIC_DEFAULT_MAX_TOKENS",
    "OLLAMA_DEFAULT_MODEL",
    "OLLAMA_DEFAULT_HOST",
]
