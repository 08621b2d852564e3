"""Ollama helpers module.

Purpose:
- Side-effect-free payload construction and response parsing for the Ollama
  adapter, kept apart from ``client.py`` so they can be unit tested without
  a transport.

Wire format (``POST /api/generate``, non-streaming)::

    request:  {"model": str, "prompt": str, "system": str, "stream": false}
    response: {"model": str, "response": str, "done": true, ...}
"""

from __future__ import annotations

from typing import Any, Dict

from ..base.errors import ErrorCode, ProviderError

GENERATE_PATH = "/api/generate"


def build_payload(*, model: str, message: str, system_prompt: str) -> Dict[str, Any]:
    """Construct the JSON payload for Ollama's ``/api/generate`` endpoint."""
    return {
        "model": model,
        "prompt": message,
        "system": system_prompt,
        "stream": False,
    }


def extract_text(data: Any, *, provider_name: str, model: str) -> str:
    """Return the generated text from a decoded ``/api/generate`` body.

    Raises:
        ProviderError: ``MALFORMED_RESPONSE`` when the body is not an object
            or lacks a string ``response`` field; ``SERVER_ERROR`` when the
            daemon reports an ``error`` field instead.
    """
    if isinstance(data, dict) and isinstance(data.get("error"), str):
        raise ProviderError(
            code=ErrorCode.SERVER_ERROR,
            message=data["error"],
            provider=provider_name,
            model=model,
        )
    text = data.get("response") if isinstance(data, dict) else None
    if not isinstance(text, str):
        raise ProviderError(
            code=ErrorCode.MALFORMED_RESPONSE,
            message="Ollama response is missing a 'response' string",
            provider=provider_name,
            model=model,
        )
    return text


__all__ = ["GENERATE_PATH", "build_payload", "extract_text"]
