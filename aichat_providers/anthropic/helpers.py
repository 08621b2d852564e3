"""Anthropic helpers module.

Purpose:
- Side-effect-free utilities for the Anthropic adapter: Messages API
  parameter building and text extraction from SDK response objects.

External dependencies:
- None directly; response objects are read by attribute so SDK models and
  simple test stubs behave the same.
"""

from __future__ import annotations

from typing import Any, Dict

from ..base.errors import ErrorCode, ProviderError


def build_params(*, model: str, max_tokens: int, message: str, system_prompt: str) -> Dict[str, Any]:
    """Build keyword arguments for ``client.messages.create``.

    The persona prompt travels in the top-level ``system`` field; the
    conversation holds the single user turn.
    """
    return {
        "model": model,
        "max_tokens": max_tokens,
        "system": system_prompt,
        "messages": [{"role": "user", "content": message}],
    }


def extract_text(resp: Any, *, provider_name: str, model: str) -> str:
    """Join the ``text`` blocks of a Messages API response with newlines.

    Raises:
        ProviderError: ``MALFORMED_RESPONSE`` when the response carries no
            text block at all.
    """
    parts = [
        getattr(block, "text", None)
        for block in (getattr(resp, "content", None) or [])
        if getattr(block, "type", None) == "text"
    ]
    parts = [p for p in parts if isinstance(p, str)]
    if not parts:
        raise ProviderError(
            code=ErrorCode.MALFORMED_RESPONSE,
            message="Anthropic response contained no text blocks",
            provider=provider_name,
            model=model,
        )
    return "\n".join(parts)


__all__ = ["build_params", "extract_text"]
