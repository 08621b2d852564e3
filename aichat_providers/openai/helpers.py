"""OpenAI chat-completions helpers.

Pure functions shared by :mod:`aichat_providers.openai.client`: request
message shaping and text extraction from SDK response objects.
"""

from __future__ import annotations

from typing import Any, Dict, List

from ..base.errors import ErrorCode, ProviderError


def build_messages(message: str, system_prompt: str) -> List[Dict[str, str]]:
    """Return the two-message conversation (system persona, then user turn)."""
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": message},
    ]


def extract_text(resp: Any, *, provider_name: str, model: str) -> str:
    """Return ``choices[0].message.content`` from a chat completion.

    Raises:
        ProviderError: ``MALFORMED_RESPONSE`` when the completion has no
            choices or the first choice carries no string content.
    """
    choices = getattr(resp, "choices", None) or []
    message = getattr(choices[0], "message", None) if choices else None
    content = getattr(message, "content", None)
    if not isinstance(content, str):
        raise ProviderError(
            code=ErrorCode.MALFORMED_RESPONSE,
            message="chat completion carried no text content",
            provider=provider_name,
            model=model,
        )
    return content


__all__ = ["build_messages", "extract_text"]
