"""
OpenAI provider package.

Exports:
- OpenAIProvider: chat-completions adapter returning ProviderOutcome values
"""

from .client import OpenAIProvider

__all__ = ["OpenAIProvider"]
