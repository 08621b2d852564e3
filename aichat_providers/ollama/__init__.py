"""Ollama (local runtime) adapter."""

from .client import OllamaProvider

__all__ = ["OllamaProvider"]
