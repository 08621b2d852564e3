"""One-class-per-file DTO implementations re-exported by ``base.models``."""

from .chat_request import ChatRequest
from .chat_response import ChatResponse
from .provider_outcome import ProviderOutcome

__all__ = ["ChatRequest", "ChatResponse", "ProviderOutcome"]
