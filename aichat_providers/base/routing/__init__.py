"""Provider routing: registry lookup plus single-hop fallback orchestration."""

from .registry import ProviderRegistry
from .orchestrator import ChatOrchestrator

__all__ = ["ProviderRegistry", "ChatOrchestrator"]
