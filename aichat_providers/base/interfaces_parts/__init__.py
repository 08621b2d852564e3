"""Protocol definitions re-exported by ``base.interfaces``."""

from .chat_provider import ChatProvider

__all__ = ["ChatProvider"]
