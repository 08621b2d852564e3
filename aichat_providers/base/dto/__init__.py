"""DTO validation package for the HTTP edge."""

from .chat import ChatBodyDTO

__all__ = ["ChatBodyDTO"]
