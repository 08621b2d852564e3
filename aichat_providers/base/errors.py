"""Unified error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``aichat_providers.base.errors_parts`` to keep a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.routing_error import RoutingError, RoutingErrorKind
from .errors_parts.classification import classify_exception, wrap_exception

__all__ = [
    "ErrorCode",
    "ProviderError",
    "RoutingError",
    "RoutingErrorKind",
    "classify_exception",
    "wrap_exception",
]
