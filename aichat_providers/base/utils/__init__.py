"""Small helpers shared by adapters."""

from .prompts import normalize_provider_name, resolve_system_prompt
from .outcomes import error_outcome, success_outcome

__all__ = [
    "normalize_provider_name",
    "resolve_system_prompt",
    "error_outcome",
    "success_outcome",
]
