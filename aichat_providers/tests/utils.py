"""Test doubles shared across the suite."""

from __future__ import annotations

from typing import List, Optional, Tuple

from aichat_providers.base.errors import ErrorCode, ProviderError
from aichat_providers.base.models import ProviderOutcome


class RecordingProvider:
    """Adapter double that records raw ``invoke`` arguments.

    Unlike ``MockProvider`` it does not resolve the system prompt, so tests
    can assert exactly what the orchestrator handed over.
    """

    def __init__(
        self,
        name: str,
        *,
        text: Optional[str] = None,
        error_code: Optional[ErrorCode] = None,
        raises: Optional[BaseException] = None,
    ) -> None:
        self._name = name.upper()
        self._text = text
        self._error_code = error_code
        self._raises = raises
        self.calls: List[Tuple[str, Optional[str]]] = []

    @property
    def provider_name(self) -> str:
        return self._name

    def invoke(self, message: str, system_prompt: Optional[str] = None) -> ProviderOutcome:
        self.calls.append((message, system_prompt))
        if self._raises is not None:
            raise self._raises
        if self._error_code is not None:
            return ProviderOutcome.failure(
                ProviderError(code=self._error_code, message=f"{self._name} failed", provider=self._name)
            )
        return ProviderOutcome.success(self._name, self._text or "")


def ok(name: str, text: str) -> RecordingProvider:
    return RecordingProvider(name, text=text)


def failing(name: str, code: ErrorCode = ErrorCode.UNAVAILABLE) -> RecordingProvider:
    return RecordingProvider(name, error_code=code)
