"""Structured logging context carried through routing and adapter events."""
from __future__ import annotations

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Common fields attached to every event of one request or invocation."""

    provider: Optional[str] = None
    model: Optional[str] = None
    request_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}

    def with_provider(self, provider: str, model: Optional[str] = None) -> "LogContext":
        """Return a copy bound to another provider (and optionally model)."""
        return LogContext(
            provider=provider,
            model=model if model is not None else self.model,
            request_id=self.request_id,
            extra=dict(self.extra),
        )


__all__ = ["LogContext"]
