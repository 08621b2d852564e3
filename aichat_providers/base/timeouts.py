"""Unified timeout configuration for adapter invocations.

Every outbound adapter call is bounded by the values here: the ``httpx``
clients used by the local runtime adapter and the ``timeout=`` argument passed
to vendor SDK clients both derive from :func:`get_timeout_config`. Adapters
never introduce ad-hoc numeric timeouts of their own.

Environment overrides (optional, positive floats):
    AICHAT_TIMEOUT_HTTP_SECONDS     total budget for one backend call (default 30)
    AICHAT_TIMEOUT_CONNECT_SECONDS  connection establishment (default 5)

The parsed configuration is cached per process and recomputed only when the
environment values change, which keeps tests that monkeypatch the env simple.
"""
from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Optional

import httpx


@dataclass(frozen=True)
class TimeoutConfig:
    """Normalized timeout values in seconds.

    Attributes:
        http_timeout_seconds: Upper bound for a single non-streaming backend
            call (read/write/pool phases).
        connect_timeout_seconds: Upper bound for establishing the connection.
    """

    http_timeout_seconds: float = 30.0
    connect_timeout_seconds: float = 5.0

    def as_httpx_timeout(self) -> httpx.Timeout:
        """Return an ``httpx.Timeout`` built from this configuration."""
        return httpx.Timeout(self.http_timeout_seconds, connect=self.connect_timeout_seconds)


_CACHED: Optional[TimeoutConfig] = None
_ENV_GUARD: Optional[str] = None


def _parse_env_float(name: str, default: float) -> float:
    """Parse a positive float from the environment, else return ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig`."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(
        [
            os.getenv("AICHAT_TIMEOUT_HTTP_SECONDS", ""),
            os.getenv("AICHAT_TIMEOUT_CONNECT_SECONDS", ""),
        ]
    )
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    _CACHED = TimeoutConfig(
        http_timeout_seconds=_parse_env_float("AICHAT_TIMEOUT_HTTP_SECONDS", 30.0),
        connect_timeout_seconds=_parse_env_float("AICHAT_TIMEOUT_CONNECT_SECONDS", 5.0),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = [
    "TimeoutConfig",
    "get_timeout_config",
]
