from __future__ import annotations

import os
import uvicorn

from aichat_providers.config.defaults import SERVICE_DEFAULT_HOST, SERVICE_DEFAULT_PORT


def _parse_port(value: str | None, default: int) -> int:
    """Best-effort parse of a port from string, falling back to a sane default."""
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def main() -> None:
    """Start the development server for the chat FastAPI app.

    Environment:

    - AICHAT_SERVICE_HOST: interface to bind (default "127.0.0.1")
    - AICHAT_SERVICE_PORT: port to bind (default 8080)
    - AICHAT_SERVICE_RELOAD: "true"/"false" to toggle auto-reload
      (default True for direct CLI usage).
    """
    host = os.getenv("AICHAT_SERVICE_HOST", SERVICE_DEFAULT_HOST)
    port = _parse_port(os.getenv("AICHAT_SERVICE_PORT"), SERVICE_DEFAULT_PORT)

    reload_env = os.getenv("AICHAT_SERVICE_RELOAD")
    reload_enabled = True if reload_env is None else reload_env.lower() == "true"

    uvicorn.run(
        "aichat_providers.service.app:app",
        host=host,
        port=port,
        reload=reload_enabled,
    )


if __name__ == "__main__":
    main()
