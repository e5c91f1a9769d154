from __future__ import annotations

import os

import uvicorn

from genai_failover.config.defaults import SERVICE_DEFAULT_HOST, SERVICE_DEFAULT_PORT


def _parse_port(value: str | None, default: int) -> int:
    """Best-effort parse of a port from string, falling back to a sane default."""
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def main() -> None:
    """Start the development server for the generation FastAPI app.

    - GENAI_SERVICE_HOST: interface to bind (default "127.0.0.1")
    - GENAI_SERVICE_PORT: port to bind (default 8787)
    - GENAI_SERVICE_RELOAD: "true" enables auto-reload (default off)
    """
    host = os.getenv("GENAI_SERVICE_HOST", SERVICE_DEFAULT_HOST)
    port = _parse_port(os.getenv("GENAI_SERVICE_PORT"), SERVICE_DEFAULT_PORT)
    reload_enabled = os.getenv("GENAI_SERVICE_RELOAD", "false").lower() == "true"
    uvicorn.run(
        "genai_failover.service.app:app",
        host=host,
        port=port,
        reload=reload_enabled,
    )


if __name__ == "__main__":
    main()
