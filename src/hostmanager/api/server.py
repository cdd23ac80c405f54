"""
ASGI Entry Point for the Host Manager API.

This module exposes the `app` object required by ASGI servers (Uvicorn/Gunicorn).
It loads environment variables from `.env` before the application factory
reads its settings.

Usage
-----
Run via the module entry point:
    $ python -m hostmanager.api.server

Or via uvicorn directly:
    $ uvicorn hostmanager.api.server:app
"""

from __future__ import annotations

from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from hostmanager.api.app import create_app
from hostmanager.core.settings import load_settings

load_dotenv(dotenv_path=Path(".env"))

app = create_app()


def main(host: str | None = None, port: int | None = None) -> None:
    """Serve the API with uvicorn on the configured address."""
    settings = load_settings()
    uvicorn.run(
        "hostmanager.api.server:app",
        host=host or settings.http_host,
        port=port or settings.http_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
