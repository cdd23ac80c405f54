"""
FastAPI Application Factory & Configuration.

This module builds the HTTP gateway in front of the host manager. It is
responsible for:
1.  **Wiring**: Building the :class:`HostManagerService` from settings, or
    accepting one injected by tests.
2.  **Exception Handling**: Mapping :class:`ServiceError` categories to HTTP
    status codes, and catching everything else as a structured 500.
3.  **Routing**: Mounting the host router and the health probe.

Status mapping
--------------
``INVALID_ARGUMENT`` -> 400, ``INTERNAL`` -> 500. The body is always
``{"code": ..., "message": ..., "rollback_failed": ...}``.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from hostmanager import __version__
from hostmanager.api.routers import host
from hostmanager.api.schemas import ErrorResponse, HealthResponse
from hostmanager.api.service import HostManagerService, ServiceError, StatusCode
from hostmanager.core.settings import Settings, get_logger, load_settings
from hostmanager.services.manager import FileSystemHostManager, HostManager

_STATUS_BY_CODE: dict[StatusCode, int] = {
    StatusCode.INVALID_ARGUMENT: status.HTTP_400_BAD_REQUEST,
    StatusCode.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def create_app(
    settings: Settings | None = None,
    manager: HostManager | None = None,
    logger: logging.Logger | None = None,
) -> FastAPI:
    """
    Construct and configure the host manager FastAPI application.

    Parameters
    ----------
    settings:
        Configuration; defaults to :func:`load_settings`.
    manager:
        Host manager to serve. Built from ``settings`` when omitted.
    logger:
        Logger threaded into every component; built from ``settings`` when
        omitted.
    """
    cfg = settings if settings is not None else load_settings()
    log = logger if logger is not None else get_logger("hostmanager", cfg)
    if manager is None:
        manager = FileSystemHostManager.from_settings(cfg, log)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        log.info(
            "Host manager API starting (hostname file %s, resolver file %s)",
            cfg.hostname_file,
            cfg.resolv_conf,
        )
        yield
        log.info("Host manager API stopped")

    app = FastAPI(
        title="Host Manager API",
        description="Hostname and DNS resolver management",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = cfg
    app.state.service = HostManagerService(manager, log.getChild("service"))

    # -----------------------------------------------------------------------
    # Exception Handlers
    # -----------------------------------------------------------------------
    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
        """Map service status categories to HTTP status codes."""
        payload = ErrorResponse(
            code=exc.code, message=exc.message, rollback_failed=exc.rollback_failed
        )
        return JSONResponse(
            status_code=_STATUS_BY_CODE[exc.code],
            content=payload.model_dump(mode="json"),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all so unexpected failures still return structured JSON."""
        log.exception("Unhandled error on %s", request.url.path)
        payload = ErrorResponse(code=StatusCode.INTERNAL, message=str(exc))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=payload.model_dump(mode="json"),
        )

    # -----------------------------------------------------------------------
    # Routes
    # -----------------------------------------------------------------------
    app.include_router(host.router)

    @app.get("/health", tags=["System"], response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        """Simple liveness probe."""
        return HealthResponse(status="ok", environment=cfg.environment, version=__version__)

    return app


__all__ = ["create_app"]
