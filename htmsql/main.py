"""FastAPI application entry point."""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.trustedhost import TrustedHostMiddleware

from htmsql import __version__
from htmsql.api.health import router as health_router
from htmsql.api.pages import router as pages_router
from htmsql.api.query import router as query_router
from htmsql.config import Settings
from htmsql.exceptions import BootstrapError, StoreError
from htmsql.runtime import SiteRuntime

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger(__name__)


def _configure_logging(debug: bool) -> None:
    """Configure application logging."""
    level = logging.DEBUG if debug else logging.INFO
    fmt = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
    logging.basicConfig(
        level=level,
        format=fmt,
        stream=sys.stdout,
        force=True,
    )
    # Quiet noisy libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if debug else logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan: startup and shutdown."""
    settings: Settings = app.state.settings
    settings.validate_runtime()
    _configure_logging(settings.debug)
    logger.info("Starting HTMSQL site (debug=%s)", settings.debug)

    runtime: SiteRuntime = app.state.runtime
    # A failed bootstrap is kept on the runtime; pages then show the error.
    await runtime.start()
    if runtime.report is not None:
        for name, result in runtime.report.steps:
            logger.info("Startup step %s: %s", name, result.value)

    yield

    try:
        await runtime.close()
    except Exception as exc:
        logger.error("Error during content store shutdown: %s", exc, exc_info=True)

    logger.info("HTMSQL site stopped")


def create_app(settings: Settings | None = None, runtime: SiteRuntime | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = runtime.settings if runtime is not None else Settings()

    app = FastAPI(
        title="HTMSQL",
        description="HTML + SQL marketing site rendered from a SQLite content store",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
    )
    app.state.settings = settings
    app.state.runtime = runtime if runtime is not None else SiteRuntime(settings)

    app.add_middleware(GZipMiddleware, minimum_size=500)

    trusted_hosts = settings.trusted_hosts or (
        ["localhost", "127.0.0.1", "::1", "test", "testserver"] if settings.debug else []
    )
    if trusted_hosts:
        app.add_middleware(TrustedHostMiddleware, allowed_hosts=trusted_hosts)

    app.include_router(health_router)
    if settings.query_api_enabled or settings.debug:
        app.include_router(query_router)
    app.include_router(pages_router)

    # Global exception handlers

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = []
        for err in exc.errors():
            loc = err.get("loc", ())
            field = str(loc[-1]) if loc else "unknown"
            errors.append({"field": field, "message": err.get("msg", "Invalid value")})
        logger.warning(
            "RequestValidationError in %s %s: %s",
            request.method,
            request.url.path,
            errors,
        )
        return JSONResponse(status_code=422, content={"detail": errors})

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
        logger.warning("StoreError in %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(BootstrapError)
    async def bootstrap_error_handler(request: Request, exc: BootstrapError) -> JSONResponse:
        logger.error("BootstrapError in %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=503,
            content={"detail": "Content store unavailable"},
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        logger.error("ValueError in %s %s: %s", request.method, request.url.path, exc, exc_info=exc)
        message = str(exc) or "Invalid value"
        return JSONResponse(
            status_code=422,
            content={"detail": message},
        )

    return app


app = create_app()


def cli_entry() -> None:
    """CLI entry point for running the server."""
    import uvicorn

    settings: Settings = app.state.settings
    uvicorn.run(
        "htmsql.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
