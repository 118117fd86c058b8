# src/zcode_stage/main.py
"""Main entry point for the Z-Code application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from zcode_stage.api.v1 import (
    auth_router,
    channel_router,
    messages_router,
    moderation_router,
    tales_router,
    users_router,
)
from zcode_stage.core.errors import ZCodeError
from zcode_stage.core.settings import Settings
from zcode_stage.core.settings import settings as default_settings
from zcode_stage.state import AppState

logger = logging.getLogger(__name__)


async def zcode_error_handler(request: Request, exc: ZCodeError) -> JSONResponse:
    """Render a domain error with the same body shape as ``HTTPException``."""
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


def _configure_logging(level: str) -> None:
    package_logger = logging.getLogger("zcode_stage")
    package_logger.setLevel(level.upper())
    if not logging.getLogger().handlers and not package_logger.handlers:
        logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application with its own, empty in-memory stores.

    Args:
        settings: Configuration to use; defaults to the environment-derived settings

    Returns:
        A configured FastAPI application
    """
    settings = settings or default_settings
    _configure_logging(settings.log_level)

    app = FastAPI(
        title="Z-Code API",
        description="Moderated tales feed with real-time direct messaging",
        version=settings.app_version,
        debug=settings.debug,
    )
    app.state.zcode = AppState(settings=settings)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    # Add GZip middleware for compression
    app.add_middleware(GZipMiddleware)

    app.add_exception_handler(ZCodeError, zcode_error_handler)  # type: ignore[arg-type]

    # Include API routers
    prefix = settings.api_prefix
    app.include_router(auth_router, prefix=prefix)
    app.include_router(tales_router, prefix=prefix)
    app.include_router(moderation_router, prefix=prefix)
    app.include_router(users_router, prefix=prefix)
    app.include_router(messages_router, prefix=prefix)
    app.include_router(channel_router, prefix=prefix)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint to verify the service is running."""
        return {"status": "ok"}

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint with basic information about the API."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "description": "Moderated tales feed with real-time direct messaging",
            "docs": "/docs",
            "channel": f"{prefix}/ws",
        }

    logger.info("%s %s ready", settings.app_name, settings.app_version)
    return app


# Default app instance for uvicorn
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("zcode_stage.main:app", host="0.0.0.0", port=8000, reload=default_settings.debug)
