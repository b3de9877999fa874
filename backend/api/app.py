"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import asyncio
import logging
import os
import signal
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import Settings, get_settings
from shared.exceptions import InternalError, SecretsAPIError
from modules.secrets.routes import router as secrets_router

from .dependencies import ServiceContainer
from .models.errors import ErrorResponse, ValidationErrorResponse
from .routes import auth, health

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def fatal_exception_handler(loop: asyncio.AbstractEventLoop, context: dict[str, Any]) -> None:
    """
    Event loop exception handler for errors nothing else caught.

    The process may be in an inconsistent state, so it asks itself to shut
    down and relies on the supervisor to restart it.
    """
    exc = context.get("exception")
    logger.critical(
        "Unhandled exception in event loop: %s",
        context.get("message", "no message"),
        exc_info=exc,
    )
    os.kill(os.getpid(), signal.SIGTERM)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings: Settings = app.state.container.settings
    asyncio.get_running_loop().set_exception_handler(fatal_exception_handler)
    logger.info(
        "Starting %s on %s:%s (%s)",
        settings.app_name, settings.host, settings.port, settings.environment,
    )
    yield
    # Shutdown
    logger.info("Shutting down %s", settings.app_name)


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """Map domain exceptions to JSON error responses."""

    @app.exception_handler(SecretsAPIError)
    async def handle_app_error(request: Request, exc: SecretsAPIError) -> JSONResponse:
        body = exc.to_dict()
        if isinstance(exc, InternalError) and settings.is_production:
            body["message"] = INTERNAL_ERROR_MESSAGE
        return JSONResponse(status_code=exc.status_code, content=body)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        detail = [
            {"loc": [str(part) for part in error["loc"]], "msg": error["msg"]}
            for error in exc.errors()
        ]
        return JSONResponse(
            status_code=400,
            content=ValidationErrorResponse(detail=detail).model_dump(),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        message = INTERNAL_ERROR_MESSAGE if settings.is_production else str(exc)
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error="INTERNAL_ERROR", message=message).model_dump(),
        )


def create_app(
    settings: Optional[Settings] = None,
    container: Optional[ServiceContainer] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use (defaults to the environment)
        container: Pre-built service container (tests inject one with fakes)

    Returns:
        Configured FastAPI instance
    """
    if container is None:
        container = ServiceContainer(settings or get_settings())
    settings = container.settings

    app = FastAPI(
        title=settings.app_name,
        description="Per-user secrets with session authentication",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )
    app.state.container = container

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    register_exception_handlers(app, settings)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(auth.router, prefix="/api", tags=["auth"])
    app.include_router(auth.google_router, tags=["auth"])
    app.include_router(secrets_router, prefix="/api", tags=["secrets"])

    return app


# Application instance for uvicorn
app = create_app()
