"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import get_settings
from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    ExternalServiceError,
    GardenError,
    NotFoundError,
    ValidationError,
)
from shared.logging import configure_logging

from .dependencies import get_container
from .models import ErrorResponse
from .routes import health
from modules.users.routes import router as users_router

logger = logging.getLogger(__name__)

# Most specific first: the first matching base decides the status
ERROR_STATUS: list[tuple[type[GardenError], int]] = [
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
    (ExternalServiceError, 500),
]


def status_for(error: GardenError) -> int:
    for error_type, status_code in ERROR_STATUS:
        if isinstance(error, error_type):
            return status_code
    return 500


async def garden_error_handler(request: Request, exc: GardenError) -> JSONResponse:
    """Translate module exceptions into the standard error body."""
    status_code = status_for(exc)
    if status_code >= 500:
        # Details of dependency failures stay in the server log
        logger.error("%s %s failed: %s %s", request.method, request.url.path, exc.code, exc.details)
    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(detail=exc.message, code=exc.code).model_dump(),
        headers=headers,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic. Building the token issuer here makes a
    missing JWT_SECRET stop the server at startup.
    """
    # Startup
    settings = get_settings()
    configure_logging(settings.log_level)
    issuer = get_container().token_issuer
    logger.info("Starting %s on %s:%s", settings.app_name, settings.host, settings.port)
    logger.info("Access tokens expire after %s", issuer.access_ttl)
    yield
    # Shutdown
    logger.info("Shutting down %s", settings.app_name)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="User accounts, sessions and wishlists for the Garden shop",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(GardenError, garden_error_handler)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(users_router, prefix="/api/users", tags=["users"])

    return app


# Application instance for uvicorn
app = create_app()
