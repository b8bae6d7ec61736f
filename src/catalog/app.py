"""FastAPI application factory and lifespan management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from catalog.config import Settings
from catalog.middleware.auth import AdminKeyMiddleware
from catalog.middleware.cors import configure_cors
from catalog.middleware.logging import RequestLoggingMiddleware
from catalog.middleware.site import SitePageMiddleware
from catalog.routes import admin, films, health, ratings, users
from catalog.site import ResolutionPipeline, SiteLayout
from catalog.store import Database, DatabaseError

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifecycle events.

    Opens the database on startup and closes it on shutdown. The site
    layout is validated earlier, in create_app.

    Args:
        app: FastAPI application instance.

    Yields:
        None during application runtime.
    """
    settings: Settings = app.state.settings
    logger.info("app_startup", host=settings.host, port=settings.port)

    database = Database(settings.database_path)
    database.initialize()
    app.state.database = database

    try:
        yield
    finally:
        database.close()
        logger.info("app_shutdown")


async def database_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Turn storage failures into a 500 response."""
    operation = exc.operation if isinstance(exc, DatabaseError) else None
    logger.error(
        "db_error",
        path=request.url.path,
        operation=operation,
        error=str(exc),
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Database error"},
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Factory function to create configured FastAPI application.

    Args:
        settings: Configuration instance. Creates default if None.

    Returns:
        Configured FastAPI application.

    Raises:
        ConfigurationError: If the site roots cannot be served.
    """
    if settings is None:
        settings = Settings()

    layout = SiteLayout.from_settings(settings)
    pipeline = ResolutionPipeline(layout)
    api_prefix = layout.api_prefix

    app = FastAPI(
        title="Catalog",
        version="0.1.0",
        lifespan=lifespan,
        docs_url=f"{api_prefix}/docs" if settings.debug else None,
        redoc_url=None,
        openapi_url=f"{api_prefix}/openapi.json" if settings.debug else None,
    )
    app.state.settings = settings
    app.state.layout = layout
    app.state.pipeline = pipeline

    app.add_exception_handler(DatabaseError, database_error_handler)

    # Added innermost first: logging wraps page resolution, which wraps auth.
    configure_cors(app, settings.cors_origins)
    if settings.key:
        app.add_middleware(
            AdminKeyMiddleware,
            api_key=settings.key,
            prefix=f"{api_prefix}/admin",
        )
    app.add_middleware(SitePageMiddleware, pipeline=pipeline)
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(health.router, prefix=api_prefix)
    app.include_router(films.router, prefix=api_prefix)
    app.include_router(ratings.router, prefix=api_prefix)
    app.include_router(users.router, prefix=api_prefix)
    app.include_router(admin.router, prefix=api_prefix)

    return app
