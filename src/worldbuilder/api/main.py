"""FastAPI application entry point.

Main application configuration, middleware, and startup lifecycle.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from worldbuilder.core.config import Settings, get_settings
from worldbuilder.models.database import close_db, create_all, init_db

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure root logging from settings."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler.

    Startup:
    - Initialize database connection pool
    - Create missing tables when ``database_auto_create`` is set

    Shutdown:
    - Close database connections
    """
    settings: Settings = app.state.settings

    logger.info("Initializing database connection...")
    init_db(settings.async_database_url, **settings.engine_options())
    if settings.database_auto_create:
        await create_all()
    logger.info("Database initialized")

    yield

    logger.info("Shutting down...")
    await close_db()
    logger.info("Database connections closed")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use instead of the cached environment settings

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="World Builder API",
        description="Series, books and the world-building resources inside them",
        version=settings.app_version,
        docs_url="/api/docs" if not settings.is_production else None,
        redoc_url="/api/redoc" if not settings.is_production else None,
        openapi_url="/api/openapi.json" if not settings.is_production else None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Configure CORS; credentials are needed for the auth cookie
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Import and register routers
    from worldbuilder.api.routers import (
        auth_router,
        books_router,
        health_router,
        resource_routers,
        series_router,
    )

    app.include_router(health_router, prefix="/api", tags=["health"])
    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(series_router, prefix="/api/series", tags=["series"])
    app.include_router(books_router, prefix="/api/books", tags=["books"])
    for path, router in resource_routers.items():
        app.include_router(router, prefix=f"/api/{path}", tags=[path])

    # Register exception handlers
    from worldbuilder.api.exceptions import register_exception_handlers
    register_exception_handlers(app)

    return app


# Application instance for uvicorn
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "worldbuilder.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.environment == "development",
        workers=settings.workers if settings.is_production else 1,
    )
