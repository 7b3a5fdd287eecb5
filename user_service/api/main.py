"""
ASGI entry point for the user service.

Startup opens the async connection pool and applies migrations; the pool
lives on ``app.state`` for the request dependencies to borrow from.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import psycopg
from fastapi import FastAPI, HTTPException, Request, status
from psycopg_pool import AsyncConnectionPool

from user_service import __version__
from user_service.adapters.repository.postgres import run_migrations
from user_service.api.middleware import log_requests
from user_service.api.routes import router as users_router
from user_service.config.logging import configure_logging
from user_service.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

tags_metadata = [
    {
        "name": "users",
        "description": "Register, activate, log in and inspect user accounts",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Own the connection pool for the lifetime of the process."""
    settings: Settings = app.state.settings
    configure_logging(settings.log_level)

    logger.info("Opening pool (min=%d, max=%d)", settings.pool_min_size, settings.pool_max_size)
    pool = AsyncConnectionPool(
        conninfo=settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
        open=False,
    )
    await pool.open()
    await run_migrations(pool)
    app.state.pool = pool
    logger.info("%s %s ready", settings.app_name, __version__)

    try:
        yield
    finally:
        await pool.close()
        logger.info("Connection pool closed")


async def health_check(request: Request) -> dict[str, str]:
    """Report healthy only when the database answers."""
    try:
        async with request.app.state.pool.connection() as conn:
            await conn.execute("SELECT 1")
    except psycopg.Error as exc:
        logger.error("health check failed: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database unavailable",
        ) from None
    return {"status": "healthy"}


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application with routes, middleware and lifespan wired."""
    settings = settings or get_settings()
    application = FastAPI(
        title=settings.app_name,
        description="Registration with emailed activation codes and "
        "access/refresh token sessions",
        version=__version__,
        openapi_tags=tags_metadata,
        lifespan=lifespan,
    )
    application.state.settings = settings
    application.middleware("http")(log_requests)
    application.include_router(users_router)
    application.add_api_route("/health", health_check, methods=["GET"], tags=["health"])
    return application


app = create_app()
