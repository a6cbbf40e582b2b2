"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures exception handlers, and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from src.adapters.repository import (
    InMemoryUserRepository,
    PostgresUserRepository,
    create_pool,
    run_migrations,
)
from src.api.errors import install_error_handlers
from src.api.v1 import router as v1_router
from src.config.settings import get_settings

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "v1",
        "description": "Sign-up API v1 - Register user accounts and start sessions",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Creates the user repository (PostgreSQL pool or in-memory)
    - Runs migrations on startup (PostgreSQL only)
    - Closes connection pool on shutdown
    """
    settings = get_settings()

    logger.info("Starting application...")

    pool = None
    if settings.repository_backend == "memory":
        logger.warning("Using in-memory user repository; data is not durable")
        app.state.repository = InMemoryUserRepository()
    else:
        logger.info("Connecting to database...")
        pool = create_pool(
            settings.database_url,
            min_size=settings.pool_min_size,
            max_size=settings.pool_max_size,
            statement_timeout_ms=settings.statement_timeout_ms,
            timeout=settings.pool_timeout_seconds,
        )

        logger.info("Running database migrations...")
        run_migrations(pool)

        app.state.repository = PostgresUserRepository(pool, timeout=settings.pool_timeout_seconds)

    # Store pool in app state for the health check
    app.state.pool = pool

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    if pool is not None:
        pool.close()
        logger.info("Database connection pool closed")


app = FastAPI(
    title="signup-service",
    description="Sign-up API - Validated, atomic user registration with cookie-based sessions",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

install_error_handlers(app)

# Include v1 API routes
app.include_router(v1_router, prefix="/v1")


@app.get("/health")
def health_check(request: Request) -> dict[str, str]:
    """
    Health check endpoint with database validation.

    Returns 200 OK if application and database are healthy.
    Raises exception if database connection fails.
    """
    pool = request.app.state.pool
    if pool is None:
        return {"status": "healthy", "store": "memory"}

    # Validate database connectivity
    with pool.connection() as conn:
        conn.execute("SELECT 1")

    return {"status": "healthy", "store": "postgres"}
