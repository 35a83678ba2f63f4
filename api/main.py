#!/usr/bin/env python3
"""
Tasker API - HTTP layer for the Tasker backend.

The FastAPI application consumes the assembled configuration opaquely:
CORS origins from ``server``, log level and identity from
``observability``, storage credentials from ``aws``. Configuration errors
are fatal at app creation.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tasker.config import Config
from tasker.logging_config import configure_logging

from .dependencies import Services, build_services, get_services
from .settings import get_config

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifecycle - startup and shutdown."""
    config: Config = app.state.services.config
    logger.info(f"Starting {config.observability.service_name} in '{config.primary.env}' environment")

    yield

    logger.info("Shutting down")


def create_app(config: Config | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Pre-assembled configuration; assembled from the environment
            when omitted

    Raises:
        ConfigError: If the configuration cannot be assembled
    """
    if config is None:
        # LOG_LEVEL governs until observability.log_level is known
        configure_logging(source="api")
        config = get_config()

    configure_logging(source="api", level=config.observability.effective_log_level())

    app = FastAPI(title="Tasker API", description="Tasker backend API", lifespan=lifespan)
    app.state.services = build_services(config)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.server.cors_allowed_origins),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check(services: Services = Depends(get_services)) -> dict[str, str]:
        """Health check endpoint."""
        observability = services.config.observability
        return {
            "status": "healthy",
            "service": observability.service_name,
            "environment": observability.environment,
        }

    return app


def run() -> None:
    """Serve the API with uvicorn on the configured port."""
    import uvicorn

    configure_logging(source="api")
    config = get_config()
    app = create_app(config)
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=int(config.server.port),
        timeout_keep_alive=config.server.idle_timeout,
        log_config=None,
    )


if __name__ == "__main__":
    run()
