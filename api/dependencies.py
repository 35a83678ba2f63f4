"""
Shared dependencies for the Tasker API.

This module provides:
- The service container built from the assembled configuration
- FastAPI dependency accessors for handlers
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import Request

from tasker.config import Config
from tasker.storage import S3Storage

from .settings import get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Services:
    """Long-lived collaborators shared by every request."""

    config: Config
    storage: S3Storage | None = None


def build_services(config: Config) -> Services:
    """Wire services from an already-validated configuration."""
    settings = get_settings()
    if settings.skip_storage_init:
        logger.warning("Skipping object storage initialization (SKIP_STORAGE_INIT=true)")
        return Services(config=config)

    return Services(config=config, storage=S3Storage.from_config(config.aws))


def get_services(request: Request) -> Services:
    """FastAPI dependency returning the services attached at app creation."""
    services: Services = request.app.state.services
    return services
