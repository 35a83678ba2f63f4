"""
Root test configuration and fixtures for the Tasker backend.

This conftest.py provides common fixtures for all test categories:
- unit/: Fast, isolated unit tests

Note: sys.path manipulation is handled here to ensure imports work correctly.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Add project root to path to allow imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


# =============================================================================
# Configuration Fixtures
# =============================================================================

# A complete environment satisfying every required field
VALID_ENV = {
    "TASKER_PRIMARY.ENV": "development",
    "TASKER_SERVER.PORT": "8080",
    "TASKER_SERVER.READ_TIMEOUT": "30",
    "TASKER_SERVER.WRITE_TIMEOUT": "30",
    "TASKER_SERVER.IDLE_TIMEOUT": "60",
    "TASKER_SERVER.CORS_ALLOWED_ORIGINS": "http://localhost:3000,http://localhost:5173",
    "TASKER_DATABASE.HOST": "db",
    "TASKER_DATABASE.PORT": "5432",
    "TASKER_DATABASE.USER": "tasker",
    "TASKER_DATABASE.PASSWORD": "s3cret",
    "TASKER_DATABASE.NAME": "tasker",
    "TASKER_DATABASE.SSL_MODE": "disable",
    "TASKER_DATABASE.MAX_OPEN_CONNS": "25",
    "TASKER_DATABASE.MAX_IDLE_CONNS": "25",
    "TASKER_DATABASE.CONN_MAX_LIFETIME": "300",
    "TASKER_DATABASE.CONN_MAX_IDLE_TIME": "300",
    "TASKER_AUTH.SECRET_KEY": "auth-secret",
    "TASKER_REDIS.ADDRESS": "cache:6379",
    "TASKER_INTEGRATION.RESEND_API_KEY": "re_123",
    "TASKER_AWS.REGION": "us-east-1",
    "TASKER_AWS.ACCESS_KEY_ID": "AKIAEXAMPLE",
    "TASKER_AWS.SECRET_ACCESS_KEY": "aws-secret",
    "TASKER_AWS.UPLOAD_BUCKET": "uploads",
}


@pytest.fixture
def valid_env() -> dict[str, str]:
    """A fresh copy of a complete, valid environment."""
    return dict(VALID_ENV)


@pytest.fixture
def write_env_file(tmp_path):
    """Write an override file under tmp_path and return its path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def clear_cached_settings():
    """Reset cached settings and config so each test assembles its own."""
    from api.settings import get_config, get_settings

    get_settings.cache_clear()
    get_config.cache_clear()
    yield
    get_settings.cache_clear()
    get_config.cache_clear()
