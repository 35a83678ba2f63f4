"""
Logging setup for the Tasker backend.

Every line has the form ``2026-01-06T14:05:52Z [source] LEVEL message``.
The level comes from ``observability.log_level`` once the configuration is
assembled, or from ``LOG_LEVEL`` (INFO, DEBUG or TRACE) before that.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import UTC, datetime

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

# Names accepted by observability.log_level
LEVEL_NAMES: dict[str, int] = {
    "trace": TRACE,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")
QUIET_LOGGERS = ("botocore", "boto3", "s3transfer", "urllib3")


class ISO8601Formatter(logging.Formatter):
    """Render records with a UTC second-resolution timestamp and a source tag."""

    def __init__(self, source: str = "app"):
        self.source = source
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, UTC).strftime("%Y-%m-%dT%H:%M:%SZ")
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return f"{timestamp} [{self.source}] {record.levelname} {message}"


class HealthCheckFilter(logging.Filter):
    """Drop successful ``GET /health`` access lines unless running at DEBUG."""

    HEALTH_PATHS = ("/health", "/api/health")

    def filter(self, record: logging.LogRecord) -> bool:
        if record.levelno <= logging.DEBUG:
            return True
        message = record.getMessage()
        return not any(path in message and ("GET" in message or "200" in message) for path in self.HEALTH_PATHS)


def resolve_level(level: int | str | None = None, debug: bool | None = None) -> int:
    """Resolve a level from an explicit value, the debug flag, or LOG_LEVEL."""
    if isinstance(level, int):
        return level
    if isinstance(level, str) and level:
        try:
            return LEVEL_NAMES[level.lower()]
        except KeyError:
            raise ValueError(f"Unknown log level: {level!r}") from None

    log_level_env = os.getenv("LOG_LEVEL", "").upper()
    if log_level_env == "TRACE":
        return TRACE
    if log_level_env == "DEBUG" or debug:
        return logging.DEBUG
    return logging.INFO


def configure_logging(
    source: str = "app",
    level: int | str | None = None,
    debug: bool | None = None,
) -> logging.Logger:
    """Install a single stdout handler on the root logger.

    Safe to call again: a later call replaces the handler, which is how the
    API moves from the bootstrap level to the configured one.

    Args:
        source: Tag shown in brackets (e.g. "api", "config")
        level: Level or level name; falls back to LOG_LEVEL
        debug: Use DEBUG when no level is given

    Returns:
        The root logger
    """
    resolved = resolve_level(level, debug)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(resolved)
    handler.setFormatter(ISO8601Formatter(source=source))
    handler.addFilter(HealthCheckFilter())

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    # Uvicorn installs its own handlers; send its records through ours
    for name in SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.addHandler(handler)
        server_logger.setLevel(resolved)
        server_logger.propagate = False

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root_logger
