"""
Runtime configuration for the Tasker backend.

This module assembles one validated, immutable Config at startup from
override files, prefixed environment variables and built-in defaults.
Any missing or invalid value is fatal.

Usage:
    from tasker.config import assemble_config, load_config, ConfigError

    # Fail fast with every failing field path in one report
    config = load_config()

    # Or inspect the outcome without raising
    result = assemble_config()
    if not result.ok:
        for failure in result.failures:
            print(failure)
"""

from __future__ import annotations

from .defaults import inject_defaults
from .environment import collect_environment
from .errors import (
    ConfigError,
    FailureKind,
    FieldFailure,
    FileIOError,
    MissingRequiredFieldError,
    TypeCoercionError,
    ValidationConstraintError,
    ValidationResult,
)
from .loader import AssemblyResult, assemble_config, load_config
from .normalize import normalize_cache_address, normalize_config
from .overlay import load_overlay_files, parse_overlay_text
from .populate import Population, populate
from .schema import (
    DEFAULT_CRON,
    DEFAULT_OBSERVABILITY,
    AuthConfig,
    AWSConfig,
    Config,
    CronConfig,
    DatabaseConfig,
    IntegrationConfig,
    ObservabilityConfig,
    PrimaryConfig,
    RedisConfig,
    ServerConfig,
)
from .validation import validate_sections

__all__ = [
    # Pipeline
    "assemble_config",
    "load_config",
    "AssemblyResult",
    "load_overlay_files",
    "parse_overlay_text",
    "collect_environment",
    "populate",
    "Population",
    "validate_sections",
    "inject_defaults",
    "normalize_config",
    "normalize_cache_address",
    # Error classes
    "ConfigError",
    "MissingRequiredFieldError",
    "TypeCoercionError",
    "ValidationConstraintError",
    "FileIOError",
    "FailureKind",
    "FieldFailure",
    "ValidationResult",
    # Schema
    "Config",
    "PrimaryConfig",
    "ServerConfig",
    "DatabaseConfig",
    "AuthConfig",
    "RedisConfig",
    "IntegrationConfig",
    "AWSConfig",
    "ObservabilityConfig",
    "CronConfig",
    "DEFAULT_OBSERVABILITY",
    "DEFAULT_CRON",
]
