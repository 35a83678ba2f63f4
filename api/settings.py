"""
Bootstrap settings using pydantic-settings.

These knobs control how the service configuration is assembled (which
override files to read, which variable prefix to collect). They are not
part of the service configuration itself. Settings are loaded once at
startup and cached, and so is the assembled configuration.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from tasker.config import Config, load_config


class Settings(BaseSettings):
    """
    Bootstrap settings loaded from environment variables.

    Defaults match the deployed layout; override them for tests or
    alternative deployments.
    """

    model_config = SettingsConfigDict(
        extra="ignore",  # Ignore extra env vars not defined here
        case_sensitive=False,
    )

    # === Configuration sources ===
    config_env_prefix: str = Field(
        default="TASKER_",
        description="Prefix selecting service configuration variables",
    )
    config_key_delimiter: str = Field(
        default=".",
        description="Hierarchy separator inside variable names (TASKER_SERVER.PORT)",
    )
    config_list_delimiter: str = Field(
        default=",",
        description="Separator for list values such as CORS origins",
    )
    # Note: Use str type for env var parsing, convert to list via property
    config_env_files_str: str = Field(
        default=".env,apps/backend/.env",
        alias="CONFIG_ENV_FILES",
        description="Override files in load order, later files win (comma-separated)",
    )

    # === Startup ===
    skip_storage_init: bool = Field(
        default=False,
        description="Skip object storage client creation (for testing)",
    )

    @property
    def config_env_files(self) -> list[str]:
        """Parse comma-separated override file list."""
        return [path.strip() for path in self.config_env_files_str.split(",") if path.strip()]


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are loaded once and cached for the lifetime of the application.
    """
    return Settings()


@lru_cache
def get_config() -> Config:
    """
    Get the cached service configuration.

    Assembled once per process from the sources named by the bootstrap
    settings. Raises ConfigError with every failing field on bad input.
    """
    settings = get_settings()
    return load_config(
        env_files=settings.config_env_files,
        prefix=settings.config_env_prefix,
        delimiter=settings.config_key_delimiter,
        list_delimiter=settings.config_list_delimiter,
    )
