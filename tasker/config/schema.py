"""Configuration schema.

Defines every configuration section and field with its type and rules.
This is the single source of truth for configuration structure: the
populator derives key paths from it and the validator reads its rules.

Every field defaults to its type's zero value so population never fails on
absent input; presence is enforced afterwards by the validator.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field

from .types import OPTIONAL, REQUIRED, REQUIRED_SECRET, SECRET, Rule

SERVICE_NAME = "tasker"

REDACTED = "********"

_DIGITS = re.compile(r"[0-9]+")


def _is_port(value: str) -> bool:
    return _DIGITS.fullmatch(value) is not None and 1 <= int(value) <= 65535


class Section(BaseModel):
    """Base class for a flat, immutable configuration section."""

    model_config = ConfigDict(frozen=True, extra="forbid")


# =============================================================================
# REQUIRED SECTIONS
# =============================================================================


class PrimaryConfig(Section):
    env: Annotated[str, Rule(required=True, description="Active environment name")] = ""


class ServerConfig(Section):
    port: Annotated[str, Rule(required=True, validator=_is_port, description="HTTP listen port")] = ""
    read_timeout: Annotated[int, Rule(required=True, min_value=1)] = 0
    write_timeout: Annotated[int, Rule(required=True, min_value=1)] = 0
    idle_timeout: Annotated[int, Rule(required=True, min_value=1)] = 0
    cors_allowed_origins: Annotated[tuple[str, ...], REQUIRED] = ()


class DatabaseConfig(Section):
    host: Annotated[str, REQUIRED] = ""
    port: Annotated[int, Rule(required=True, min_value=1, max_value=65535)] = 0
    user: Annotated[str, REQUIRED] = ""
    password: Annotated[str, SECRET] = ""
    name: Annotated[str, REQUIRED] = ""
    ssl_mode: Annotated[
        str,
        Rule(
            required=True,
            allowed_values=("disable", "allow", "prefer", "require", "verify-ca", "verify-full"),
        ),
    ] = ""
    max_open_conns: Annotated[int, Rule(required=True, min_value=1)] = 0
    max_idle_conns: Annotated[int, Rule(required=True, min_value=1)] = 0
    conn_max_lifetime: Annotated[int, Rule(required=True, min_value=1)] = 0
    conn_max_idle_time: Annotated[int, Rule(required=True, min_value=1)] = 0


class AuthConfig(Section):
    secret_key: Annotated[str, REQUIRED_SECRET] = ""


class RedisConfig(Section):
    """Cache connection. ``address`` is a bare host:port after normalization."""

    address: Annotated[str, REQUIRED] = ""
    password: Annotated[str, SECRET] = ""


class IntegrationConfig(Section):
    resend_api_key: Annotated[str, REQUIRED_SECRET] = ""


class AWSConfig(Section):
    """Object storage credentials and target bucket."""

    region: Annotated[str, REQUIRED] = ""
    access_key_id: Annotated[str, REQUIRED_SECRET] = ""
    secret_access_key: Annotated[str, REQUIRED_SECRET] = ""
    upload_bucket: Annotated[str, REQUIRED] = ""
    # Set for S3-compatible stores (MinIO, LocalStack); empty means AWS.
    endpoint_url: Annotated[str, OPTIONAL] = ""


# =============================================================================
# OPTIONAL SECTIONS
# Replaced wholesale by their default record when nothing was supplied.
# =============================================================================


class ObservabilityConfig(Section):
    service_name: Annotated[str, REQUIRED] = ""
    environment: Annotated[str, REQUIRED] = ""
    log_level: Annotated[str, Rule(required=True, allowed_values=("debug", "info", "warn", "error"))] = ""
    log_format: Annotated[str, Rule(required=True, allowed_values=("json", "console"))] = ""
    slow_query_threshold_ms: Annotated[int, Rule(min_value=0)] = 0
    exporter: Annotated[str, Rule(required=True, allowed_values=("none", "stdout", "otlp"))] = ""
    exporter_endpoint: Annotated[str, OPTIONAL] = ""
    exporter_api_key: Annotated[str, SECRET] = ""
    sampling_percent: Annotated[int, Rule(min_value=0, max_value=100)] = 0
    health_checks: Annotated[tuple[str, ...], OPTIONAL] = ()

    def is_production(self) -> bool:
        return self.environment == "production"

    def effective_log_level(self) -> str:
        """Log level after environment adjustments.

        Development always logs at debug; production falls back to info when
        no level is set.
        """
        if self.environment == "development":
            return "debug"
        if self.environment == "production" and not self.log_level:
            return "info"
        return self.log_level


class CronConfig(Section):
    """Tuning for the periodic maintenance jobs."""

    archive_days_threshold: Annotated[int, Rule(required=True, min_value=1)] = 0
    batch_size: Annotated[int, Rule(required=True, min_value=1)] = 0
    reminder_hours: Annotated[int, Rule(required=True, min_value=1)] = 0
    max_todos_per_user_notification: Annotated[int, Rule(required=True, min_value=1)] = 0


DEFAULT_OBSERVABILITY = ObservabilityConfig(
    service_name=SERVICE_NAME,
    environment="development",
    log_level="info",
    log_format="json",
    slow_query_threshold_ms=100,
    exporter="stdout",
    sampling_percent=100,
    health_checks=("database", "redis"),
)

DEFAULT_CRON = CronConfig(
    archive_days_threshold=30,
    batch_size=100,
    reminder_hours=24,
    max_todos_per_user_notification=10,
)


# =============================================================================
# ROOT
# =============================================================================


class Config(BaseModel):
    """The assembled runtime configuration. Immutable once built."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    primary: PrimaryConfig = Field(default_factory=PrimaryConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    redis: RedisConfig = Field(default_factory=RedisConfig)
    integration: IntegrationConfig = Field(default_factory=IntegrationConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)
    aws: AWSConfig = Field(default_factory=AWSConfig)
    cron: CronConfig = Field(default_factory=CronConfig)

    def redacted(self) -> dict[str, dict[str, Any]]:
        """Return a plain dict of the config with secret values masked."""
        dumped = self.model_dump(mode="json")
        for spec in iter_field_specs():
            if spec.rule.secret and dumped[spec.section][spec.name]:
                dumped[spec.section][spec.name] = REDACTED
        return dumped


OPTIONAL_SECTIONS: tuple[str, ...] = ("observability", "cron")
REQUIRED_SECTIONS: tuple[str, ...] = tuple(name for name in Config.model_fields if name not in OPTIONAL_SECTIONS)
ALL_SECTIONS: tuple[str, ...] = tuple(Config.model_fields)

DEFAULT_SECTIONS: dict[str, Section] = {
    "observability": DEFAULT_OBSERVABILITY,
    "cron": DEFAULT_CRON,
}


@dataclass(frozen=True)
class FieldSpec:
    """A schema field resolved to its section, name, base type and rule."""

    section: str
    name: str
    value_type: Any
    rule: Rule

    @property
    def path(self) -> str:
        return f"{self.section}.{self.name}"


def section_model(section: str) -> type[Section]:
    """Return the model class for a section name."""
    annotation = Config.model_fields[section].annotation
    if not (isinstance(annotation, type) and issubclass(annotation, Section)):
        raise TypeError(f"Config.{section} is not a section model")
    return annotation


def iter_field_specs(sections: tuple[str, ...] = ALL_SECTIONS) -> Iterator[FieldSpec]:
    """Yield every field of the given sections in declaration order."""
    for section in sections:
        for name, info in section_model(section).model_fields.items():
            rule = next((meta for meta in info.metadata if isinstance(meta, Rule)), OPTIONAL)
            yield FieldSpec(section=section, name=name, value_type=info.annotation, rule=rule)
