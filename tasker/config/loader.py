"""
Configuration assembly - unified fast-fail configuration pipeline.

Builds the runtime Config once per process from override files, the
process environment and built-in defaults for optional sections:

    overlay files -> env collection -> population -> validation (required)
      -> default injection -> normalization -> validation (all sections)

``assemble_config`` never raises for bad input; it returns an
``AssemblyResult`` so the caller decides how to exit. ``load_config``
raises a single ``ConfigError`` carrying every failure.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .defaults import inject_defaults
from .environment import DEFAULT_ENV_PREFIX, DEFAULT_KEY_DELIMITER, collect_environment
from .errors import ConfigError, FieldFailure
from .normalize import normalize_config
from .overlay import DEFAULT_OVERLAY_FILES, load_overlay_files
from .populate import DEFAULT_LIST_DELIMITER, populate
from .schema import ALL_SECTIONS, REQUIRED_SECTIONS, Config
from .validation import validate_sections

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssemblyResult:
    """Either a finished Config or the batched failures that prevented it."""

    config: Config | None = None
    failures: tuple[FieldFailure, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return self.config is not None and not self.failures

    def unwrap(self) -> Config:
        """Return the Config or raise a ConfigError with every failure."""
        if self.config is None or self.failures:
            raise ConfigError.from_failures(self.failures)
        return self.config


def assemble_config(
    environ: Mapping[str, str] | None = None,
    *,
    env_files: Iterable[str | Path] = DEFAULT_OVERLAY_FILES,
    prefix: str = DEFAULT_ENV_PREFIX,
    delimiter: str = DEFAULT_KEY_DELIMITER,
    list_delimiter: str = DEFAULT_LIST_DELIMITER,
) -> AssemblyResult:
    """
    Run the configuration pipeline.

    Args:
        environ: Environment snapshot (defaults to a copy of os.environ)
        env_files: Override files, later files win
        prefix: Variable name prefix selecting our keys
        delimiter: Hierarchy separator in variable names
        list_delimiter: Separator for string-list values

    Returns:
        AssemblyResult with the Config on success, failures otherwise
    """
    snapshot = dict(os.environ if environ is None else environ)
    overlay = load_overlay_files(env_files)
    key_paths = collect_environment(snapshot, overlay, prefix=prefix, delimiter=delimiter)

    population = populate(key_paths, list_delimiter=list_delimiter)
    if not population.ok:
        return AssemblyResult(failures=population.failures)

    first_pass = validate_sections(population.config, REQUIRED_SECTIONS)
    if not first_pass.ok:
        return AssemblyResult(failures=first_pass.failures)

    config = inject_defaults(population.config, population.supplied_sections)
    config = normalize_config(config)

    second_pass = validate_sections(config, ALL_SECTIONS)
    if not second_pass.ok:
        return AssemblyResult(failures=second_pass.failures)

    logger.debug(f"Configuration assembled for environment '{config.primary.env}'")
    return AssemblyResult(config=config)


def load_config(
    environ: Mapping[str, str] | None = None,
    *,
    env_files: Iterable[str | Path] = DEFAULT_OVERLAY_FILES,
    prefix: str = DEFAULT_ENV_PREFIX,
    delimiter: str = DEFAULT_KEY_DELIMITER,
    list_delimiter: str = DEFAULT_LIST_DELIMITER,
) -> Config:
    """
    Assemble the configuration or fail fast.

    Raises:
        ConfigError: With every failing field path batched into one report
    """
    result = assemble_config(
        environ,
        env_files=env_files,
        prefix=prefix,
        delimiter=delimiter,
        list_delimiter=list_delimiter,
    )
    if not result.ok:
        for failure in result.failures:
            logger.error(f"Invalid configuration: {failure}")
    return result.unwrap()

