"""Configuration error classes.

All config-related failures for fast-fail startup. Pipeline stages report
``FieldFailure`` records; ``ConfigError`` carries the batched report to the
caller that decides whether to exit.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum


class FailureKind(Enum):
    """Category of a single field failure."""

    MISSING_REQUIRED = "missing_required"
    TYPE_COERCION = "type_coercion"
    CONSTRAINT = "constraint"


@dataclass(frozen=True)
class FieldFailure:
    """One failed field, addressed by its dotted key path."""

    path: str
    kind: FailureKind
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a validation pass. Empty ``failures`` means success."""

    failures: tuple[FieldFailure, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def paths(self) -> list[str]:
        return [failure.path for failure in self.failures]


class ConfigError(Exception):
    """Base exception for configuration errors."""

    def __init__(self, message: str, failures: Iterable[FieldFailure] = ()):
        super().__init__(message)
        self.failures: tuple[FieldFailure, ...] = tuple(failures)

    @property
    def paths(self) -> list[str]:
        return [failure.path for failure in self.failures]

    @classmethod
    def from_failures(cls, failures: Iterable[FieldFailure]) -> ConfigError:
        """Build one error for a batch, using the most specific subclass available."""
        batch = tuple(failures)
        kinds = {failure.kind for failure in batch}
        error_cls: type[ConfigError] = cls
        if len(kinds) == 1:
            error_cls = _ERROR_BY_KIND[kinds.pop()]

        lines = [f"  - {failure}" for failure in batch]
        message = f"Configuration validation failed ({len(batch)} field(s)):\n" + "\n".join(lines)
        return error_cls(message, batch)


class MissingRequiredFieldError(ConfigError):
    """Raised when a required field or section is absent after population."""

    pass


class TypeCoercionError(ConfigError):
    """Raised when a present value cannot be parsed into its declared type."""

    pass


class ValidationConstraintError(ConfigError):
    """Raised when a present value violates a rule beyond presence."""

    pass


class FileIOError(ConfigError):
    """Reserved for override file access. Never raised out of the overlay stage."""

    pass


_ERROR_BY_KIND: dict[FailureKind, type[ConfigError]] = {
    FailureKind.MISSING_REQUIRED: MissingRequiredFieldError,
    FailureKind.TYPE_COERCION: TypeCoercionError,
    FailureKind.CONSTRAINT: ValidationConstraintError,
}
