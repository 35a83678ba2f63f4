"""Schema validation.

Walks the requested sections in declaration order and checks every field
against its ``Rule``. All failures are batched into one result.
"""

from __future__ import annotations

from .errors import FailureKind, FieldFailure, ValidationResult
from .schema import ALL_SECTIONS, Config, FieldSpec, iter_field_specs
from .types import is_zero


def check_field(spec: FieldSpec, value: object) -> FieldFailure | None:
    """Check one field value against its rule."""
    if is_zero(value):
        if spec.rule.required:
            return FieldFailure(
                path=spec.path,
                kind=FailureKind.MISSING_REQUIRED,
                message="required field is missing or empty",
            )
        return None

    error = spec.rule.validate(value)
    if error:
        return FieldFailure(path=spec.path, kind=FailureKind.CONSTRAINT, message=error)
    return None


def validate_sections(config: Config, sections: tuple[str, ...] = ALL_SECTIONS) -> ValidationResult:
    """
    Validate the given sections of a populated config.

    Args:
        config: The config to check
        sections: Section names to check, in schema order

    Returns:
        ValidationResult listing every failing field path
    """
    failures: list[FieldFailure] = []
    for spec in iter_field_specs(sections):
        value = getattr(getattr(config, spec.section), spec.name)
        failure = check_field(spec, value)
        if failure is not None:
            failures.append(failure)
    return ValidationResult(failures=tuple(failures))
