"""Field rule definitions.

Schema fields carry a ``Rule`` in their ``Annotated`` metadata. The validator
reads it back from the pydantic field info.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Rule:
    """
    Validation rules for one schema field.

    Attributes:
        required: If True, the field must hold a non-zero, non-empty value
        description: Human-readable description
        min_value: Minimum allowed value (for int fields)
        max_value: Maximum allowed value (for int fields)
        allowed_values: Allowed values (for string fields)
        validator: Custom validation function returning True if valid
        secret: If True, the value is masked in redacted dumps
    """

    required: bool = False
    description: str = ""
    min_value: int | None = None
    max_value: int | None = None
    allowed_values: tuple[str, ...] | None = None
    validator: Callable[[Any], bool] | None = None
    secret: bool = False

    def validate(self, value: Any) -> str | None:
        """
        Validate a non-zero value against this rule.

        Args:
            value: The value to validate

        Returns:
            None if valid, error message string if invalid
        """
        if isinstance(value, int):
            if self.min_value is not None and value < self.min_value:
                return f"value {value} below minimum {self.min_value}"
            if self.max_value is not None and value > self.max_value:
                return f"value {value} above maximum {self.max_value}"

        if self.allowed_values is not None and value not in self.allowed_values:
            return f"value {value!r} not in allowed values {list(self.allowed_values)}"

        if self.validator is not None and not self.validator(value):
            return f"value {value!r} failed validation"

        return None


REQUIRED = Rule(required=True)
OPTIONAL = Rule()
SECRET = Rule(secret=True)
REQUIRED_SECRET = Rule(required=True, secret=True)


def is_zero(value: Any) -> bool:
    """Return True for a type's zero value ("", 0, empty list)."""
    if isinstance(value, str):
        return value == ""
    if isinstance(value, bool):
        return value is False
    if isinstance(value, int):
        return value == 0
    if isinstance(value, list | tuple):
        return len(value) == 0
    return value is None
