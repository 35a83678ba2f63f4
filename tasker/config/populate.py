"""Schema population.

Maps collected key paths onto the fixed schema. Matching is driven by the
schema: each field is addressed by ``<section>.<field>``, with ``.`` and
``_`` treated as the same separator so both ``TASKER_SERVER_READ_TIMEOUT``
and ``TASKER_SERVER.READ_TIMEOUT`` reach ``server.read_timeout``.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .errors import FailureKind, FieldFailure
from .schema import Config, FieldSpec, iter_field_specs

logger = logging.getLogger(__name__)

DEFAULT_LIST_DELIMITER = ","

_INTEGER = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class Population:
    """Result of populating the schema from collected key paths."""

    config: Config
    supplied_sections: frozenset[str] = frozenset()
    failures: tuple[FieldFailure, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return not self.failures


def _canonical(key_path: str) -> str:
    return key_path.replace(".", "_")


_FIELD_INDEX: dict[str, FieldSpec] = {_canonical(spec.path): spec for spec in iter_field_specs()}


def coerce_value(raw: str, value_type: Any, *, list_delimiter: str = DEFAULT_LIST_DELIMITER) -> Any:
    """
    Convert a raw string to the field's declared type.

    Raises:
        ValueError: If the value cannot be parsed as the declared type
    """
    if value_type is int:
        # Blank means unset; the validator reports it if the field is required
        text = raw.strip()
        if not text:
            return 0
        if not _INTEGER.fullmatch(text):
            raise ValueError(f"invalid base-10 integer: {raw!r}")
        return int(text, 10)
    if value_type == tuple[str, ...]:
        return tuple(raw.split(list_delimiter))
    return raw


def _describe(value_type: Any) -> str:
    if value_type is int:
        return "integer"
    if value_type == tuple[str, ...]:
        return "string list"
    return "string"


def match_fields(key_paths: Mapping[str, str]) -> dict[FieldSpec, str]:
    """Resolve collected key paths to schema fields. Unknown keys are dropped."""
    matched: dict[FieldSpec, str] = {}
    exact: set[FieldSpec] = set()
    for key_path in sorted(key_paths):
        spec = _FIELD_INDEX.get(_canonical(key_path))
        if spec is None:
            logger.debug(f"Ignoring unknown config key: {key_path}")
            continue
        # The dotted form wins over an underscore spelling of the same field
        if key_path == spec.path:
            exact.add(spec)
        elif spec in exact:
            continue
        matched[spec] = key_paths[key_path]
    return matched


def populate(key_paths: Mapping[str, str], *, list_delimiter: str = DEFAULT_LIST_DELIMITER) -> Population:
    """
    Populate the schema from collected key paths.

    Fields with no input keep their zero value. Every value that cannot be
    coerced is reported; no field is silently skipped.

    Args:
        key_paths: Dotted key path to raw string value
        list_delimiter: Separator for string-list fields

    Returns:
        Population with the config, the sections that received any input,
        and any type coercion failures
    """
    sections: dict[str, dict[str, Any]] = {}
    supplied: set[str] = set()
    failures: list[FieldFailure] = []

    for spec, raw in match_fields(key_paths).items():
        supplied.add(spec.section)
        try:
            value = coerce_value(raw, spec.value_type, list_delimiter=list_delimiter)
        except ValueError:
            failures.append(
                FieldFailure(
                    path=spec.path,
                    kind=FailureKind.TYPE_COERCION,
                    message=f"cannot parse {raw!r} as {_describe(spec.value_type)}",
                )
            )
            continue
        sections.setdefault(spec.section, {})[spec.name] = value

    order = {spec.path: index for index, spec in enumerate(iter_field_specs())}
    failures.sort(key=lambda failure: order[failure.path])

    return Population(
        config=Config.model_validate(sections),
        supplied_sections=frozenset(supplied),
        failures=tuple(failures),
    )
