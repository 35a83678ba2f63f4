"""Environment collection.

Selects prefixed variables from an environment snapshot merged with the
override overlay, and turns their names into dotted key paths:
``TASKER_SERVER.PORT`` -> ``server.port``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

logger = logging.getLogger(__name__)

DEFAULT_ENV_PREFIX = "TASKER_"
DEFAULT_KEY_DELIMITER = "."


def to_key_path(name: str, *, prefix: str, delimiter: str) -> str | None:
    """Convert a variable name to a key path, or None if it is not ours."""
    if not name.startswith(prefix):
        return None
    remainder = name[len(prefix) :].lower()
    if not remainder:
        return None
    if delimiter and delimiter != ".":
        remainder = remainder.replace(delimiter.lower(), ".")
    return remainder


def collect_environment(
    environ: Mapping[str, str],
    overlay: Mapping[str, str] | None = None,
    *,
    prefix: str = DEFAULT_ENV_PREFIX,
    delimiter: str = DEFAULT_KEY_DELIMITER,
) -> dict[str, str]:
    """
    Collect prefixed variables into a key-path mapping.

    Args:
        environ: Snapshot of the process environment
        overlay: Values from override files; these win over ``environ``
        prefix: Case-sensitive variable name prefix
        delimiter: Hierarchy separator within the variable name

    Returns:
        Mapping of dotted key path to raw string value
    """
    merged: dict[str, str] = dict(environ)
    if overlay:
        merged.update(overlay)

    collected: dict[str, str] = {}
    for name, value in merged.items():
        key_path = to_key_path(name, prefix=prefix, delimiter=delimiter)
        if key_path is not None:
            collected[key_path] = value

    logger.debug(f"Collected {len(collected)} variable(s) with prefix {prefix!r}")
    return collected
