"""Default injection for optional sections.

An optional section that received no input at all is replaced by its
default record. A section that received any input is kept exactly as
supplied, never patched field by field; the second validation pass decides
whether it is complete.
"""

from __future__ import annotations

import logging
from collections.abc import Set

from .schema import DEFAULT_SECTIONS, SERVICE_NAME, Config

logger = logging.getLogger(__name__)


def inject_defaults(config: Config, supplied_sections: Set[str]) -> Config:
    """
    Default absent optional sections, then force the identity fields.

    ``observability.service_name`` and ``observability.environment`` are
    always overwritten: the primary section is the only source of the
    environment name.

    Args:
        config: Populated config
        supplied_sections: Sections that received at least one value

    Returns:
        A new Config; the input is not modified
    """
    updates = {}
    for section, default in DEFAULT_SECTIONS.items():
        if section not in supplied_sections:
            logger.info(f"No '{section}' configuration supplied, using defaults")
            updates[section] = default

    defaulted = config.model_copy(update=updates)
    observability = defaulted.observability.model_copy(
        update={"service_name": SERVICE_NAME, "environment": defaulted.primary.env}
    )
    return defaulted.model_copy(update={"observability": observability})
