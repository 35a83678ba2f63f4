"""Local override files.

Reads ``KEY=VALUE`` files in order and returns the merged overlay. The
process environment is never touched; the environment collector merges the
overlay on top of its own snapshot.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_OVERLAY_FILES: tuple[str, ...] = (".env", "apps/backend/.env")

_QUOTES = ('"', "'")


def parse_overlay_line(line: str) -> tuple[str, str] | None:
    """Parse one line, returning ``(key, value)`` or None for skipped lines."""
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None
    if "=" not in stripped:
        return None

    key, value = stripped.split("=", 1)
    key = key.strip()
    value = value.strip()
    if not key:
        return None

    # One matching pair only: "'x'" keeps its inner quotes
    if len(value) >= 2 and value[0] in _QUOTES and value[-1] == value[0]:
        value = value[1:-1]
    return key, value


def parse_overlay_text(text: str) -> dict[str, str]:
    """Parse override file content. Later lines win for repeated keys."""
    values: dict[str, str] = {}
    for line in text.splitlines():
        parsed = parse_overlay_line(line)
        if parsed is not None:
            key, value = parsed
            values[key] = value
    return values


def load_overlay_files(paths: Iterable[str | Path] = DEFAULT_OVERLAY_FILES) -> dict[str, str]:
    """
    Load override files in order and merge them.

    A later file's value wins over an earlier file's value for the same key.
    Files that are missing or unreadable are skipped; this stage never fails.

    Args:
        paths: Candidate file paths, in precedence order (lowest first)

    Returns:
        Merged key/value overlay
    """
    overlay: dict[str, str] = {}
    for candidate in paths:
        path = Path(candidate)
        try:
            # Undecodable bytes only spoil the lines they appear on
            text = path.read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError:
            logger.debug(f"Override file not found, skipping: {path}")
            continue
        except OSError as e:
            logger.debug(f"Override file unreadable, skipping: {path} ({e})")
            continue

        values = parse_overlay_text(text)
        overlay.update(values)
        logger.debug(f"Loaded {len(values)} override(s) from {path}")
    return overlay
