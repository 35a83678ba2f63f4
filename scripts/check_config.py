#!/usr/bin/env python3
"""
Check the Tasker configuration without starting the service.

Runs the full configuration pipeline against the current environment and
override files. Prints the effective configuration with secrets masked, or
every failing field path, and exits 1 on failure.

Usage:
    python scripts/check_config.py
    python scripts/check_config.py --env-file .env --env-file .env.local
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tasker.config import assemble_config  # noqa: E402
from tasker.config.environment import DEFAULT_ENV_PREFIX, DEFAULT_KEY_DELIMITER  # noqa: E402
from tasker.config.overlay import DEFAULT_OVERLAY_FILES  # noqa: E402
from tasker.config.populate import DEFAULT_LIST_DELIMITER  # noqa: E402
from tasker.logging_config import configure_logging  # noqa: E402


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Validate the Tasker service configuration")
    parser.add_argument(
        "--env-file",
        action="append",
        dest="env_files",
        help="Override file to load (repeatable, later files win). Defaults to .env and apps/backend/.env",
    )
    parser.add_argument("--prefix", default=DEFAULT_ENV_PREFIX, help="Environment variable prefix")
    parser.add_argument("--delimiter", default=DEFAULT_KEY_DELIMITER, help="Key hierarchy delimiter")
    parser.add_argument("--list-delimiter", default=DEFAULT_LIST_DELIMITER, help="Separator for list values")
    parser.add_argument("--quiet", action="store_true", help="Only report failures")
    parser.add_argument("--verbose", action="store_true", help="Log each pipeline step")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    # Logging shares stdout with the JSON dump
    configure_logging(source="config", level=logging.DEBUG if args.verbose else logging.WARNING)

    result = assemble_config(
        env_files=args.env_files or DEFAULT_OVERLAY_FILES,
        prefix=args.prefix,
        delimiter=args.delimiter,
        list_delimiter=args.list_delimiter,
    )

    if not result.ok:
        print(f"Configuration invalid ({len(result.failures)} field(s)):", file=sys.stderr)
        for failure in result.failures:
            print(f"  {failure.kind.value:<16} {failure}", file=sys.stderr)
        return 1

    if not args.quiet:
        print(json.dumps(result.unwrap().redacted(), indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":
    sys.exit(main())
