"""Command line entrypoint: find which dependencies pull in a module.

Usage:
  npm-dependents [--json] [--config PATH] [-v] PROJECT_DIR MODULE
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .core import analyze_project
from .errors import DependentsError, UsageError
from .report import aggregate
from .settings import load_settings
from .summary import render_summary

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="npm-dependents",
        description="Show which dependencies (directly or transitively) require a module.",
    )
    parser.add_argument(
        "project",
        nargs="?",
        type=Path,
        help="Directory holding package.json and package-lock.json or yarn.lock",
    )
    parser.add_argument("module", nargs="?", help="Name of the module to look up")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the report as JSON instead of text",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a settings JSON file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output to stderr",
    )
    return parser.parse_args(argv)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    _configure_logging(args.verbose)

    try:
        if args.project is None or not args.module:
            raise UsageError("PROJECT_DIR and MODULE are required")
        settings = load_settings(args.config, project_root=args.project)
        analysis = analyze_project(args.project, args.module, settings)
    except DependentsError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return exc.exit_code

    if args.json:
        print(json.dumps(aggregate(analysis), indent=2))
    else:
        sys.stdout.write(render_summary(analysis))
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
