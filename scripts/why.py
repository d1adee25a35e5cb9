#!/usr/bin/env python3
"""Local CLI entrypoint to run the reverse lookup from a source checkout.

Usage:
  python scripts/why.py [--json] [--config PATH] [-v] PROJECT_DIR MODULE

This calls the same main() as the installed ``npm-dependents`` command.
"""

from __future__ import annotations

from npm_dependents.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
