"""Lockfile handler registry.

Every supported lock artifact is normalised into the same ``LockGraph`` shape
so the rest of the pipeline is format-agnostic. The registry maps the lock
artifact filename to its handler; the format is chosen once, at load time.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from ..errors import MalformedLockfile, UnknownLockfileFormat
from ..models import LockGraph
from . import package_lock, yarn_lock


class ParseFunction(Protocol):
    def __call__(
        self, text: str, source: str = ..., include_optional: bool = ...
    ) -> LockGraph: ...


@dataclass(slots=True, frozen=True)
class LockfileHandler:
    """Handler binding a lock artifact filename to its parse function."""

    filename: str
    parse: ParseFunction


LOCKFILE_HANDLERS: dict[str, LockfileHandler] = {
    "package-lock.json": LockfileHandler(
        filename="package-lock.json",
        parse=package_lock.parse_text,
    ),
    "yarn.lock": LockfileHandler(
        filename="yarn.lock",
        parse=yarn_lock.parse_text,
    ),
}


def get_lockfile_handler(filename: str) -> LockfileHandler:
    """Return the handler for a lock artifact filename, or raise UnknownLockfileFormat."""
    handler = LOCKFILE_HANDLERS.get(filename)
    if handler is None:
        known = ", ".join(sorted(LOCKFILE_HANDLERS.keys()))
        raise UnknownLockfileFormat(
            f"Unsupported lockfile '{filename}'. Supported lockfiles: {known}"
        )
    return handler


def get_known_lockfiles() -> list[str]:
    """Return the registered lock artifact filenames in default priority order."""
    return list(LOCKFILE_HANDLERS.keys())


def normalize(
    text: str, filename: str, source: str | None = None, include_optional: bool = True
) -> LockGraph:
    """Normalise lockfile content using the handler registered for ``filename``."""
    handler = get_lockfile_handler(filename)
    return handler.parse(text, source=source or filename, include_optional=include_optional)


def load_lockfile(path: Path, include_optional: bool = True) -> LockGraph:
    """Read a lock artifact from disk and normalise it."""
    handler = get_lockfile_handler(path.name)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise MalformedLockfile(path, str(exc)) from exc
    return handler.parse(text, source=str(path), include_optional=include_optional)


__all__ = [
    "LOCKFILE_HANDLERS",
    "LockfileHandler",
    "get_known_lockfiles",
    "get_lockfile_handler",
    "load_lockfile",
    "normalize",
]
