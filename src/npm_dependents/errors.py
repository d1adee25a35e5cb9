"""Error hierarchy shared by the parsers, discovery and the CLI."""

from __future__ import annotations

from pathlib import Path


class DependentsError(RuntimeError):
    """Base error for failures that abort an analysis run."""

    exit_code = 1


class UsageError(DependentsError):
    """Raised when required arguments are missing."""

    exit_code = 2


class ProjectNotFound(DependentsError):
    """Raised when the project directory has no package.json."""

    exit_code = 3

    def __init__(self, root: Path) -> None:
        super().__init__(f"This is not an NPM project: no package.json in {root}")
        self.root = root


class LockfileMissing(DependentsError):
    """Raised when none of the supported lock artifacts is present."""

    exit_code = 4

    def __init__(self, root: Path, candidates: list[str]) -> None:
        names = ", ".join(candidates)
        super().__init__(
            f"Please install the node_modules: none of {names} found in {root}"
        )
        self.root = root
        self.candidates = candidates


class MalformedInput(DependentsError):
    """Raised when a project file cannot be parsed."""

    exit_code = 5
    kind = "file"

    def __init__(self, path: Path | str, reason: str) -> None:
        super().__init__(f"Malformed {self.kind} {path}: {reason}")
        self.path = Path(path)
        self.reason = reason


class MalformedLockfile(MalformedInput):
    """Raised when a package-lock.json or yarn.lock cannot be parsed."""

    kind = "lockfile"


class MalformedManifest(MalformedInput):
    """Raised when package.json cannot be parsed."""

    kind = "manifest"


class ConfigError(DependentsError):
    """Raised when the settings file cannot be loaded or is invalid."""

    exit_code = 6


class UnknownLockfileFormat(ValueError):
    """Raised when a lock format ID is not found in the registry."""
