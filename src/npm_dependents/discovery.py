"""Locate the manifest and lock artifact of a project directory."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from collections.abc import Iterable

from .errors import LockfileMissing, ProjectNotFound
from .parsers import get_known_lockfiles, get_lockfile_handler

logger = logging.getLogger(__name__)

MANIFEST_NAME = "package.json"


@dataclass(slots=True, frozen=True)
class ProjectFiles:
    """Files an analysis reads from a project directory."""

    root: Path
    manifest: Path
    lockfile: Path

    @property
    def lockfile_name(self) -> str:
        return self.lockfile.name


def locate_project(root: Path, lockfiles: Iterable[str] | None = None) -> ProjectFiles:
    """Find package.json and the first lock artifact present, in priority order.

    Raises:
        ProjectNotFound: If ``root`` has no package.json.
        LockfileMissing: If none of the lock artifacts exists.
    """
    root = root.resolve()
    manifest = root / MANIFEST_NAME
    if not manifest.is_file():
        raise ProjectNotFound(root)

    candidates = list(lockfiles) if lockfiles is not None else get_known_lockfiles()
    for name in candidates:
        path = root / get_lockfile_handler(name).filename
        if path.is_file():
            logger.debug("Using lockfile %s", path)
            return ProjectFiles(root=root, manifest=manifest, lockfile=path)

    raise LockfileMissing(root, candidates)
