"""Core analysis entrypoints.

``find_dependents`` and ``analyze`` are pure: they work on already parsed data
and never touch the filesystem. ``analyze_project`` adds discovery and file
reads around them.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .chains import expand
from .discovery import locate_project
from .models import Analysis, LockGraph, Manifest, ReverseResult
from .parsers import load_lockfile
from .parsers import package_json
from .resolver import resolve
from .settings import Settings, load_settings

logger = logging.getLogger(__name__)


def find_dependents(manifest: Manifest, lock: LockGraph, target: str) -> ReverseResult:
    """Return the declared and intermediate modules that pull in ``target``."""
    return resolve(target, expand(lock.edges), manifest.roots)


def analyze(manifest: Manifest, lock: LockGraph, target: str) -> Analysis:
    """Run the reverse lookup for ``target`` and keep the data needed to report it."""
    result = find_dependents(manifest, lock, target)
    return Analysis(target=target, manifest=manifest, lock=lock, result=result)


def analyze_project(
    root: Path,
    target: str,
    settings: Settings | None = None,
) -> Analysis:
    """Analyse the project at ``root`` for modules depending on ``target``.

    Params:
        root: project directory holding package.json and a lock artifact
        target: module name to look up
        settings: optional settings; when None they are loaded from the
            environment or the project's ``.npm-dependents.json``

    Raises: ProjectNotFound, LockfileMissing, MalformedManifest,
        MalformedLockfile, ConfigError
    """
    if settings is None:
        settings = load_settings(project_root=root)

    files = locate_project(root, settings.lockfiles)
    manifest = package_json.parse(files.manifest, sections=settings.root_sections)
    lock = load_lockfile(files.lockfile, include_optional=settings.include_optional)
    logger.debug(
        "Analysing %s with %d declared dependencies and %d edges",
        files.root,
        len(manifest),
        lock.edge_count,
    )
    return analyze(manifest, lock, target)
