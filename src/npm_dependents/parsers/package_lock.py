"""Parse npm package-lock.json into requirement edges and resolved versions.

Supports npm v1 ("dependencies" tree, lockfileVersion 1) and v2+ ("packages"
map keyed by install path, lockfileVersion >= 2).

Resolved versions are kept per package name. When a name is installed at
several paths, the shallowest install wins, ties going to document order.
This reports the top-level copy rather than whichever occurrence comes last.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from ..errors import MalformedLockfile
from ..models import Edge, LockGraph

logger = logging.getLogger(__name__)

FORMAT_ID = "package-lock"
INSTALL_DIR_MARKER = "node_modules/"


class _VersionIndex:
    """Collapse per-path versions to one per name; shallowest install wins."""

    def __init__(self) -> None:
        self._entries: dict[str, tuple[int, str]] = {}

    def add(self, name: str, version: Any, depth: int) -> None:
        if not name or not isinstance(version, str) or not version:
            return
        current = self._entries.get(name)
        if current is None or depth < current[0]:
            self._entries[name] = (depth, version)

    def as_dict(self) -> dict[str, str]:
        return {name: version for name, (_, version) in self._entries.items()}


def _requirement_names(meta: dict[str, Any], key: str, source: str) -> list[str]:
    block = meta.get(key)
    if block is None:
        return []
    if not isinstance(block, dict):
        raise MalformedLockfile(source, f"'{key}' must be an object")
    return [str(name) for name in block if name]


def _parse_tree(data: dict[str, Any], source: str) -> tuple[list[Edge], dict[str, str]]:
    edges: list[Edge] = []
    versions = _VersionIndex()

    def walk(deps: Any, prefix: tuple[str, ...]) -> None:
        if deps is None:
            return
        if not isinstance(deps, dict):
            raise MalformedLockfile(source, "'dependencies' must be an object")
        for name, meta in deps.items():
            if not name or not isinstance(meta, dict):
                continue
            chain = prefix + (name,)
            versions.add(name, meta.get("version"), len(prefix))
            for child in _requirement_names(meta, "requires", source):
                edges.append(Edge(chain=chain, child=child))
            walk(meta.get("dependencies"), chain)

    walk(data.get("dependencies"), ())
    return edges, versions.as_dict()


def package_name_from_path(path: str, meta: dict[str, Any] | None = None) -> str:
    """Return the package name for a v2+ install path.

    ``node_modules/a/node_modules/@scope/b`` yields ``@scope/b``. Workspace
    paths without a ``node_modules`` segment fall back to the entry's ``name``
    field, then to the final path segment.
    """
    idx = path.rfind(INSTALL_DIR_MARKER)
    if idx >= 0:
        return path[idx + len(INSTALL_DIR_MARKER):]
    if meta and isinstance(meta.get("name"), str) and meta["name"]:
        return meta["name"]
    return path.rstrip("/").rsplit("/", 1)[-1]


def _parse_packages(
    data: dict[str, Any], source: str, include_optional: bool
) -> tuple[list[Edge], dict[str, str]]:
    packages = data.get("packages")
    if packages is None:
        return [], {}
    if not isinstance(packages, dict):
        raise MalformedLockfile(source, "'packages' must be an object")

    sections = ["dependencies"]
    if include_optional:
        sections.append("optionalDependencies")

    edges: list[Edge] = []
    versions = _VersionIndex()
    for path, meta in packages.items():
        # The "" key describes the project itself.
        if not path or not isinstance(meta, dict):
            continue
        name = package_name_from_path(path, meta)
        if not name:
            continue
        if not meta.get("link"):
            versions.add(name, meta.get("version"), path.count(INSTALL_DIR_MARKER))
        for section in sections:
            for child in _requirement_names(meta, section, source):
                edges.append(Edge(chain=(name,), child=child))
    return edges, versions.as_dict()


def parse_text(
    text: str, source: str = "package-lock.json", include_optional: bool = True
) -> LockGraph:
    """Normalise package-lock.json content into a LockGraph."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedLockfile(source, f"invalid JSON ({exc.msg})") from exc
    if not isinstance(data, dict):
        raise MalformedLockfile(source, "top-level value must be an object")

    lockfile_version = data.get("lockfileVersion", 1)
    if isinstance(lockfile_version, bool) or not isinstance(lockfile_version, int):
        raise MalformedLockfile(source, "'lockfileVersion' must be an integer")

    if lockfile_version >= 2:
        edges, versions = _parse_packages(data, source, include_optional)
    else:
        edges, versions = _parse_tree(data, source)

    logger.debug(
        "Parsed %s (lockfileVersion %d): %d edges, %d packages",
        source,
        lockfile_version,
        len(edges),
        len(versions),
    )
    return LockGraph(format_id=FORMAT_ID, source=source, edges=tuple(edges), versions=versions)

