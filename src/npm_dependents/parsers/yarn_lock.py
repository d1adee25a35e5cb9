"""Parse yarn.lock into requirement edges and resolved versions.

Handles the classic v1 syntax (``version "1.2.3"``) as well as the berry
syntax (``version: 1.2.3``). Each unindented line opens an entry for one or
more ``name@range`` selectors; its indented block carries the resolved
``version`` and an optional ``dependencies:`` sub-block.

Resolved versions are kept per package name. When several entries resolve
one name to different versions, the first entry in the file wins rather than
the last.
"""

from __future__ import annotations

import logging

from ..errors import MalformedLockfile
from ..models import Edge, LockGraph

logger = logging.getLogger(__name__)

FORMAT_ID = "yarn-lock"
METADATA_ENTRY = "__metadata"
PROJECT_WORKSPACE_RANGE = "@workspace:."
FIELD_INDENT = 2


def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value.strip("\"'")


def _split_field(content: str) -> tuple[str, str]:
    """Split ``key "value"``, ``key value`` or ``key: value`` into its parts."""
    if content.startswith('"'):
        end = content.find('"', 1)
        if end < 0:
            return _unquote(content), ""
        key, rest = content[1:end], content[end + 1:]
    else:
        cut = len(content)
        for sep in (" ", ":"):
            idx = content.find(sep)
            if 0 <= idx < cut:
                cut = idx
        key, rest = content[:cut], content[cut:]
    rest = rest.strip()
    if rest.startswith(":"):
        rest = rest[1:]
    return key, _unquote(rest)


def package_name_from_selector(selector: str) -> str:
    """Return the package name of a ``name@range`` selector.

    Scoped names keep their leading ``@``: ``@babel/core@^7.0.0`` yields
    ``@babel/core``. Returns "" when the selector has no range part.
    """
    selector = _unquote(selector)
    idx = selector.find("@", 1)
    if idx <= 0:
        return ""
    return selector[:idx]


def _clean_lines(text: str) -> list[str]:
    lines: list[str] = []
    for raw in text.splitlines():
        stripped = raw.strip()
        if not stripped or stripped.startswith("#"):
            continue
        lines.append(raw.rstrip())
    return lines


def _split_entries(lines: list[str], source: str) -> list[tuple[str, list[str]]]:
    entries: list[tuple[str, list[str]]] = []
    for lineno, line in enumerate(lines, start=1):
        if not line[0].isspace():
            if not line.endswith(":"):
                raise MalformedLockfile(source, f"unexpected entry header {line!r}")
            entries.append((line[:-1], []))
        elif not entries:
            raise MalformedLockfile(source, f"indented line {lineno} outside of an entry")
        else:
            entries[-1][1].append(line)
    return entries


def _parse_entry(
    header: str, body: list[str], sections: tuple[str, ...], source: str
) -> tuple[str, str | None, list[str]]:
    selector = header.split(",", 1)[0].strip()
    name = package_name_from_selector(selector)
    if not name:
        raise MalformedLockfile(source, f"cannot read package name from {header!r}")

    version: str | None = None
    children: list[str] = []
    block: str | None = None
    for line in body:
        indent = len(line) - len(line.lstrip())
        content = line.strip()
        key, value = _split_field(content)
        if indent <= FIELD_INDENT:
            block = None
            if not value and content.endswith(":"):
                block = key
            elif key == "version":
                version = value
        elif block in sections and key:
            children.append(key)
    return name, version, children


def parse_text(
    text: str, source: str = "yarn.lock", include_optional: bool = True
) -> LockGraph:
    """Normalise yarn.lock content into a LockGraph."""
    sections: tuple[str, ...] = ("dependencies",)
    if include_optional:
        sections += ("optionalDependencies",)

    edges: list[Edge] = []
    versions: dict[str, str] = {}
    for header, body in _split_entries(_clean_lines(text), source):
        if _unquote(header) == METADATA_ENTRY:
            continue
        # Berry lists the project itself as a workspace entry.
        if _unquote(header).endswith(PROJECT_WORKSPACE_RANGE):
            continue
        name, version, children = _parse_entry(header, body, sections, source)
        # Forked entries of one name collapse to the first resolved version.
        if version:
            versions.setdefault(name, version)
        edges.extend(Edge(chain=(name,), child=child) for child in children)

    logger.debug("Parsed %s: %d edges, %d packages", source, len(edges), len(versions))
    return LockGraph(format_id=FORMAT_ID, source=source, edges=tuple(edges), versions=versions)

