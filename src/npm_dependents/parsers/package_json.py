"""Parse package.json and extract the declared (direct) dependencies."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from collections.abc import Iterable

from ..errors import MalformedManifest
from ..models import Manifest

logger = logging.getLogger(__name__)

DEFAULT_SECTIONS = (
    "dependencies",
    "devDependencies",
)


def parse_text(
    text: str,
    source: str = "package.json",
    sections: Iterable[str] = DEFAULT_SECTIONS,
) -> Manifest:
    """Return the Manifest built from the given dependency sections.

    A name declared in several sections keeps the range of the first one.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedManifest(source, f"invalid JSON ({exc.msg})") from exc
    if not isinstance(data, dict):
        raise MalformedManifest(source, "top-level value must be an object")

    try:
        manifest = Manifest.from_sections(data, sections)
    except ValueError as exc:
        raise MalformedManifest(source, str(exc)) from exc

    logger.debug("Parsed %s: %d declared dependencies", source, len(manifest))
    return manifest


def parse(path: Path, sections: Iterable[str] = DEFAULT_SECTIONS) -> Manifest:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise MalformedManifest(path, str(exc)) from exc
    return parse_text(text, source=str(path), sections=sections)
