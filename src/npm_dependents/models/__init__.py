"""Data models for lockfile normalisation and reverse dependency lookups."""

from __future__ import annotations

from .lock_graph import Edge, LockGraph
from .manifest import Manifest
from .result import (
    Analysis,
    ReverseResult,
    STATUS_DIRECT_UNUSED,
    STATUS_FOUND,
    STATUS_NOT_FOUND,
    STATUS_UNUSED,
    strip_range,
)

__all__ = [
    "Analysis",
    "Edge",
    "LockGraph",
    "Manifest",
    "ReverseResult",
    "STATUS_DIRECT_UNUSED",
    "STATUS_FOUND",
    "STATUS_NOT_FOUND",
    "STATUS_UNUSED",
    "strip_range",
]
