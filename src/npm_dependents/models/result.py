"""Result models produced by the reverse resolver and the core pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from collections.abc import Iterable

from .lock_graph import LockGraph
from .manifest import Manifest

_RANGE_PREFIXES = "^~="

STATUS_FOUND = "found"
STATUS_DIRECT_UNUSED = "direct-unused"
STATUS_UNUSED = "unused"
STATUS_NOT_FOUND = "not-found"


def _check_sorted_unique(label: str, names: tuple[str, ...]) -> None:
    if list(names) != sorted(set(names)):
        raise ValueError(f"{label} must be sorted and unique")


@dataclass(frozen=True)
class ReverseResult:
    """Direct (``main``) and intermediate (``depends``) dependents of a module."""

    main: tuple[str, ...] = ()
    depends: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        _check_sorted_unique("main", self.main)
        _check_sorted_unique("depends", self.depends)
        if set(self.main) & set(self.depends):
            raise ValueError("main and depends must be disjoint")

    def __bool__(self) -> bool:
        return bool(self.main or self.depends)

    @classmethod
    def from_names(cls, main: Iterable[str], depends: Iterable[str]) -> ReverseResult:
        return cls(main=tuple(sorted(set(main))), depends=tuple(sorted(set(depends))))


def strip_range(version: str) -> str:
    """Drop a leading range operator such as ``^`` or ``~`` from a version."""
    return version.lstrip(_RANGE_PREFIXES)


@dataclass(frozen=True)
class Analysis:
    """Everything needed to report on a single target module."""

    target: str
    manifest: Manifest
    lock: LockGraph
    result: ReverseResult

    @property
    def lock_format(self) -> str:
        return self.lock.format_id

    @property
    def is_direct(self) -> bool:
        return self.target in self.manifest

    @property
    def in_lockfile(self) -> bool:
        return self.target in self.lock.package_names

    @property
    def status(self) -> str:
        if self.result:
            return STATUS_FOUND
        if self.is_direct:
            return STATUS_DIRECT_UNUSED
        if self.in_lockfile:
            return STATUS_UNUSED
        return STATUS_NOT_FOUND

    @property
    def found(self) -> bool:
        return self.status != STATUS_NOT_FOUND

    def version_of(self, name: str) -> str:
        """Resolved version of ``name``, else its manifest range without operator."""
        resolved = self.lock.version_of(name)
        if resolved:
            return strip_range(resolved)
        declared = self.manifest.range_for(name)
        if declared:
            return strip_range(declared)
        return ""

    @property
    def target_version(self) -> str:
        return self.version_of(self.target)
