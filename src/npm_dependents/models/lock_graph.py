"""Normalised lockfile representation shared by every lock format."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Edge:
    """A requirement of ``child`` by the last package of ``chain``.

    ``chain`` is the install path of the requiring package: a single name for
    top-level packages, several names for copies nested beneath other packages.
    """

    chain: tuple[str, ...]
    child: str

    def __post_init__(self) -> None:
        if not self.chain:
            raise ValueError("Edge chain must be non-empty")
        if any(not name for name in self.chain):
            raise ValueError("Edge chain names must be non-empty")
        if not self.child:
            raise ValueError("Edge child must be non-empty")

    @property
    def requirer(self) -> str:
        return self.chain[-1]


@dataclass(frozen=True)
class LockGraph:
    """First-level requirement edges and resolved versions from one lockfile."""

    format_id: str
    source: str
    edges: tuple[Edge, ...] = ()
    versions: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.format_id:
            raise ValueError("format_id must be provided")

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    @property
    def package_names(self) -> frozenset[str]:
        names: set[str] = set(self.versions)
        for edge in self.edges:
            names.update(edge.chain)
            names.add(edge.child)
        return frozenset(names)

    def version_of(self, name: str) -> str | None:
        return self.versions.get(name)
