"""Manifest model: the direct dependencies declared by package.json."""

from __future__ import annotations

from dataclasses import dataclass, field
from collections.abc import Iterable, Mapping


@dataclass(frozen=True)
class Manifest:
    """Declared dependency ranges keyed by package name."""

    dependencies: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if any(not name for name in self.dependencies):
            raise ValueError("Dependency names must be non-empty")

    @property
    def roots(self) -> frozenset[str]:
        return frozenset(self.dependencies)

    def __contains__(self, name: object) -> bool:
        return name in self.dependencies

    def __len__(self) -> int:
        return len(self.dependencies)

    def range_for(self, name: str) -> str | None:
        return self.dependencies.get(name)

    @classmethod
    def from_sections(
        cls, data: Mapping[str, object], sections: Iterable[str]
    ) -> Manifest:
        """Merge the given sections of a package.json document.

        Sections are merged in order and a name keeps the range of the first
        section that declares it.
        """
        merged: dict[str, str] = {}
        for section in sections:
            deps = data.get(section) or {}
            if not isinstance(deps, Mapping):
                raise ValueError(f"'{section}' must be an object")
            for name, version in deps.items():
                if not name:
                    continue
                merged.setdefault(str(name), str(version))
        return cls(dependencies=merged)
