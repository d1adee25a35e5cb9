"""Dependency chains built from first-level requirement edges.

A chain is a tuple of package names ``(a, b, ..., z)`` meaning ``a`` requires
(or installs beneath it) ``b`` which requires ... ``z``. The number of chains
grows exponentially wherever packages share dependencies, so a ``ChainSet``
only keeps the adjacency maps built once from the edges. Lookups walk
``requirers_of`` breadth-first; chains themselves are produced lazily.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from functools import cached_property
from collections.abc import Iterable, Iterator

from .models import Edge

logger = logging.getLogger(__name__)

Chain = tuple[str, ...]


def _links(edge: Edge) -> Iterator[tuple[str, str]]:
    # A nested copy is installed beneath every package of its chain.
    for parent, child in zip(edge.chain, edge.chain[1:]):
        yield parent, child
    yield edge.requirer, edge.child


def build_adjacency(edges: Iterable[Edge]) -> dict[str, tuple[str, ...]]:
    """Map each requiring package name to the names it requires, in edge order."""
    adjacency: dict[str, dict[str, None]] = defaultdict(dict)
    for edge in edges:
        for parent, child in _links(edge):
            adjacency[parent][child] = None
    return {name: tuple(children) for name, children in adjacency.items()}


@dataclass(frozen=True)
class ChainSet:
    """Closure of the requirement edges under chain extension."""

    edges: tuple[Edge, ...] = ()

    @cached_property
    def _requires(self) -> dict[str, tuple[str, ...]]:
        return build_adjacency(self.edges)

    @cached_property
    def _required_by(self) -> dict[str, frozenset[str]]:
        reverse: dict[str, set[str]] = defaultdict(set)
        for parent, children in self._requires.items():
            for child in children:
                reverse[child].add(parent)
        return {name: frozenset(parents) for name, parents in reverse.items()}

    def requires(self, name: str) -> tuple[str, ...]:
        """Return the names ``name`` directly requires."""
        return self._requires.get(name, ())

    def requirers_of(self, name: str) -> frozenset[str]:
        """Return the names that directly require ``name``."""
        return self._required_by.get(name, frozenset())

    def __contains__(self, chain: object) -> bool:
        if not isinstance(chain, tuple) or len(chain) < 2:
            return False
        if any(child not in self.requires(parent) for parent, child in zip(chain, chain[1:])):
            return False
        # Only a direct self-requirement may repeat a name.
        return len(set(chain)) == len(chain) or (len(chain) == 2 and chain[0] == chain[1])

    def __iter__(self) -> Iterator[Chain]:
        """Yield every chain in ascending order without materialising them.

        A chain is never extended with a package it already contains, so
        cyclic requirement data stops at the first repeat.
        """
        for start in sorted(self._requires):
            stack: list[tuple[Chain, Iterator[str]]] = [
                ((start,), iter(sorted(self.requires(start))))
            ]
            while stack:
                chain, children = stack[-1]
                child = next(children, None)
                if child is None:
                    stack.pop()
                    continue
                if child in chain:
                    if chain == (child,):
                        yield (child, child)
                    continue
                extended = chain + (child,)
                yield extended
                stack.append((extended, iter(sorted(self.requires(child)))))


def expand(edges: Iterable[Edge]) -> ChainSet:
    """Return the chain set reachable from the given first-level edges."""
    chain_set = ChainSet(edges=tuple(edges))
    logger.debug(
        "Indexed %d edges over %d requiring packages",
        len(chain_set.edges),
        len(chain_set._requires),
    )
    return chain_set
