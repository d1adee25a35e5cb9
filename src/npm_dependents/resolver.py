"""Reverse lookup: which declared dependencies pull in a given module."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .chains import ChainSet
from .models import ReverseResult

logger = logging.getLogger(__name__)


def resolve(target: str, chain_set: ChainSet, roots: Iterable[str]) -> ReverseResult:
    """Return the root dependencies and intermediate modules leading to ``target``.

    Walks the requirers of ``target`` breadth-first, so every package from
    which a chain reaches ``target`` is visited once. Members of ``roots`` are
    collected into ``main``; every other package visited ends up in ``depends``.
    """
    roots = frozenset(roots)
    found_roots: set[str] = set()
    queue: list[str] = [target]
    queued: set[str] = {target}

    i = 0
    while i < len(queue):
        name = queue[i]
        i += 1
        for parent in sorted(chain_set.requirers_of(name)):
            # A package never counts as depending on itself.
            if parent == name:
                continue
            if parent in roots:
                found_roots.add(parent)
            # Roots are searched too: a package requiring a root reaches the target.
            if parent not in queued:
                queued.add(parent)
                queue.append(parent)

    found_roots.discard(target)
    depends = [name for name in queue[1:] if name not in roots]
    result = ReverseResult.from_names(main=found_roots, depends=depends)
    logger.debug(
        "Resolved %s: %d direct, %d indirect dependents",
        target,
        len(result.main),
        len(result.depends),
    )
    return result
