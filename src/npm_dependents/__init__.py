"""npm-dependents core package.

Reverse dependency lookup for npm projects: given package.json and a lock
artifact (package-lock.json or yarn.lock), report which declared dependencies
transitively require a module.
"""

from .core import analyze, analyze_project, find_dependents

__all__ = [
    "analyze",
    "analyze_project",
    "find_dependents",
]
