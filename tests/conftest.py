"""Shared test fixtures for npm-dependents tests."""

import json
import sys
from pathlib import Path

import pytest

# Add src to path so tests run from a plain checkout
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


@pytest.fixture
def make_project(tmp_path):
    """Write package.json plus an optional lock artifact into a project dir."""

    def _make(manifest=None, package_lock=None, yarn_lock=None, name="project"):
        root = tmp_path / name
        root.mkdir()
        if manifest is not None:
            (root / "package.json").write_text(json.dumps(manifest), encoding="utf-8")
        if package_lock is not None:
            content = package_lock if isinstance(package_lock, str) else json.dumps(package_lock)
            (root / "package-lock.json").write_text(content, encoding="utf-8")
        if yarn_lock is not None:
            (root / "yarn.lock").write_text(yarn_lock, encoding="utf-8")
        return root

    return _make


@pytest.fixture(autouse=True)
def _no_settings_env(monkeypatch):
    monkeypatch.delenv("NPM_DEPENDENTS_CONFIG", raising=False)


@pytest.fixture
def express_lock_v2():
    """lockfileVersion 3: express -> accepts -> mime-types -> mime-db."""
    return {
        "name": "app",
        "version": "1.0.0",
        "lockfileVersion": 3,
        "packages": {
            "": {
                "name": "app",
                "version": "1.0.0",
                "dependencies": {"express": "^4.0.0"},
            },
            "node_modules/express": {
                "version": "4.18.2",
                "dependencies": {"accepts": "~1.3.8"},
            },
            "node_modules/accepts": {
                "version": "1.3.8",
                "dependencies": {"mime-types": "~2.1.34"},
            },
            "node_modules/mime-types": {
                "version": "2.1.35",
                "dependencies": {"mime-db": "1.52.0"},
            },
            "node_modules/mime-db": {"version": "1.52.0"},
        },
    }
