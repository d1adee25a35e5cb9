"""Tests for settings loading and schema validation."""

import json

import pytest

from npm_dependents.errors import ConfigError
from npm_dependents.settings import (
    CONFIG_PATH_ENV_VAR,
    PROJECT_CONFIG_NAME,
    Settings,
    load_settings,
)


def _write(path, data):
    path.write_text(json.dumps(data) if not isinstance(data, str) else data, encoding="utf-8")
    return path


def test_defaults_without_any_file(tmp_path):
    settings = load_settings(project_root=tmp_path)

    assert settings == Settings()
    assert settings.root_sections == ("dependencies", "devDependencies")
    assert settings.lockfiles == ("package-lock.json", "yarn.lock")
    assert settings.include_optional is True
    assert settings.source is None


def test_explicit_path(tmp_path):
    path = _write(
        tmp_path / "custom.json",
        {"rootSections": ["dependencies"], "lockfiles": ["yarn.lock"], "includeOptional": False},
    )

    settings = load_settings(path)

    assert settings.root_sections == ("dependencies",)
    assert settings.lockfiles == ("yarn.lock",)
    assert settings.include_optional is False
    assert settings.source == str(path)


def test_partial_file_keeps_defaults(tmp_path):
    _write(tmp_path / PROJECT_CONFIG_NAME, {"includeOptional": False})

    settings = load_settings(project_root=tmp_path)

    assert settings.include_optional is False
    assert settings.lockfiles == ("package-lock.json", "yarn.lock")


def test_environment_variable_overrides_project_file(tmp_path, monkeypatch):
    _write(tmp_path / PROJECT_CONFIG_NAME, {"lockfiles": ["package-lock.json"]})
    env_file = _write(tmp_path / "env.json", {"lockfiles": ["yarn.lock"]})
    monkeypatch.setenv(CONFIG_PATH_ENV_VAR, str(env_file))

    assert load_settings(project_root=tmp_path).lockfiles == ("yarn.lock",)


def test_missing_explicit_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_settings(tmp_path / "missing.json")


def test_invalid_json(tmp_path):
    path = _write(tmp_path / "bad.json", "{")

    with pytest.raises(ConfigError, match="Invalid JSON"):
        load_settings(path)


@pytest.mark.parametrize(
    "document",
    [
        {"lockfiles": ["pnpm-lock.yaml"]},
        {"rootSections": []},
        {"includeOptional": "yes"},
        {"unknownKey": 1},
        ["dependencies"],
    ],
)
def test_schema_violations(tmp_path, document):
    path = _write(tmp_path / "settings.json", document)

    with pytest.raises(ConfigError, match="Invalid settings"):
        load_settings(path)
