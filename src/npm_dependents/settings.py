"""Settings loader.

Reads optional settings from a JSON file and validates it against
``schemas/settings.schema.json``. Every key is optional; anything omitted
keeps its built-in default.

Lookup order:
1. Explicit path argument (``--config``)
2. NPM_DEPENDENTS_CONFIG environment variable
3. ``.npm-dependents.json`` in the project directory
4. Built-in defaults
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from collections.abc import Iterable

from jsonschema import Draft202012Validator

from .errors import ConfigError
from .parsers import get_known_lockfiles
from .parsers.package_json import DEFAULT_SECTIONS

logger = logging.getLogger(__name__)

SCHEMA_DIR = Path(__file__).resolve().parent / "schemas"
SETTINGS_SCHEMA_PATH = SCHEMA_DIR / "settings.schema.json"
CONFIG_PATH_ENV_VAR = "NPM_DEPENDENTS_CONFIG"
PROJECT_CONFIG_NAME = ".npm-dependents.json"


@dataclass(slots=True, frozen=True)
class Settings:
    """Top-level settings container."""

    root_sections: tuple[str, ...] = DEFAULT_SECTIONS
    lockfiles: tuple[str, ...] = tuple(get_known_lockfiles())
    include_optional: bool = True
    source: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], source: str | None = None) -> Settings:
        defaults = cls()
        return cls(
            root_sections=tuple(data.get("rootSections", defaults.root_sections)),
            lockfiles=tuple(data.get("lockfiles", defaults.lockfiles)),
            include_optional=data.get("includeOptional", defaults.include_optional),
            source=source,
        )


def _load_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def _format_errors(errors: Iterable) -> str:
    messages = []
    for error in errors:
        pointer = "/".join(str(p) for p in error.path)
        messages.append(f"- {pointer or '<root>'}: {error.message}")
    return "\n".join(messages)


def validate_settings(document: Any) -> None:
    """Raise ConfigError when ``document`` does not match the settings schema."""
    validator = Draft202012Validator(_load_json(SETTINGS_SCHEMA_PATH))
    errors = sorted(validator.iter_errors(document), key=lambda e: [str(p) for p in e.path])
    if errors:
        raise ConfigError("Invalid settings:\n" + _format_errors(errors))


def _resolve_config_path(
    path: Path | str | None, project_root: Path | None
) -> tuple[Path | None, bool]:
    """Return the settings path to read and whether it must exist."""
    if path is not None:
        return Path(path), True

    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path), True

    if project_root is not None:
        candidate = project_root / PROJECT_CONFIG_NAME
        if candidate.is_file():
            return candidate, False

    return None, False


def load_settings(
    path: Path | str | None = None, project_root: Path | None = None
) -> Settings:
    """Load and validate settings.

    Args:
        path: Optional explicit settings file.
        project_root: Project directory searched for ``.npm-dependents.json``.

    Returns:
        A Settings object; defaults when no settings file applies.

    Raises:
        ConfigError: If a requested file is missing, unreadable or invalid.
    """
    config_path, required = _resolve_config_path(path, project_root)
    if config_path is None:
        logger.debug("No settings file, using defaults")
        return Settings()

    if required and not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        data = _load_json(config_path)
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in configuration file: {exc}") from exc

    validate_settings(data)
    logger.debug("Loaded settings from %s", config_path)
    return Settings.from_dict(data, source=str(config_path))
