"""YAML configuration for the housetab CLI.

The file is optional.  It is located, in order of precedence, at:

1. the path given on the command line (``--config``),
2. ``$HOUSETAB_CONFIG_PATH``,
3. ``config.yaml`` under ``click.get_app_dir("housetab")``.

A missing file yields the defaults.  Example::

    version: 1
    storage:
      seed_path: ~/house/seed.yaml
    ui:
      undo_limit: 50
      show_deleted: false
      width: 120
      palette: ["#7c6ff7", "#3fa9c9", "#e5a50a", "#57b85c", "#d94f70"]
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import click
import yaml

from housetab.render.theme import DEFAULT_PALETTE
from housetab.undo.stack import DEFAULT_UNDO_LIMIT

logger = logging.getLogger(__name__)

APP_NAME = "housetab"
CONFIG_ENV_VAR = "HOUSETAB_CONFIG_PATH"
CONFIG_FILE_NAME = "config.yaml"
CONFIG_VERSION = 1

_SECTIONS: dict[str, frozenset[str]] = {
    "storage": frozenset({"seed_path"}),
    "ui": frozenset({"undo_limit", "show_deleted", "width", "palette"}),
}


class ConfigError(ValueError):
    """The configuration file is unreadable or malformed.

    Parameters
    ----------
    message:
        What is wrong.
    path:
        The offending file, if known.
    key:
        Dotted key of the offending value, e.g. ``"ui.undo_limit"``.
    """

    def __init__(self, message: str, path: Path | None = None, key: str | None = None) -> None:
        self.path = path
        self.key = key
        where = f"{path}: " if path is not None else ""
        what = f"{key}: " if key else ""
        super().__init__(f"{where}{what}{message}")


@dataclass(frozen=True)
class StorageSettings:
    seed_path: Path | None = None


@dataclass(frozen=True)
class UISettings:
    undo_limit: int = DEFAULT_UNDO_LIMIT
    show_deleted: bool = False
    width: int | None = None
    palette: tuple[str, ...] = DEFAULT_PALETTE


@dataclass(frozen=True)
class Settings:
    """Resolved configuration.

    ``source`` is the file the values came from, or ``None`` for defaults.
    """

    storage: StorageSettings = field(default_factory=StorageSettings)
    ui: UISettings = field(default_factory=UISettings)
    source: Path | None = None


def default_config_path() -> Path:
    return Path(click.get_app_dir(APP_NAME)) / CONFIG_FILE_NAME


def resolve_config_path(explicit: str | Path | None = None) -> Path:
    """Return the config path by precedence: explicit, environment, app dir."""
    if explicit:
        return Path(explicit).expanduser()
    from_env = os.environ.get(CONFIG_ENV_VAR)
    if from_env:
        return Path(from_env).expanduser()
    return default_config_path()


def load_settings(path: str | Path | None = None) -> Settings:
    """Load settings from the resolved config path.

    Raises
    ------
    ConfigError
        If the file exists but cannot be read or validated.  An explicitly
        requested file that does not exist is also an error.
    """
    resolved = resolve_config_path(path)
    if not resolved.exists():
        if path:
            raise ConfigError("file does not exist", resolved)
        logger.debug("No config at %s; using defaults", resolved)
        return Settings()
    try:
        text = resolved.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot read: {exc}", resolved) from exc
    settings = parse_settings(text, resolved)
    logger.debug("Loaded config from %s", resolved)
    return settings


def parse_settings(text: str, source: Path | None = None) -> Settings:
    """Parse and validate a YAML config document."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML: {exc}", source) from exc
    if data is None:
        return Settings(source=source)
    if not isinstance(data, dict):
        raise ConfigError("top level must be a mapping", source)

    version = data.get("version", CONFIG_VERSION)
    if version != CONFIG_VERSION:
        raise ConfigError(f"unsupported version {version!r}", source, "version")

    for name in data:
        if name != "version" and name not in _SECTIONS:
            raise ConfigError("unknown section", source, str(name))
    storage = _section(data, "storage", source)
    ui = _section(data, "ui", source)

    seed_path = storage.get("seed_path")
    if seed_path is not None and not isinstance(seed_path, str):
        raise ConfigError("must be a string", source, "storage.seed_path")

    return Settings(
        storage=StorageSettings(
            seed_path=Path(seed_path).expanduser() if seed_path else None,
        ),
        ui=UISettings(
            undo_limit=_positive_int(ui, "undo_limit", DEFAULT_UNDO_LIMIT, source),
            show_deleted=_bool(ui, "show_deleted", source),
            width=_optional_width(ui, source),
            palette=_palette(ui, source),
        ),
        source=source,
    )


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------


def _section(data: dict[str, Any], name: str, source: Path | None) -> dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError("must be a mapping", source, name)
    for key in section:
        if key not in _SECTIONS[name]:
            raise ConfigError("unknown key", source, f"{name}.{key}")
    return section


def _positive_int(ui: dict[str, Any], key: str, default: int, source: Path | None) -> int:
    value = ui.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigError(f"must be a positive integer, got {value!r}", source, f"ui.{key}")
    return value


def _bool(ui: dict[str, Any], key: str, source: Path | None) -> bool:
    value = ui.get(key, False)
    if not isinstance(value, bool):
        raise ConfigError(f"must be true or false, got {value!r}", source, f"ui.{key}")
    return value


def _optional_width(ui: dict[str, Any], source: Path | None) -> int | None:
    if ui.get("width") is None:
        return None
    return _positive_int(ui, "width", 0, source)


def _palette(ui: dict[str, Any], source: Path | None) -> tuple[str, ...]:
    value = ui.get("palette")
    if value is None:
        return DEFAULT_PALETTE
    if (
        not isinstance(value, list)
        or not value
        or not all(isinstance(color, str) and color for color in value)
    ):
        raise ConfigError("must be a non-empty list of colour strings", source, "ui.palette")
    return tuple(value)
