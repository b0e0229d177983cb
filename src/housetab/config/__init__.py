"""Configuration sub-package."""
from __future__ import annotations

from housetab.config.settings import (
    CONFIG_ENV_VAR,
    ConfigError,
    Settings,
    StorageSettings,
    UISettings,
    default_config_path,
    load_settings,
    parse_settings,
    resolve_config_path,
)

__all__ = [
    "CONFIG_ENV_VAR",
    "ConfigError",
    "Settings",
    "StorageSettings",
    "UISettings",
    "default_config_path",
    "load_settings",
    "parse_settings",
    "resolve_config_path",
]
