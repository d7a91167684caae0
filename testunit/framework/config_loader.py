"""
================================================================================
Configuration Loader
================================================================================

Settings for the runner, resolved from three layers (highest priority first):

    1. Environment variables: TESTUNIT_<SECTION>_<KEY>
       (TESTUNIT_LOGGING_LEVEL overrides logging.level)
    2. YAML configuration file (config/config.yaml by default)
    3. Built-in defaults (DEFAULTS below)

Settings are two levels deep: a section ("logging", "report") holding keys.
Environment values are strings and are converted to the type of the value
they replace.

================================================================================
"""

from __future__ import annotations

import copy
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger


DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "config.yaml"

ENV_PREFIX = "TESTUNIT_"

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "logging": {
        "level": "INFO",
        "rotation": "10 MB",
        "retention": "7 days",
    },
    "report": {
        "allure": True,
        "json_indent": 2,
    },
}

_TRUE_VALUES = ("true", "1", "yes", "on")


class ConfigurationError(Exception):
    """Raised when the configuration file cannot be used."""
    pass


def env_name(section: str, key: str) -> str:
    """Environment variable overriding ``section.key``."""
    return f"{ENV_PREFIX}{section}_{key}".upper()


def coerce(raw: str, reference: Any) -> Any:
    """
    Convert an environment string to the type of ``reference``.

    Values that cannot be converted are returned unchanged.
    """
    if isinstance(reference, bool):
        return raw.strip().lower() in _TRUE_VALUES
    for kind in (int, float):
        if isinstance(reference, kind):
            try:
                return kind(raw)
            except ValueError:
                return raw
    return raw


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


class ConfigLoader:
    """
    Process-wide configuration.

    The first instantiation fixes the file path; later ``ConfigLoader()``
    calls return the same object until reset() is called.

    Usage:
        >>> config = ConfigLoader()
        >>> config.get("report.json_indent")
        2
        >>> config.get_section("logging")["level"]
        'INFO'
    """

    _instance: Optional["ConfigLoader"] = None

    def __new__(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._initialized = False
            cls._instance = instance
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None) -> None:
        if self._initialized:
            return

        self._config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._settings: Dict[str, Any] = {}
        self._load_config()
        self._initialized = True

    @property
    def config_path(self) -> Path:
        return self._config_path

    def _read_file(self) -> Dict[str, Any]:
        if not self._config_path.exists():
            logger.debug(f"No configuration file at {self._config_path}, using defaults")
            return {}

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file {self._config_path}: {e}"
            ) from e

        if loaded is None:
            return {}
        if not isinstance(loaded, dict):
            raise ConfigurationError(
                f"Configuration file {self._config_path} must contain a mapping, "
                f"got {type(loaded).__name__}"
            )
        logger.debug(f"Loaded configuration from: {self._config_path}")
        return loaded

    def _load_config(self) -> None:
        self._settings = _deep_merge(DEFAULTS, self._read_file())

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a setting by dot-notation path.

        Args:
            key: "section.key" path (e.g., "logging.level")
            default: Returned when no layer defines the key

        Returns:
            Setting value, with any environment override applied
        """
        section, _, name = key.partition(".")
        if not name:
            value = self._settings.get(section)
            return default if value is None else copy.deepcopy(value)

        value = self.get_section(section).get(name)
        if value is None:
            return default
        # undeclared keys arrive from the environment as plain strings
        if isinstance(value, str) and default is not None and not isinstance(default, str):
            return coerce(value, default)
        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Get every setting in a section, environment overrides included.

        Environment variables named TESTUNIT_<SECTION>_<KEY> add or replace
        keys in the returned dictionary.

        Args:
            section: Section name (e.g., "logging", "report")

        Returns:
            New dictionary; empty if nothing defines the section
        """
        values = self._settings.get(section)
        merged: Dict[str, Any] = copy.deepcopy(values) if isinstance(values, dict) else {}

        prefix = env_name(section, "")
        for var, raw in os.environ.items():
            if not var.startswith(prefix) or var == prefix:
                continue
            key = var[len(prefix):].lower()
            merged[key] = coerce(raw, merged.get(key))

        return merged

    def reload(self) -> None:
        """Re-read the configuration file."""
        self._load_config()
        logger.info(f"Configuration reloaded from: {self._config_path}")

    @classmethod
    def reset(cls) -> None:
        """Forget the current instance; the next ConfigLoader() reloads."""
        cls._instance = None


__all__ = [
    "DEFAULTS",
    "ConfigLoader",
    "ConfigurationError",
    "coerce",
    "env_name",
]
