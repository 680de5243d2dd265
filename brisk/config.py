# Brisk CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Configuration file loading for Brisk applications.

Configuration is one of the sources a flag can take its value from: it ranks
below the command line and the environment and above the flag's default. Values
are looked up by flag name (or dest).

Files are YAML (`.yaml`, `.yml`) or TOML (`.toml`). Nested tables are flattened
to dotted keys, so

    server:
      port: 8080

provides the key `server.port`. A missing file is an empty configuration.

The default location is `$XDG_CONFIG_HOME/<app>/config.yaml`, falling back to
`~/.config/<app>/config.yaml`.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping

import toml
import yaml

from brisk.exceptions import ConfigError
from brisk.logger import logger

SUPPORTED_SUFFIXES = (".yaml", ".yml", ".toml")


def config_dir(app_name: str) -> Path:
    """Directory holding the application's configuration. Not created here."""
    xdg = os.getenv("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / app_name
    return Path.home() / ".config" / app_name


def config_file(app_name: str) -> Path:
    return config_dir(app_name) / "config.yaml"


def flatten(data: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    """Flatten nested mappings into dotted keys."""
    flat: dict[str, Any] = {}
    for key, value in data.items():
        dotted = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(flatten(value, dotted))
        else:
            flat[dotted] = value
    return flat


def load_config(file_path: Path | str) -> dict[str, Any]:
    """
    Load a YAML or TOML configuration file into a flat mapping.

    Args:
        file_path (Path | str): Path to the config file.

    Returns:
        dict[str, Any]: Values keyed by dotted name. Empty if the file is missing.

    Raises:
        ConfigError: If the format is unsupported, the file cannot be parsed, or
            the document is not a mapping.
    """
    if not isinstance(file_path, (str, Path)):
        raise TypeError("file_path must be a string or Path object.")
    path = Path(file_path)
    if not path.is_file():
        logger.debug("No config file at %s", path)
        return {}

    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ConfigError(f"Unsupported config format: {suffix}")
    try:
        with path.open("r", encoding="UTF-8") as config_file:
            if suffix in (".yaml", ".yml"):
                raw_config = yaml.safe_load(config_file)
            else:
                raw_config = toml.load(config_file)
    except (yaml.YAMLError, toml.TomlDecodeError) as error:
        raise ConfigError(f"Could not parse {path}: {error}") from error

    if raw_config is None:
        return {}
    if not isinstance(raw_config, dict):
        raise ConfigError(
            f"Configuration file {path} must contain a mapping of keys to values.\n"
            "Example:\n"
            "port: 8080\n"
            "log-level: debug"
        )
    logger.debug("Loaded %d config values from %s", len(raw_config), path)
    return flatten(raw_config)


class ConfigStore:
    """
    Flat key/value configuration backed by a YAML or TOML file.

    Methods:
        load(): Read the file, replacing current values.
        get(), set(), delete(): Manipulate single keys.
        values(): Copy of all values.
        save(): Write values back, atomically.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._values: dict[str, Any] = {}

    def load(self) -> ConfigStore:
        self._values = load_config(self.path)
        return self

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value

    def delete(self, key: str) -> bool:
        return self._values.pop(key, None) is not None

    def reset(self) -> None:
        self._values.clear()

    def values(self) -> dict[str, Any]:
        return dict(self._values)

    def save(self) -> None:
        suffix = self.path.suffix.lower()
        if suffix not in SUPPORTED_SUFFIXES:
            raise ConfigError(f"Unsupported config format: {suffix}")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = dict(sorted(self._values.items()))
        tmp = self.path.with_name(f"{self.path.name}.tmp")
        with tmp.open("w", encoding="UTF-8") as config_file:
            if suffix == ".toml":
                toml.dump(data, config_file)
            else:
                yaml.safe_dump(data, config_file, default_flow_style=False)
        tmp.replace(self.path)
        logger.debug("Saved %d config values to %s", len(data), self.path)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)
