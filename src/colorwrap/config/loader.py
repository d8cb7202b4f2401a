"""Configuration loader with support for drop-in directories."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from colorwrap.config.schema import Config
from colorwrap.errors import ConfigError

LOGGER = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "colorwrap" / "config.yaml"
DEFAULT_DROPIN_DIR = Path.home() / ".config" / "colorwrap" / "conf.d"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        elif key in result and isinstance(result[key], list) and isinstance(value, list):
            # For lists, extend rather than replace
            result[key] = result[key] + value
        else:
            result[key] = value

    return result


def _parse_yaml(text: str, source: str) -> dict[str, Any]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {source}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping at the top of {source}")
    return data


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML file, returning empty dict if not found."""
    if not path.exists():
        return {}
    LOGGER.debug("Reading configuration from %s", path)
    with open(path, encoding="utf-8") as f:
        return _parse_yaml(f.read(), str(path))


def load_dropin_directory(dropin_dir: Path) -> dict[str, Any]:
    """Load and merge all YAML files from drop-in directory."""
    if not dropin_dir.is_dir():
        return {}

    result: dict[str, Any] = {}
    yaml_files = sorted(dropin_dir.glob("*.yaml")) + sorted(dropin_dir.glob("*.yml"))

    for yaml_file in yaml_files:
        data = load_yaml_file(yaml_file)
        result = deep_merge(result, data)

    return result


def _build_config(data: dict[str, Any], source: str) -> Config:
    try:
        return Config(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {source}: {e}") from e


def load_config(
    config_path: Path | str | None = None,
    dropin_dir: Path | str | None = None,
) -> Config:
    """Load configuration from file and drop-in directory.

    Args:
        config_path: Path to main config file (default: ~/.config/colorwrap/config.yaml)
        dropin_dir: Path to drop-in directory (default: ~/.config/colorwrap/conf.d/)

    Returns:
        Merged configuration object

    Raises:
        ConfigError: If a file is not valid YAML or does not match the schema
    """
    config_path = DEFAULT_CONFIG_PATH if config_path is None else Path(config_path)
    dropin_dir = DEFAULT_DROPIN_DIR if dropin_dir is None else Path(dropin_dir)

    try:
        main_config = load_yaml_file(config_path)
        dropin_config = load_dropin_directory(dropin_dir)
    except OSError as e:
        raise ConfigError(f"Cannot read configuration: {e}") from e

    merged_data = deep_merge(main_config, dropin_config)
    return _build_config(merged_data, str(config_path))


def load_config_from_string(yaml_string: str) -> Config:
    """Load configuration from a YAML string (useful for testing)."""
    return _build_config(_parse_yaml(yaml_string, "<string>"), "<string>")
