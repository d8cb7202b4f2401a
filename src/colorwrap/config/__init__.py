"""Configuration loading and schema definitions."""

from colorwrap.config.loader import load_config, load_config_from_string
from colorwrap.config.schema import Config, GlobalConfig, Program

__all__ = [
    "Config",
    "GlobalConfig",
    "Program",
    "load_config",
    "load_config_from_string",
]
