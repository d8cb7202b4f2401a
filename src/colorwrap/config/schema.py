"""Pydantic models for configuration schema."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

ColorMode = Literal["auto", "always", "never"]

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _parse_color_mode(v: Any) -> Any:
    """Accept YAML booleans as always/never."""
    if v is True:
        return "always"
    if v is False:
        return "never"
    if isinstance(v, str):
        return v.lower()
    return v


class GlobalConfig(BaseModel):
    """Global configuration options."""

    color: ColorMode = Field(default="auto", description="When to colorize: auto, always, never")
    wrappers_dir: Path = Field(
        default=Path("./wrappers"),
        description="Directory holding one rule file per wrapped program",
    )
    log_level: str = Field(default="WARNING", description="Logging level name")
    log_file: Path | None = Field(default=None, description="Optional log file path")

    @field_validator("color", mode="before")
    @classmethod
    def parse_color(cls, v: Any) -> Any:
        return _parse_color_mode(v)

    @field_validator("wrappers_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: Any) -> Any:
        """Expand ~ in paths."""
        if isinstance(v, str):
            return Path(os.path.expanduser(v))
        return v

    @field_validator("log_level")
    @classmethod
    def parse_log_level(cls, v: str) -> str:
        """Normalize and check the logging level name."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}")
        return level


class Program(BaseModel):
    """Per-program settings."""

    name: str = Field(description="Program name, e.g., 'ls'")
    aliases: list[str] = Field(default_factory=list, description="Other executable names")
    rules: Path | None = Field(default=None, description="Rule file for this program")
    color: ColorMode | None = Field(default=None, description="Color mode override")

    @field_validator("rules", mode="before")
    @classmethod
    def expand_rules_path(cls, v: Any) -> Any:
        """Expand ~ in the rule file path."""
        if isinstance(v, str):
            return Path(os.path.expanduser(v))
        return v

    @field_validator("color", mode="before")
    @classmethod
    def parse_color(cls, v: Any) -> Any:
        return _parse_color_mode(v)


class Config(BaseModel):
    """Top-level configuration."""

    config: GlobalConfig = Field(default_factory=GlobalConfig)
    programs: dict[str, Program] = Field(default_factory=dict)

    @field_validator("programs", mode="before")
    @classmethod
    def parse_programs(cls, v: dict[str, Any] | None) -> dict[str, Program]:
        """Parse program definitions."""
        result = {}
        for name, data in (v or {}).items():
            if isinstance(data, Program):
                result[name.lower()] = data
            elif isinstance(data, dict):
                result[name.lower()] = Program(name=name, **data)
            elif data is None:
                result[name.lower()] = Program(name=name)
        return result

    def get_program(self, name: str) -> Program | None:
        """Find program settings by name or alias."""
        exe_name = os.path.basename(name).lower()

        if exe_name in self.programs:
            return self.programs[exe_name]

        for program in self.programs.values():
            if exe_name in (alias.lower() for alias in program.aliases):
                return program

        return None

    def rules_path_for(self, name: str) -> Path:
        """Get the rule file for a program.

        An explicit ``rules`` entry wins; otherwise the file named after the
        program inside the wrappers directory is used.
        """
        program = self.get_program(name)
        if program and program.rules is not None:
            return program.rules
        return self.config.wrappers_dir / os.path.basename(name)

    def color_mode_for(self, name: str) -> ColorMode:
        """Get the color mode for a program."""
        program = self.get_program(name)
        if program and program.color is not None:
            return program.color
        return self.config.color
