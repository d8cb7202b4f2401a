"""Pytest configuration and fixtures."""

import re

import pytest

from colorwrap.config.loader import load_config_from_string
from colorwrap.config.schema import Config
from colorwrap.core.rules import RuleSet, parse_rules


class MarkerStyler:
    """Styler producing readable markers instead of escape sequences."""

    def style(self, text: str, fg: str, bg: str | None = None) -> str:
        if bg is None:
            return f"<{fg}>{text}</>"
        return f"<{fg}/{bg}>{text}</>"


MARKER_RE = re.compile(r"<[a-z]+(?:/[a-z]+)?>|</>")


def strip_markers(text: str) -> str:
    """Remove MarkerStyler markers."""
    return MARKER_RE.sub("", text)


@pytest.fixture
def marker_styler() -> MarkerStyler:
    """Styler that wraps text in <fg/bg>...</> markers."""
    return MarkerStyler()


@pytest.fixture
def unstyle():
    """Function removing MarkerStyler markers from text."""
    return strip_markers


@pytest.fixture
def sample_rules_text() -> str:
    """Sample rule file contents."""
    return """
# Build output highlighting
[fg:red, bg:black]
ERROR.*

[fg:yellow]
WARN(ING)?
[fg:green]
OK$
[fg:BrightCyan]
\\d+ms
"""


@pytest.fixture
def sample_rules(sample_rules_text: str) -> RuleSet:
    """Rules parsed from sample_rules_text."""
    return parse_rules(sample_rules_text).rules


@pytest.fixture
def sample_config() -> Config:
    """Sample configuration for testing."""
    yaml_content = """
config:
  color: auto
  wrappers_dir: /opt/colorwrap/wrappers
  log_level: info

programs:
  make:
    aliases:
      - gmake
    rules: /etc/colorwrap/make.rules
    color: always
  ls:
    color: never
"""
    return load_config_from_string(yaml_content)


@pytest.fixture
def empty_config() -> Config:
    """Empty configuration for testing."""
    return Config()
