"""ANSI color names and styling of matched text."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

# Standard ANSI color names
COLORS = {
    "black": 0,
    "red": 1,
    "green": 2,
    "yellow": 3,
    "blue": 4,
    "magenta": 5,
    "cyan": 6,
    "white": 7,
}

# Bright color variants
BRIGHT_COLORS = {
    "brightred": 9,
    "brightgreen": 10,
    "brightyellow": 11,
    "brightblue": 12,
    "brightmagenta": 13,
    "brightcyan": 14,
    "brightwhite": 15,
}

DEFAULT_COLOR = "white"

ANSI_RESET = "\033[0m"


def normalize_color(name: str) -> str:
    """Map a color name to its canonical form.

    Names are case-insensitive and "bright red" is accepted for "brightred".
    Unknown names fall back to white.

    Examples:
        >>> normalize_color("Red")
        'red'
        >>> normalize_color("bright cyan")
        'brightcyan'
        >>> normalize_color("orange")
        'white'
        >>> normalize_color("re d")
        'white'
    """
    color = name.strip().lower()
    if color.startswith("bright "):
        color = "bright" + color[len("bright ") :].lstrip()
    if color in COLORS or color in BRIGHT_COLORS:
        return color
    return DEFAULT_COLOR


def _color_number(color: str) -> int:
    if color in COLORS:
        return COLORS[color]
    return BRIGHT_COLORS.get(color, COLORS[DEFAULT_COLOR])


@dataclass(frozen=True)
class Style:
    """Foreground color with an optional background color.

    Attributes:
        fg: Canonical foreground color name
        bg: Canonical background color name, or None
    """

    fg: str = DEFAULT_COLOR
    bg: str | None = None

    def _color_to_code(self, color: str, foreground: bool) -> int:
        """Convert color to ANSI code."""
        number = _color_number(color)
        if number >= 8:
            return (90 if foreground else 100) + (number - 8)
        return (30 if foreground else 40) + number

    def to_ansi(self) -> str:
        """Convert to ANSI escape sequence."""
        codes = [self._color_to_code(self.fg, foreground=True)]
        if self.bg is not None:
            codes.append(self._color_to_code(self.bg, foreground=False))
        return f"\033[{';'.join(str(c) for c in codes)}m"

    def to_prompt_toolkit_style(self) -> str:
        """Convert to prompt_toolkit style string."""
        parts = [f"ansi{self.fg}"]
        if self.bg is not None:
            parts.append(f"bg:ansi{self.bg}")
        return " ".join(parts)


class Styler(Protocol):
    """Wraps a piece of text in foreground/background styling."""

    def style(self, text: str, fg: str, bg: str | None = None) -> str: ...


class AnsiStyler:
    """Styler emitting ANSI SGR escape sequences."""

    def style(self, text: str, fg: str, bg: str | None = None) -> str:
        return f"{Style(fg, bg).to_ansi()}{text}{ANSI_RESET}"


class PlainStyler:
    """Styler that leaves text untouched."""

    def style(self, text: str, fg: str, bg: str | None = None) -> str:
        return text


def parse_style_spec(spec: str) -> tuple[str | None, str | None]:
    """Parse the inside of a style declaration.

    Args:
        spec: Comma-separated key:value tokens like "fg:red, bg:black"

    Returns:
        Tuple of (fg, bg) canonical color names, None where the key is absent

    Examples:
        >>> parse_style_spec("fg:red, bg:black")
        ('red', 'black')
        >>> parse_style_spec("bg:blue")
        (None, 'blue')
    """
    fg: str | None = None
    bg: str | None = None

    for part in spec.split(","):
        key, sep, value = part.strip().partition(":")
        if not sep:
            continue
        key = key.strip().lower()
        if key == "fg":
            fg = normalize_color(value)
        elif key == "bg":
            bg = normalize_color(value)

    return fg, bg
