"""Core functionality: rule parsing, colorization and process wrapping."""

from colorwrap.core.color import AnsiStyler, PlainStyler, Style, Styler, normalize_color
from colorwrap.core.colorizer import (
    Match,
    collect_matches,
    colorize,
    colorize_fragments,
    render,
    resolve_overlaps,
)
from colorwrap.core.programs import find_real_program, resolve_program, wrapped_program_name
from colorwrap.core.rules import Diagnostic, ParseResult, Rule, RuleSet, load_rules, parse_rules
from colorwrap.core.runner import colorize_lines, run_wrapped
from colorwrap.core.terminal import styling_enabled

__all__ = [
    "AnsiStyler",
    "PlainStyler",
    "Style",
    "Styler",
    "normalize_color",
    "Match",
    "collect_matches",
    "colorize",
    "colorize_fragments",
    "render",
    "resolve_overlaps",
    "find_real_program",
    "resolve_program",
    "wrapped_program_name",
    "Diagnostic",
    "ParseResult",
    "Rule",
    "RuleSet",
    "load_rules",
    "parse_rules",
    "colorize_lines",
    "run_wrapped",
    "styling_enabled",
]
