"""Trying rule files against sample text."""

from colorwrap.preview.display import check_rules, format_diagnostics, highlight_text, preview_text
from colorwrap.preview.lexer import RuleLexer

__all__ = [
    "RuleLexer",
    "check_rules",
    "format_diagnostics",
    "highlight_text",
    "preview_text",
]
