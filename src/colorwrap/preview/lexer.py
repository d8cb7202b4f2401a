"""Lexer highlighting text with a rule set."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from prompt_toolkit.document import Document
from prompt_toolkit.formatted_text import StyleAndTextTuples
from prompt_toolkit.lexers import Lexer

from colorwrap.core.colorizer import colorize_fragments

if TYPE_CHECKING:
    from colorwrap.core.rules import RuleSet


class RuleLexer(Lexer):
    """Lexer applying highlight rules to every line of a document."""

    def __init__(self, rules: RuleSet) -> None:
        self.rules = rules

    def lex_document(self, document: Document) -> Callable[[int], StyleAndTextTuples]:
        """Lex a document and return a function that returns styled text for each line.

        Args:
            document: The document to lex

        Returns:
            Function that takes a line number and returns styled text tuples
        """
        lines = document.lines
        cache: dict[int, StyleAndTextTuples] = {}

        def get_line(line_number: int) -> StyleAndTextTuples:
            """Get styled text for a specific line."""
            if not 0 <= line_number < len(lines):
                return []
            if line_number not in cache:
                cache[line_number] = colorize_fragments(lines[line_number], self.rules)
            return cache[line_number]

        return get_line
