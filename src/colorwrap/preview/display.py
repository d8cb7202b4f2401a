"""Previewing and checking rule files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from prompt_toolkit import print_formatted_text
from prompt_toolkit.document import Document
from prompt_toolkit.formatted_text import FormattedText, StyleAndTextTuples

from colorwrap.core.rules import Diagnostic, load_rules
from colorwrap.preview.lexer import RuleLexer

if TYPE_CHECKING:
    from prompt_toolkit.output import Output

    from colorwrap.core.rules import RuleSet


def highlight_text(text: str, rules: RuleSet) -> StyleAndTextTuples:
    """Highlight multi-line text as formatted text fragments."""
    document = Document(text)
    get_line = RuleLexer(rules).lex_document(document)

    fragments: StyleAndTextTuples = []
    for line_number in range(document.line_count):
        if line_number:
            fragments.append(("", "\n"))
        fragments.extend(get_line(line_number))

    return fragments


def preview_text(text: str, rules: RuleSet, output: Output | None = None) -> None:
    """Print text with the rules applied, through prompt_toolkit.

    Args:
        text: Sample text, e.g. captured program output
        rules: Rules to try
        output: prompt_toolkit output (default: the terminal)
    """
    text = text[:-1] if text.endswith("\n") else text
    print_formatted_text(FormattedText(highlight_text(text, rules)), output=output)


def check_rules(path: Path | str) -> list[Diagnostic]:
    """Get the diagnostics of a rule file.

    Raises:
        FileNotFoundError: If the rule file does not exist
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Rule file not found: {path}")
    # Diagnostics are the result here, not something to log
    return load_rules(path, report_level=logging.DEBUG).diagnostics


def format_diagnostics(path: Path | str, diagnostics: list[Diagnostic]) -> str:
    """Format diagnostics one per line, compiler style."""
    return "\n".join(f"{path}:{d.line_number}: {d.kind}: {d.message}" for d in diagnostics)
