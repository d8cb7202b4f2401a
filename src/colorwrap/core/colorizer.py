"""Line colorization: match collection, overlap resolution and rendering."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from prompt_toolkit.formatted_text import StyleAndTextTuples

from colorwrap.core.color import AnsiStyler, Style, Styler

if TYPE_CHECKING:
    from colorwrap.core.rules import RuleSet

_DEFAULT_STYLER = AnsiStyler()


@dataclass(frozen=True)
class Match:
    """One occurrence of a rule's pattern within a line."""

    start: int
    end: int  # Exclusive
    rule_index: int

    @property
    def length(self) -> int:
        return self.end - self.start


def collect_matches(line: str, rules: RuleSet) -> list[Match]:
    """Find every occurrence of every rule's pattern in a line.

    Each pattern is scanned independently with a leftmost, non-overlapping
    search, so matches from different rules may overlap. Empty matches are
    dropped.
    """
    matches: list[Match] = []

    for rule_index, rule in enumerate(rules):
        for m in rule.pattern.finditer(line):
            start, end = m.span()
            if end > start:
                matches.append(Match(start=start, end=end, rule_index=rule_index))

    return matches


def _priority(match: Match) -> tuple[int, int, int]:
    return match.start, -match.length, match.rule_index


def resolve_overlaps(matches: list[Match]) -> list[Match]:
    """Select pairwise-disjoint matches, left to right.

    Matches are ordered by start, then longest first, then by rule order.
    A match is accepted only if it starts at or after the end of the
    previously accepted one; anything else is discarded entirely.
    """
    accepted: list[Match] = []
    last_end = 0

    for match in sorted(matches, key=_priority):
        if match.start >= last_end:
            accepted.append(match)
            last_end = match.end

    return accepted


def render(
    line: str,
    accepted: list[Match],
    rules: RuleSet,
    styler: Styler | None = None,
) -> str:
    """Build the output line from accepted, ordered, disjoint matches."""
    styler = styler or _DEFAULT_STYLER
    parts: list[str] = []
    cursor = 0

    for match in accepted:
        if match.start > cursor:
            parts.append(line[cursor : match.start])
        rule = rules[match.rule_index]
        parts.append(styler.style(line[match.start : match.end], rule.fg, rule.bg))
        cursor = match.end

    if cursor < len(line):
        parts.append(line[cursor:])

    return "".join(parts)


def colorize(
    line: str,
    rules: RuleSet,
    styling_enabled: bool,
    styler: Styler | None = None,
) -> str:
    """Highlight every rule match in a line.

    Args:
        line: Text line without its line terminator
        rules: Ordered rules to apply
        styling_enabled: When False the line is returned unchanged
        styler: How matched text gets wrapped (ANSI escapes by default)

    Returns:
        The styled line

    Examples:
        >>> from colorwrap.core.rules import parse_rules
        >>> rules = parse_rules("[fg:red]\\nERR").rules
        >>> colorize("ERR: disk full", rules, True)
        '\\x1b[31mERR\\x1b[0m: disk full'
    """
    if not styling_enabled or not rules:
        return line

    accepted = resolve_overlaps(collect_matches(line, rules))
    if not accepted:
        return line

    return render(line, accepted, rules, styler)


def colorize_fragments(line: str, rules: RuleSet) -> StyleAndTextTuples:
    """Highlight a line as prompt_toolkit formatted text fragments."""
    if not rules:
        return [("", line)] if line else []

    styled: StyleAndTextTuples = []
    cursor = 0

    for match in resolve_overlaps(collect_matches(line, rules)):
        if match.start > cursor:
            styled.append(("", line[cursor : match.start]))
        rule = rules[match.rule_index]
        styled.append(
            (Style(rule.fg, rule.bg).to_prompt_toolkit_style(), line[match.start : match.end])
        )
        cursor = match.end

    if cursor < len(line):
        styled.append(("", line[cursor:]))

    return styled
