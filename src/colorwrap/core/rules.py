"""Rule file parsing into an ordered set of highlight rules.

A rule file is line oriented. A style declaration such as ``[fg:red, bg:black]``
is followed by exactly one pattern line holding a regular expression:

    # errors first
    [fg:red, bg:black]
    ERROR.*
    [fg:green]
    OK$

Blank lines and ``#`` comments are skipped everywhere.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from colorwrap.core.color import parse_style_spec

LOGGER = logging.getLogger(__name__)

MISSING_FG = "missing-fg"
PATTERN_WITHOUT_COLOR = "pattern-without-color"
INVALID_PATTERN = "invalid-pattern"


@dataclass(frozen=True)
class Rule:
    """A compiled pattern bound to a foreground and optional background color."""

    pattern: re.Pattern[str]
    fg: str
    bg: str | None = None
    line_number: int = 0


class RuleSet(Sequence[Rule]):
    """Ordered, immutable collection of rules.

    Order is the order of appearance in the rule source; earlier rules win
    ties during overlap resolution.
    """

    __slots__ = ("_rules",)

    def __init__(self, rules: Sequence[Rule] = ()) -> None:
        self._rules: tuple[Rule, ...] = tuple(rules)

    def __getitem__(self, index):  # type: ignore[override]
        if isinstance(index, slice):
            return RuleSet(self._rules[index])
        return self._rules[index]

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RuleSet):
            return self._rules == other._rules
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._rules)

    def __repr__(self) -> str:
        patterns = ", ".join(repr(rule.pattern.pattern) for rule in self._rules)
        return f"RuleSet([{patterns}])"


@dataclass(frozen=True)
class Diagnostic:
    """A non-fatal problem found while parsing a rule file."""

    line_number: int
    kind: str
    message: str
    text: str = ""

    def __str__(self) -> str:
        return f"line {self.line_number}: {self.message}"


@dataclass
class ParseResult:
    """Rules parsed from a rule source, with any diagnostics."""

    rules: RuleSet = field(default_factory=RuleSet)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.diagnostics


@dataclass(frozen=True)
class Idle:
    """Parser state: expecting a style declaration."""


@dataclass(frozen=True)
class AwaitingPattern:
    """Parser state: a declaration was read, its pattern line comes next."""

    fg: str
    bg: str | None
    line_number: int


ParserState = Idle | AwaitingPattern


def _style_declaration(line: str) -> str | None:
    """Return the inside of a ``[...]`` line, or None for any other line."""
    if line.startswith("[") and line.endswith("]") and len(line) >= 2:
        return line[1:-1]
    return None


class RuleParser:
    """Two-state parser turning rule file lines into rules."""

    def __init__(self, source: str = "<string>", report_level: int = logging.WARNING) -> None:
        """Initialize the parser.

        Args:
            source: Name of the rule source, used in log messages
            report_level: Logging level for diagnostics
        """
        self.source = source
        self.report_level = report_level
        self.state: ParserState = Idle()
        self.rules: list[Rule] = []
        self.diagnostics: list[Diagnostic] = []

    def _report(self, line_number: int, kind: str, message: str, text: str) -> None:
        diagnostic = Diagnostic(line_number=line_number, kind=kind, message=message, text=text)
        LOGGER.log(self.report_level, "%s:%s", self.source, diagnostic)
        self.diagnostics.append(diagnostic)

    def feed(self, line_number: int, line: str) -> None:
        """Process one trimmed, non-empty, non-comment line."""
        match self.state:
            case AwaitingPattern(fg=fg, bg=bg):
                self._compile(line_number, line, fg, bg)
                self.state = Idle()
            case Idle():
                spec = _style_declaration(line)
                if spec is None:
                    self._report(
                        line_number,
                        PATTERN_WITHOUT_COLOR,
                        f"pattern without preceding color: {line}",
                        line,
                    )
                    return

                fg, bg = parse_style_spec(spec)
                if fg is None:
                    self._report(
                        line_number,
                        MISSING_FG,
                        f"missing 'fg:' in color definition: {line}",
                        line,
                    )
                    return

                self.state = AwaitingPattern(fg=fg, bg=bg, line_number=line_number)

    def _compile(self, line_number: int, line: str, fg: str, bg: str | None) -> None:
        try:
            pattern = re.compile(line)
        except re.error as e:
            self._report(line_number, INVALID_PATTERN, f"invalid regex {line!r} ({e})", line)
            return
        self.rules.append(Rule(pattern=pattern, fg=fg, bg=bg, line_number=line_number))

    def finish(self) -> ParseResult:
        """Finish parsing and return the collected rules."""
        if isinstance(self.state, AwaitingPattern):
            LOGGER.debug(
                "Style declaration on line %d has no pattern line", self.state.line_number
            )
            self.state = Idle()
        return ParseResult(rules=RuleSet(self.rules), diagnostics=list(self.diagnostics))


def parse_rules(
    text: str,
    source: str = "<string>",
    report_level: int = logging.WARNING,
) -> ParseResult:
    """Parse rule file text.

    Args:
        text: Raw rule file contents
        source: Name of the rule source, used in log messages
        report_level: Logging level for diagnostics

    Returns:
        ParseResult with the ordered rules and any diagnostics
    """
    parser = RuleParser(source, report_level)

    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        parser.feed(line_number, line)

    return parser.finish()


def load_rules(path: Path | str, report_level: int = logging.WARNING) -> ParseResult:
    """Load and parse a rule file.

    An unreadable file yields an empty rule set, so highlighting is simply
    disabled.

    Args:
        path: Path to the rule file
        report_level: Logging level for diagnostics

    Returns:
        ParseResult with the ordered rules and any diagnostics
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        LOGGER.debug("Rule file %s unavailable: %s", path, e)
        return ParseResult()

    result = parse_rules(text, str(path), report_level)
    LOGGER.debug("Loaded %d rule(s) from %s", len(result.rules), path)
    return result
