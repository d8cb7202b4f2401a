"""Tests for the colorizer module."""

from colorwrap.core.color import ANSI_RESET
from colorwrap.core.colorizer import (
    Match,
    collect_matches,
    colorize,
    colorize_fragments,
    render,
    resolve_overlaps,
)
from colorwrap.core.rules import RuleSet, parse_rules


def rules_from(text: str) -> RuleSet:
    return parse_rules(text).rules


class TestPassthrough:
    """Tests for the unstyled paths."""

    def test_empty_rules(self):
        """Test that an empty rule set returns the line unchanged."""
        line = "ERR: disk full"

        assert colorize(line, RuleSet(), True) is line

    def test_styling_disabled(self, sample_rules):
        """Test that disabled styling returns the line unchanged."""
        line = "ERROR: 12ms WARNING OK"

        assert colorize(line, sample_rules, False) is line

    def test_no_matches(self, sample_rules):
        """Test that a line without matches comes back verbatim."""
        assert colorize("nothing to see", sample_rules, True) == "nothing to see"

    def test_empty_line(self, sample_rules):
        """Test an empty line."""
        assert colorize("", sample_rules, True) == ""


class TestColorize:
    """Tests for colorize function."""

    def test_scenario_error_prefix(self):
        """Test highlighting a single word in red."""
        rules = rules_from("[fg:red]\nERR")

        result = colorize("ERR: disk full", rules, True)

        assert result == f"\033[31mERR{ANSI_RESET}: disk full"

    def test_background(self):
        """Test that the background color is applied."""
        rules = rules_from("[fg:red, bg:black]\nERR")

        result = colorize("ERR", rules, True)

        assert result == f"\033[31;40mERR{ANSI_RESET}"

    def test_all_occurrences(self, marker_styler):
        """Test that every occurrence of a pattern is styled."""
        rules = rules_from("[fg:green]\nok")

        result = colorize("ok, ok and ok", rules, True, marker_styler)

        assert result == "<green>ok</>, <green>ok</> and <green>ok</>"

    def test_multiple_rules(self, sample_rules, marker_styler):
        """Test several rules on one line."""
        result = colorize("took 15ms, WARN then OK", sample_rules, True, marker_styler)

        assert result == "took <brightcyan>15ms</>, <yellow>WARN</> then <green>OK</>"

    def test_priority_tie_break(self, marker_styler):
        """Test that the earlier rule wins on an identical span."""
        rules = rules_from("[fg:red]\ncde\n[fg:blue]\nc.e")

        result = colorize("abcdefg", rules, True, marker_styler)

        assert result == "ab<red>cde</>fg"

    def test_longer_match_preferred(self, marker_styler):
        """Test that a longer match at the same start wins over rule order."""
        rules = rules_from("[fg:red]\nabc\n[fg:blue]\nabcde")

        result = colorize("abcdefg", rules, True, marker_styler)

        assert result == "<blue>abcde</>fg"

    def test_overlapping_later_match_discarded(self, marker_styler):
        """Test that a match overlapping an accepted one is dropped entirely."""
        rules = rules_from("[fg:red]\nabcd\n[fg:blue]\ncdef")

        result = colorize("abcdefg", rules, True, marker_styler)

        assert result == "<red>abcd</>efg"

    def test_earlier_start_wins_over_length(self, marker_styler):
        """Test that the leftmost match is accepted even if shorter."""
        rules = rules_from("[fg:red]\nab\n[fg:blue]\nbcdef")

        result = colorize("abcdefg", rules, True, marker_styler)

        assert result == "<red>ab</>cdefg"

    def test_adjacent_matches(self, marker_styler):
        """Test that touching spans are both accepted."""
        rules = rules_from("[fg:red]\nab\n[fg:blue]\ncd")

        result = colorize("abcd", rules, True, marker_styler)

        assert result == "<red>ab</><blue>cd</>"

    def test_unicode_text(self, marker_styler):
        """Test that multi-byte characters are never split."""
        rules = rules_from("[fg:yellow]\nwarnung: .")

        result = colorize("état warnung: ü fertig", rules, True, marker_styler)

        assert result == "état <yellow>warnung: ü</> fertig"

    def test_coverage(self, sample_rules, marker_styler, unstyle):
        """Test that removing styles gives back the input."""
        line = "ERROR 15ms WARNING: 3ms OK"

        result = colorize(line, sample_rules, True, marker_styler)

        assert unstyle(result) == line

    def test_output_not_shorter(self, sample_rules):
        """Test that output is never shorter than input."""
        line = "WARN 1ms"

        assert len(colorize(line, sample_rules, True)) >= len(line)


class TestCollectMatches:
    """Tests for collect_matches function."""

    def test_records_rule_index(self):
        """Test that matches remember the originating rule."""
        rules = rules_from("[fg:red]\na\n[fg:blue]\nb")

        matches = collect_matches("abab", rules)

        assert matches == [
            Match(0, 1, 0),
            Match(2, 3, 0),
            Match(1, 2, 1),
            Match(3, 4, 1),
        ]

    def test_non_overlapping_within_rule(self):
        """Test the leftmost non-overlapping scan per pattern."""
        rules = rules_from("[fg:red]\naa")

        matches = collect_matches("aaaaa", rules)

        assert [(m.start, m.end) for m in matches] == [(0, 2), (2, 4)]

    def test_empty_matches_dropped(self):
        """Test that zero-length matches are ignored."""
        rules = rules_from("[fg:red]\nx*")

        matches = collect_matches("abxxc", rules)

        assert [(m.start, m.end) for m in matches] == [(2, 4)]


class TestResolveOverlaps:
    """Tests for resolve_overlaps function."""

    def test_empty(self):
        """Test resolving no matches."""
        assert resolve_overlaps([]) == []

    def test_sorted_by_start(self):
        """Test that accepted matches come out left to right."""
        matches = [Match(5, 7, 0), Match(0, 2, 1)]

        assert resolve_overlaps(matches) == [Match(0, 2, 1), Match(5, 7, 0)]

    def test_tie_break_order(self):
        """Test start asc, length desc, rule index asc."""
        matches = [
            Match(2, 5, 1),
            Match(2, 5, 0),
            Match(2, 4, 0),
            Match(0, 1, 3),
        ]

        assert resolve_overlaps(matches) == [Match(0, 1, 3), Match(2, 5, 0)]

    def test_non_overlap(self):
        """Test that no two accepted matches share an offset."""
        matches = [Match(s, s + 3, i) for i, s in enumerate(range(0, 20, 2))]

        accepted = resolve_overlaps(matches)

        for left, right in zip(accepted, accepted[1:]):
            assert left.end <= right.start

    def test_rejected_not_retried(self):
        """Test that a rejected match is not trimmed to fit."""
        matches = [Match(0, 4, 0), Match(2, 8, 1), Match(8, 9, 2)]

        assert resolve_overlaps(matches) == [Match(0, 4, 0), Match(8, 9, 2)]


class TestRender:
    """Tests for render function."""

    def test_render_copies_gaps(self, marker_styler):
        """Test that unstyled text between spans is kept."""
        rules = rules_from("[fg:red]\nx\n[fg:blue, bg:white]\ny")

        result = render("-x-y-", [Match(1, 2, 0), Match(3, 4, 1)], rules, marker_styler)

        assert result == "-<red>x</>-<blue/white>y</>-"

    def test_render_default_styler(self):
        """Test that ANSI styling is the default."""
        rules = rules_from("[fg:brightred]\nx")

        assert render("x", [Match(0, 1, 0)], rules) == f"\033[91mx{ANSI_RESET}"


class TestColorizeFragments:
    """Tests for colorize_fragments function."""

    def test_fragments(self):
        """Test formatted text fragments for a line."""
        rules = rules_from("[fg:red, bg:black]\nERR")

        fragments = colorize_fragments("ERR: disk full", rules)

        assert fragments == [
            ("ansired bg:ansiblack", "ERR"),
            ("", ": disk full"),
        ]

    def test_fragments_no_rules(self):
        """Test fragments without rules."""
        assert colorize_fragments("plain", RuleSet()) == [("", "plain")]
        assert colorize_fragments("", RuleSet()) == []
