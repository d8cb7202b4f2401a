"""Running the wrapped program and colorizing its output line by line."""

from __future__ import annotations

import io
import logging
import subprocess
import sys
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from colorwrap.core.colorizer import colorize

if TYPE_CHECKING:
    from colorwrap.core.color import Styler
    from colorwrap.core.rules import RuleSet

LOGGER = logging.getLogger(__name__)


def strip_line_terminator(line: str) -> str:
    """Remove one trailing "\\n" or "\\r\\n"."""
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


def colorize_lines(
    lines: Iterable[str],
    rules: RuleSet,
    styling_enabled: bool,
    emit: Callable[[str], object],
    styler: Styler | None = None,
) -> int:
    """Colorize lines one at a time, in order.

    Reading stops at the end of the input or at the first read error;
    lines emitted before an error stay emitted.

    Args:
        lines: Source of text lines, with or without terminators
        rules: Ordered rules to apply
        styling_enabled: Whether highlighting is applied
        emit: Called with each rendered line (without terminator)
        styler: How matched text gets wrapped

    Returns:
        Number of lines emitted
    """
    count = 0
    iterator = iter(lines)

    while True:
        try:
            line = next(iterator)
        except StopIteration:
            break
        except (OSError, UnicodeDecodeError) as e:
            LOGGER.error("Error reading line from child process: %s", e)
            break

        emit(colorize(strip_line_terminator(line), rules, styling_enabled, styler))
        count += 1

    return count


def exit_status(returncode: int) -> int:
    """Map a subprocess return code to a shell-style exit status."""
    if returncode < 0:
        return 128 - returncode
    return returncode


def run_wrapped(
    executable: Path | str,
    args: list[str],
    rules: RuleSet,
    styling_enabled: bool,
    stdout: TextIO | None = None,
    styler: Styler | None = None,
) -> int:
    """Run a program and colorize its standard output.

    Standard input and standard error are inherited unchanged.

    Args:
        executable: Path to the real program
        args: Arguments passed to the program
        rules: Ordered rules to apply
        styling_enabled: Whether highlighting is applied
        stdout: Where rendered lines are written (default: sys.stdout)
        styler: How matched text gets wrapped

    Returns:
        The program's exit status (128 + signal number for signal deaths)
    """
    out = stdout if stdout is not None else sys.stdout

    def emit(text: str) -> None:
        out.write(text + "\n")
        out.flush()

    LOGGER.debug("Spawning %s %s", executable, args)
    process = subprocess.Popen(
        [str(executable), *args],
        stdout=subprocess.PIPE,
    )

    try:
        # Only "\n" ends a line; a lone "\r" is part of the line text
        with io.TextIOWrapper(
            process.stdout, encoding="utf-8", errors="replace", newline="\n"
        ) as lines:
            colorize_lines(lines, rules, styling_enabled, emit, styler)
    except BrokenPipeError:
        LOGGER.debug("Output closed by reader")
        process.wait()
        raise
    except KeyboardInterrupt:
        process.wait()
        return 130

    return exit_status(process.wait())
