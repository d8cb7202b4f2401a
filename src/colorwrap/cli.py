"""Command-line interface for colorwrap."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from colorwrap import __version__
from colorwrap.config.loader import load_config
from colorwrap.core.programs import resolve_program, wrapped_program_name
from colorwrap.core.rules import load_rules
from colorwrap.core.runner import run_wrapped
from colorwrap.core.terminal import COLOR_MODES, styling_enabled
from colorwrap.errors import ColorwrapError
from colorwrap.log import configure_logging
from colorwrap.preview.display import check_rules, format_diagnostics, preview_text

LOGGER = logging.getLogger(__name__)


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        args: Arguments to parse (defaults to sys.argv[1:])

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog="colorwrap",
        description="Run a program and highlight its output with regex color rules",
        epilog="Example: colorwrap --rules wrappers/make make -j8",
    )

    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        metavar="FILE",
        help="Configuration file path (default: ~/.config/colorwrap/config.yaml)",
    )

    parser.add_argument(
        "--config-dir",
        type=Path,
        metavar="DIR",
        help="Drop-in configuration directory (default: ~/.config/colorwrap/conf.d/)",
    )

    parser.add_argument(
        "--wrappers-dir",
        "-w",
        type=Path,
        metavar="DIR",
        help="Directory of rule files named after programs (default: ./wrappers)",
    )

    parser.add_argument(
        "--rules",
        "-r",
        type=Path,
        metavar="FILE",
        help="Rule file to use instead of the one in the wrappers directory",
    )

    parser.add_argument(
        "--color",
        choices=COLOR_MODES,
        help="When to colorize output (default: auto)",
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colors",
    )

    parser.add_argument(
        "--check",
        type=Path,
        metavar="RULES",
        help="Check a rule file and report problems",
    )

    parser.add_argument(
        "--preview",
        type=Path,
        metavar="RULES",
        help="Show sample text highlighted with a rule file",
    )

    parser.add_argument(
        "--input",
        "-i",
        type=Path,
        metavar="FILE",
        help="Sample text for --preview (default: stdin)",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Log more details (repeat for debug output)",
    )

    parser.add_argument(
        "--version",
        "-V",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help="Program to run followed by its arguments",
    )

    parsed = parser.parse_args(args)
    if parsed.command and parsed.command[0] == "--":
        parsed.command = parsed.command[1:]
    return parsed


def _check(path: Path) -> int:
    diagnostics = check_rules(path)
    if diagnostics:
        print(format_diagnostics(path, diagnostics), file=sys.stderr)
        return 1
    print(f"{path}: OK")
    return 0


def _preview(path: Path, input_path: Path | None) -> int:
    if not path.is_file():
        raise FileNotFoundError(f"Rule file not found: {path}")
    rules = load_rules(path).rules
    if input_path is None:
        text = sys.stdin.read()
    else:
        text = input_path.read_text(encoding="utf-8", errors="replace")
    preview_text(text, rules)
    return 0


def _silence_stdout() -> None:
    """Point stdout at /dev/null so interpreter shutdown does not fail on a closed pipe."""
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, sys.stdout.fileno())


def main(args: list[str] | None = None) -> int:
    """Main entry point.

    Args:
        args: Command-line arguments

    Returns:
        Exit code
    """
    parsed = parse_args(args)

    # Load configuration
    try:
        config = load_config(
            config_path=parsed.config,
            dropin_dir=parsed.config_dir,
        )
    except ColorwrapError as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return 1

    configure_logging(config.config.log_level, parsed.verbose, config.config.log_file)

    # Override config options
    if parsed.wrappers_dir is not None:
        config.config.wrappers_dir = parsed.wrappers_dir

    try:
        if parsed.check is not None:
            return _check(parsed.check)
        if parsed.preview is not None:
            return _preview(parsed.preview, parsed.input)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not parsed.command:
        print("Error: No program provided", file=sys.stderr)
        print("Usage: colorwrap [options] <program> [args...]", file=sys.stderr)
        return 1

    name = wrapped_program_name(parsed.command[0])

    try:
        executable = resolve_program(name, config)
    except ColorwrapError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    rules_path = parsed.rules if parsed.rules is not None else config.rules_path_for(name)
    result = load_rules(rules_path)
    if not result.rules:
        LOGGER.info("No rules for %s in %s, passing output through", name, rules_path)

    mode = parsed.color or config.color_mode_for(name)
    if parsed.no_color:
        mode = "never"

    try:
        return run_wrapped(
            executable,
            parsed.command[1:],
            result.rules,
            styling_enabled(mode, sys.stdout),
        )
    except BrokenPipeError:
        _silence_stdout()
        return 141
    except OSError as e:
        print(f"Error: Failed to run {executable}: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
