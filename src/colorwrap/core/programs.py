"""Locating the real program behind a wrapper."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from colorwrap.errors import ProgramNotFoundError

if TYPE_CHECKING:
    from colorwrap.config.schema import Config

LOGGER = logging.getLogger(__name__)


def wrapped_program_name(arg: str) -> str:
    """Get the program name from the first command line argument.

    Wrapper scripts may pass their own path, so only the basename counts.

    Examples:
        >>> wrapped_program_name("/opt/wrappers/ls")
        'ls'
        >>> wrapped_program_name("make")
        'make'
    """
    return os.path.basename(arg.rstrip("/")) or arg


def _same_directory(directory: str, excluded: set[Path]) -> bool:
    try:
        return Path(directory).resolve() in excluded
    except OSError:
        return False


def _is_executable(candidate: Path) -> bool:
    try:
        return candidate.is_file() and os.access(candidate, os.X_OK)
    except OSError:
        return False


def find_real_program(
    name: str,
    exclude_dirs: Iterable[Path | str] = (),
    path: str | None = None,
) -> Path | None:
    """Find an executable on the search path, skipping wrapper directories.

    Args:
        name: Program basename, e.g. "ls"
        exclude_dirs: Directories never searched (the wrappers directory)
        path: Search path string (default: $PATH)

    Returns:
        Path to the first matching executable, or None
    """
    if path is None:
        path = os.environ.get("PATH", "")

    excluded = set()
    for directory in exclude_dirs:
        try:
            excluded.add(Path(directory).resolve())
        except OSError:
            continue

    for directory in path.split(os.pathsep):
        if not directory:
            continue
        if _same_directory(directory, excluded):
            LOGGER.debug("Skipping wrapper directory %s", directory)
            continue

        candidate = Path(directory) / name
        if _is_executable(candidate):
            return candidate

    return None


def resolve_program(name: str, config: Config, path: str | None = None) -> Path:
    """Find the real program for a wrapper, honoring the configuration.

    Args:
        name: Program basename
        config: Configuration providing the wrappers directory
        path: Search path string (default: $PATH)

    Returns:
        Path to the real executable

    Raises:
        ProgramNotFoundError: If no executable is found
    """
    program = find_real_program(name, exclude_dirs=[config.config.wrappers_dir], path=path)
    if program is None:
        raise ProgramNotFoundError(f"Could not find real program for '{name}'")

    LOGGER.debug("Resolved %s to %s", name, program)
    return program
