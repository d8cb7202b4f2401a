"""Decide whether output should be colored."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import TextIO


COLOR_MODES: tuple[str, ...] = ("auto", "always", "never")


def styling_enabled(mode: str, stream: TextIO, environ: Mapping[str, str] | None = None) -> bool:
    """Decide once per run whether highlighting is applied.

    Args:
        mode: One of "auto", "always" or "never"
        stream: The stream the highlighted lines are written to
        environ: Environment to consult (default: os.environ)

    Returns:
        True if matched text should be styled
    """
    if mode == "always":
        return True
    if mode == "never":
        return False

    env = os.environ if environ is None else environ
    if "NO_COLOR" in env or env.get("TERM") == "dumb":
        return False

    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())
