"""Exceptions raised by colorwrap."""


class ColorwrapError(Exception):
    """Base class for wrapper-level errors."""


class ConfigError(ColorwrapError):
    """The configuration could not be loaded or validated."""


class ProgramNotFoundError(ColorwrapError):
    """The real program behind a wrapper was not found on the search path."""
