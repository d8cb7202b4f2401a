"""Highlight the output of any program with regex-based color rules."""

__version__ = "0.1.0"
