#!/usr/bin/env python3
"""
RAINBOWPATH ERRORS
------------------
Exception hierarchy shared by the parsers, the option loader, the
renderer and the CLI. Every user-facing failure derives from
RainbowPathError so the CLI can report it in one place and exit non-zero
before anything reaches stdout.

Author: RainbowPath Team
Date: 2026-10-19
"""

from typing import Optional


class RainbowPathError(Exception):
    """Base class for all rainbowpath specific errors."""


class ParseError(RainbowPathError):
    """
    Raised when a style, palette or config expression is malformed.

    `position` is the character offset into the parsed text and `line`
    the 1-based line number (config files only).
    """

    def __init__(self, message: str, position: Optional[int] = None, line: Optional[int] = None):
        self.message = message
        self.position = position
        self.line = line
        super().__init__(self._describe())

    def _describe(self) -> str:
        if self.line is not None:
            return f"line {self.line}: {self.message}"
        return self.message


class ConfigError(RainbowPathError):
    """Raised when a well-formed option cannot be applied to the Config."""


class RangeError(RainbowPathError):
    """Raised when a numeric value falls outside its accepted range."""

    def __init__(self, message: str, value: int):
        self.value = value
        super().__init__(message)


class ColorRangeError(RangeError):
    """A color literal above 255 or beyond the terminal's color count."""


class OverrideIndexError(RangeError):
    """An override index outside the segment or separator count."""


class ResourceError(RainbowPathError):
    """Raised when the environment cannot provide what rendering needs."""
