#!/usr/bin/env python3
"""
RAINBOWPATH TERMINAL - Capability Backends
------------------------------------------
The renderer never builds escape codes itself. It asks a Terminal to emit
one attribute at a time into the output stream:

1. AnsiTerminal     - hardcoded SGR sequences, color count detected by rich
2. TerminfoTerminal - sequences looked up in the terminfo database

Author: RainbowPath Team
Date: 2026-10-19
"""

import curses
import logging
import os
from abc import ABC, abstractmethod
from typing import Dict, Optional, TextIO

from rich.console import Console

from rainbowpath.core.errors import ConfigError, ResourceError

logger = logging.getLogger("rainbowpath.terminal")

ESC = "\033"

# rich color-system names mapped to the palette size the terminal can show
COLOR_SYSTEM_COUNTS = {
    "truecolor": 256,
    "256": 256,
    "standard": 8,
    "windows": 8,
}


class Terminal(ABC):
    """Emits styling sequences and text into `stream`."""

    def __init__(self, stream: TextIO):
        self.stream = stream

    def write(self, text: str) -> None:
        self.stream.write(text)

    @abstractmethod
    def color_count(self) -> int:
        ...

    @abstractmethod
    def fg(self, color: int) -> None:
        ...

    @abstractmethod
    def bg(self, color: int) -> None:
        ...

    @abstractmethod
    def bold(self) -> None:
        ...

    @abstractmethod
    def dim(self) -> None:
        ...

    @abstractmethod
    def underlined(self) -> None:
        ...

    @abstractmethod
    def blink(self) -> None:
        ...

    @abstractmethod
    def reset(self) -> None:
        ...


class AnsiTerminal(Terminal):
    """
    Hardcoded ANSI/ECMA-48 sequences using the 256-color SGR forms.

    The color count only chooses between the built-in palettes. Detection
    runs rich in forced-terminal mode because the prompt string is usually
    captured through `$(...)`, where stdout is never a tty.
    """

    def __init__(self, stream: TextIO, color_count: Optional[int] = None):
        super().__init__(stream)
        self._color_count = color_count if color_count is not None else self._detect_color_count()

    def _detect_color_count(self) -> int:
        system = Console(file=self.stream, force_terminal=True).color_system
        count = COLOR_SYSTEM_COUNTS.get(system, 8)
        logger.debug("Detected color system %s (%d colors)", system, count)
        return count

    def _sgr(self, code: str) -> None:
        self.write(f"{ESC}[{code}m")

    def color_count(self) -> int:
        return self._color_count

    def fg(self, color: int) -> None:
        self._sgr(f"38;5;{color}")

    def bg(self, color: int) -> None:
        self._sgr(f"48;5;{color}")

    def bold(self) -> None:
        self._sgr("1")

    def dim(self) -> None:
        self._sgr("2")

    def underlined(self) -> None:
        self._sgr("4")

    def blink(self) -> None:
        self._sgr("5")

    def reset(self) -> None:
        self._sgr("0")


class TerminfoTerminal(Terminal):
    """
    Looks every sequence up in terminfo for $TERM (or `term`).
    Capabilities the terminal lacks emit nothing.
    """

    CAPABILITIES = {
        "fg": "setaf",
        "bg": "setab",
        "bold": "bold",
        "dim": "dim",
        "underlined": "smul",
        "blink": "blink",
        "reset": "sgr0",
    }

    def __init__(self, stream: TextIO, term: Optional[str] = None):
        super().__init__(stream)
        try:
            curses.setupterm(term, self._fileno())
        except curses.error as e:
            raise ResourceError(f"Failed to set up terminal: {e}") from e

        colors = curses.tigetnum("colors")
        if colors < 0:
            raise ResourceError("Terminal does not report a color count")
        self._color_count = colors
        self._caps: Dict[str, bytes] = {
            name: curses.tigetstr(cap) or b"" for name, cap in self.CAPABILITIES.items()
        }
        logger.debug("Loaded terminfo entry with %d colors", colors)

    def _fileno(self) -> int:
        try:
            return self.stream.fileno()
        except (AttributeError, OSError, ValueError):
            return -1

    def _emit(self, sequence: bytes) -> None:
        # surrogateescape, so the engine's fsencode restores the exact bytes
        self.write(os.fsdecode(sequence))

    def _emit_color(self, name: str, color: int) -> None:
        cap = self._caps[name]
        if cap:
            self._emit(curses.tparm(cap, color))

    def color_count(self) -> int:
        return self._color_count

    def fg(self, color: int) -> None:
        self._emit_color("fg", color)

    def bg(self, color: int) -> None:
        self._emit_color("bg", color)

    def bold(self) -> None:
        self._emit(self._caps["bold"])

    def dim(self) -> None:
        self._emit(self._caps["dim"])

    def underlined(self) -> None:
        self._emit(self._caps["underlined"])

    def blink(self) -> None:
        self._emit(self._caps["blink"])

    def reset(self) -> None:
        self._emit(self._caps["reset"])


def create_terminal(kind: str, stream: TextIO) -> Terminal:
    """Builds the backend named by the `terminal` option."""
    if kind == "ansi":
        return AnsiTerminal(stream)
    if kind == "terminfo":
        return TerminfoTerminal(stream)
    raise ConfigError(f"Unknown terminal '{kind}' (expected ansi or terminfo)")
