#!/usr/bin/env python3
"""
RAINBOWPATH LEXER - Cursor Tokenizer
------------------------------------
A position cursor over an immutable string, shared by the style/palette
parser and the config-file parser. Optional matches never move the
cursor on failure, which gives both recursive-descent parsers their one
token of lookahead without any manual rollback.

Author: RainbowPath Team
Date: 2026-10-19
"""

from typing import Optional

from rainbowpath.core.errors import ParseError

WHITESPACE = frozenset(" \t\n\v\f\r")


def _is_token_char(char: str, extra: str) -> bool:
    return (char.isascii() and char.isalnum()) or char in extra


class Cursor:
    """
    Walks `text[pos:end]`. The end bound lets the config parser confine a
    sub-cursor to a single line while still reporting absolute offsets.
    """

    def __init__(self, text: str, pos: int = 0, end: Optional[int] = None):
        self.text = text
        self.pos = pos
        self.end = len(text) if end is None else end

    def at_end(self) -> bool:
        return self.pos >= self.end

    def current(self) -> str:
        return self.text[self.pos]

    def advance(self) -> None:
        self.pos += 1

    def _skip_from(self, pos: int) -> int:
        while pos < self.end and self.text[pos] in WHITESPACE:
            pos += 1
        return pos

    def skip_whitespace(self) -> None:
        self.pos = self._skip_from(self.pos)

    def peek_char(self, char: str) -> bool:
        """True when the next non-blank character is `char`. Never consumes."""
        pos = self._skip_from(self.pos)
        return pos < self.end and self.text[pos] == char

    def parse_char(self, char: str) -> bool:
        """Consumes blanks plus `char` on a match; leaves the cursor alone otherwise."""
        pos = self._skip_from(self.pos)
        if pos < self.end and self.text[pos] == char:
            self.pos = pos + 1
            return True
        return False

    def parse_token(self, extra: str = "") -> Optional[str]:
        """
        Returns the next run of ASCII alphanumerics (plus any `extra`
        characters), or None without consuming when no such run starts here.
        """
        start = self._skip_from(self.pos)
        pos = start
        while pos < self.end and _is_token_char(self.text[pos], extra):
            pos += 1
        if pos == start:
            return None
        self.pos = pos
        return self.text[start:pos]

    def line_end(self) -> int:
        """Offset just past the next newline (or the end bound)."""
        newline = self.text.find("\n", self.pos, self.end)
        return self.end if newline == -1 else newline + 1

    def error(self, message: str, position: Optional[int] = None) -> ParseError:
        return ParseError(message, position=self.pos if position is None else position)

    def expect_end(self, message: str = "Expected end of input") -> None:
        self.skip_whitespace()
        if not self.at_end():
            raise self.error(message)


def parse_index(text: str) -> Optional[int]:
    """
    Parses a signed decimal index the way `strtol` would accept a whole
    token: optional sign, digits, nothing else. Returns None otherwise.
    """
    body = text[1:] if text[:1] in ("-", "+") else text
    if not body or not (body.isascii() and body.isdigit()):
        return None
    return int(text)
