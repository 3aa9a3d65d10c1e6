#!/usr/bin/env python3
"""
RAINBOWPATH STYLE PARSER - Expression Reader
--------------------------------------------
Recursive-descent parser for the style and palette expression language:

    palette  := style (';' style)*
    style    := property (',' property)*
    property := ['!'] name ['=' color]

`!name` reverts an attribute. Boolean attributes never take a value;
fg/bg take a symbolic color name or a decimal literal. The first failure
aborts the whole parse and nothing partially built is returned.

Author: RainbowPath Team
Date: 2026-10-19
"""

from typing import Dict, List, Optional

from rainbowpath.core.errors import ColorRangeError
from rainbowpath.core.models import (
    Attr, COLOR_ATTRIBUTES, FLAG_ATTRIBUTES, Palette, REVERTED, Style,
)
from rainbowpath.parsing.lexer import Cursor

SYMBOLIC_COLORS = ("black", "red", "green", "yellow", "blue", "magenta", "cyan", "white")
MAX_COLOR = 255


class StyleParser:
    """
    Parses one expression. `color_count`, when known, caps numeric colors
    to what the live terminal can display.
    """

    def __init__(self, text: str, color_count: Optional[int] = None):
        self.cursor = Cursor(text)
        self.color_count = color_count

    def _parse_color(self) -> int:
        self.cursor.skip_whitespace()
        start = self.cursor.pos
        token = self.cursor.parse_token()
        if token is None:
            raise self.cursor.error("Expected color")
        if token in SYMBOLIC_COLORS:
            return SYMBOLIC_COLORS.index(token)
        if not token.isdigit():
            raise self.cursor.error(f"Invalid color '{token}'", start)
        color = int(token)
        if color > MAX_COLOR:
            raise ColorRangeError(f"Color {color} outside acceptable range", color)
        if self.color_count is not None and color >= self.color_count:
            raise ColorRangeError(
                f"Color {color} outside the terminal's {self.color_count} colors", color
            )
        return color

    def _parse_property(self, changes: Dict[str, Attr]) -> None:
        revert = self.cursor.parse_char("!")
        self.cursor.skip_whitespace()
        start = self.cursor.pos
        name = self.cursor.parse_token()
        if name is None:
            raise self.cursor.error("Expected property")

        if name in COLOR_ATTRIBUTES:
            if revert:
                changes[name] = REVERTED
                return
            if not self.cursor.parse_char("="):
                raise self.cursor.error(f"Expected '=' after '{name}'")
            changes[name] = Attr.set(self._parse_color())
        elif name in FLAG_ATTRIBUTES:
            changes[name] = REVERTED if revert else Attr.set(True)
        else:
            raise self.cursor.error(f"Unknown property '{name}'", start)

    def parse_style_body(self) -> Style:
        """Parses `property (',' property)*` without requiring end of input."""
        changes: Dict[str, Attr] = {}
        self._parse_property(changes)
        while self.cursor.parse_char(","):
            self._parse_property(changes)
        return Style(**changes)

    def parse_style(self) -> Style:
        style = self.parse_style_body()
        self.cursor.expect_end()
        return style

    def parse_palette(self) -> Palette:
        styles: List[Style] = [self.parse_style_body()]
        while self.cursor.parse_char(";"):
            styles.append(self.parse_style_body())
        self.cursor.expect_end()
        return Palette(styles)


def parse_style(text: str, color_count: Optional[int] = None) -> Style:
    """Parses a single style expression such as `fg=160,bold`."""
    return StyleParser(text, color_count).parse_style()


def parse_palette(text: str, color_count: Optional[int] = None) -> Palette:
    """Parses a semicolon separated palette such as `fg=1;fg=3;fg=2`."""
    return StyleParser(text, color_count).parse_palette()
