#!/usr/bin/env python3
"""
RAINBOWPATH CONFIG PARSER - Line Assignment Reader
--------------------------------------------------
Turns the text of a rainbowpath.conf file into a flat, ordered list of
Option records:

    # comment
    name = "string"
    name = true
    name[-1] = "fg=2"

This layer is purely syntactic. Whether `name` exists, whether it takes
an index, and whether it wants a string or a bool is decided later by
the option loader.

Author: RainbowPath Team
Date: 2026-10-19
"""

from typing import List, Union

from rainbowpath.core.errors import ParseError
from rainbowpath.core.models import Option
from rainbowpath.parsing.lexer import Cursor, parse_index

NAME_EXTRA_CHARS = "-"

ESCAPES = {
    "\\": "\\",
    '"': '"',
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "f": "\f",
    "v": "\v",
}


class ConfigParser:
    """
    Walks the whole file with one cursor and confines each assignment to
    its own line through a bounded sub-cursor.
    """

    def __init__(self, text: str):
        self.text = text
        self.cursor = Cursor(text)
        self.line_no = 1

    def _line_number(self, pos: int) -> int:
        return self.text.count("\n", 0, pos) + 1

    def _fail(self, line: Cursor, message: str) -> ParseError:
        return ParseError(message, position=line.pos, line=self.line_no)

    def _parse_string(self, line: Cursor) -> str:
        if not line.parse_char('"'):
            raise self._fail(line, "Expected string value")
        chars = []
        while True:
            if line.at_end():
                raise self._fail(line, "Unterminated string")
            char = line.current()
            if char == "\\":
                line.advance()
                if line.at_end():
                    raise self._fail(line, "Unterminated escape sequence")
                escaped = ESCAPES.get(line.current())
                if escaped is None:
                    raise self._fail(line, f"Invalid escape sequence '\\{line.current()}'")
                chars.append(escaped)
            elif char == "\0":
                raise self._fail(line, "Unexpected null byte")
            elif char == '"':
                line.advance()
                return "".join(chars)
            else:
                chars.append(char)
            line.advance()

    def _parse_bool(self, line: Cursor) -> bool:
        token = line.parse_token()
        if token == "true":
            return True
        if token == "false":
            return False
        raise self._fail(line, "Expected boolean value")

    def _parse_index(self, line: Cursor) -> int:
        line.parse_char("[")
        token = line.parse_token(NAME_EXTRA_CHARS)
        if token is None:
            raise self._fail(line, "Expected index")
        index = parse_index(token)
        if index is None:
            raise self._fail(line, f"Invalid index '{token}'")
        if not line.parse_char("]"):
            raise self._fail(line, "Expected ']'")
        return index

    def _parse_value(self, line: Cursor) -> Union[bool, str]:
        if line.peek_char('"'):
            return self._parse_string(line)
        if line.peek_char("t") or line.peek_char("f"):
            return self._parse_bool(line)
        raise self._fail(line, "Invalid value")

    def _parse_assignment(self) -> Option:
        line = Cursor(self.text, self.cursor.pos, self.cursor.line_end())
        self.line_no = self._line_number(line.pos)

        name = line.parse_token(NAME_EXTRA_CHARS)
        if name is None:
            raise self._fail(line, "Expected option")
        index = self._parse_index(line) if line.peek_char("[") else None
        if not line.parse_char("="):
            raise self._fail(line, "Expected '='")
        value = self._parse_value(line)
        line.skip_whitespace()
        if not line.at_end():
            raise self._fail(line, "Expected end of line")

        self.cursor.pos = line.pos
        return Option(name=name, value=value, index=index, line=self.line_no)

    def parse(self) -> List[Option]:
        options: List[Option] = []
        while True:
            self.cursor.skip_whitespace()
            if self.cursor.at_end():
                break
            if self.cursor.parse_char("#"):
                self.cursor.pos = self.cursor.line_end()
                continue
            options.append(self._parse_assignment())
        return options


def parse_config(text: str) -> List[Option]:
    """Parses config-file text into Options, in file order."""
    return ConfigParser(text).parse()
