#!/usr/bin/env python3
"""
RAINBOWPATH RENDER PIPELINE - The Painter
-----------------------------------------
Walks an already-resolved path left to right, splitting on '/', and hands
every segment and every separator to the Terminal wrapped in its chosen
style. The literal '/' is replaced by the configured output separator.

Overrides must already be normalized against the path's counts before
`run` is called.

Author: RainbowPath Team
Date: 2026-10-19
"""

import os
from typing import Optional

from rainbowpath.core.config import Config
from rainbowpath.core.models import Style
from rainbowpath.indexing.indexers import RandomSource
from rainbowpath.rendering.selection import PATH_SEPARATOR, choose_style
from rainbowpath.rendering.terminal import Terminal

BASH_OPEN = "\\["
BASH_CLOSE = "\\]"


class RenderPipeline:
    """
    Emits one styled path. Palettes fall back to the built-in tables for
    the terminal's color count.
    """

    def __init__(self, config: Config, terminal: Terminal, rng: Optional[RandomSource] = None):
        self.config = config
        self.terminal = terminal
        self.rng = rng
        color_count = terminal.color_count()
        self.path_palette = config.effective_path_palette(color_count)
        self.separator_palette = config.effective_separator_palette(color_count)

    def _begin_style(self, style: Style) -> None:
        bash = self.config.bash_escape
        term = self.terminal
        if bash:
            term.write(BASH_OPEN)
        if style.bold.is_set and style.bold.value:
            term.bold()
        if style.dim.is_set and style.dim.value:
            term.dim()
        if style.underlined.is_set and style.underlined.value:
            term.underlined()
        if style.blink.is_set and style.blink.value:
            term.blink()
        if style.bg.is_set:
            term.bg(style.bg.value)
        if style.fg.is_set:
            term.fg(style.fg.value)
        if bash:
            term.write(BASH_CLOSE)

    def _end_style(self) -> None:
        if self.config.bash_escape:
            self.terminal.write(BASH_OPEN)
        self.terminal.reset()
        if self.config.bash_escape:
            self.terminal.write(BASH_CLOSE)

    def _paint(self, style: Style, text: str) -> None:
        self._begin_style(style)
        self.terminal.write(text)
        self._end_style()

    def _segment_style(self, position: int, segment: str) -> Style:
        return choose_style(self.path_palette, self.config.path_overrides,
                            self.config.path_indexer, position, os.fsencode(segment), self.rng)

    def _separator_style(self, position: int) -> Style:
        # Hashes the input separator occurrence, never the output string
        return choose_style(self.separator_palette, self.config.separator_overrides,
                            self.config.separator_indexer, position,
                            os.fsencode(PATH_SEPARATOR), self.rng)

    def run(self, path: str) -> None:
        segment_index = 0
        separator_index = 0
        start = 0

        # --- PHASE 1: SEGMENTS FOLLOWED BY A SEPARATOR ---
        sep = path.find(PATH_SEPARATOR, start)
        while sep != -1:
            if sep != start:
                segment = path[start:sep]
                self._paint(self._segment_style(segment_index, segment), segment)
                segment_index += 1

            self._paint(self._separator_style(separator_index), self.config.separator)
            separator_index += 1
            start = sep + 1
            sep = path.find(PATH_SEPARATOR, start)

        # --- PHASE 2: TRAILING SEGMENT ---
        if start < len(path):
            segment = path[start:]
            self._paint(self._segment_style(segment_index, segment), segment)
