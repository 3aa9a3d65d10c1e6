#!/usr/bin/env python3
"""
RAINBOWPATH ENGINE - The Orchestrator
-------------------------------------
Takes a fully merged Config through the phases of one run:

1. Path resolution (working directory, home compaction, leading strip)
2. Component counting and override normalization
3. Rendering into an in-memory buffer
4. A single write to stdout

Every check happens before the write, so a failing run prints nothing.

Author: RainbowPath Team
Date: 2026-10-19
"""

import io
import logging
import os
import sys
from pathlib import Path
from typing import Callable, Optional, TextIO

from rainbowpath.core.config import Config
from rainbowpath.core.errors import ResourceError
from rainbowpath.indexing.indexers import RandomSource
from rainbowpath.rendering.pipeline import RenderPipeline
from rainbowpath.rendering.selection import PATH_SEPARATOR, count_components, normalize_overrides
from rainbowpath.rendering.terminal import Terminal, create_terminal

logger = logging.getLogger("rainbowpath.engine")

HOME_MARKER = "~"


def get_working_directory() -> str:
    try:
        return os.getcwd()
    except OSError as e:
        raise ResourceError(f"Failed to get working directory: {e}") from e


def get_home_directory() -> str:
    try:
        return str(Path.home())
    except (RuntimeError, KeyError) as e:
        raise ResourceError("Failed to get home directory") from e


def compact_path(path: str, home: str) -> str:
    """Replaces a leading `home` with '~' when it ends on a component boundary."""
    if path.startswith(home):
        rest = path[len(home):]
        if not rest or rest.startswith(PATH_SEPARATOR):
            return HOME_MARKER + rest
    return path


class RainbowPathEngine:
    """
    Principal orchestrator for one rendering run. The Config is read-only
    here apart from filling in each override's resolved index. The
    terminal always writes into the engine's own buffer.
    """

    def __init__(self, config: Config,
                 terminal_factory: Optional[Callable[[TextIO], Terminal]] = None,
                 rng: Optional[RandomSource] = None):
        self.config = config
        self.buffer = io.StringIO()
        if terminal_factory is None:
            self.terminal = create_terminal(config.terminal, self.buffer)
        else:
            self.terminal = terminal_factory(self.buffer)
        self.rng = rng if rng is not None else RandomSource()
        logger.info("Using %s terminal with %d colors",
                    type(self.terminal).__name__, self.terminal.color_count())

    def resolve_path(self) -> str:
        """Produces the exact string the renderer will segment."""
        path = self.config.path
        if path is None:
            path = get_working_directory()

        if self.config.compact:
            path = compact_path(path, get_home_directory())

        if self.config.strip_leading:
            path = path.lstrip(PATH_SEPARATOR)

        logger.debug("Resolved path: %s", path)
        return path

    def render(self) -> str:
        """Builds the complete output line; raises before producing anything on error."""
        path = self.resolve_path()

        segments, separators = count_components(path)
        normalize_overrides(self.config.path_overrides, segments)
        normalize_overrides(self.config.separator_overrides, separators)

        pipeline = RenderPipeline(self.config, self.terminal, self.rng)
        pipeline.run(path)

        if self.config.new_line:
            self.terminal.write("\n")
        output = self.buffer.getvalue()
        self.buffer.seek(0)
        self.buffer.truncate()
        return output

    def run(self, stdout: Optional[TextIO] = None) -> None:
        """
        Writes the rendered line in one go. Paths are bytes on POSIX, so
        undecodable components travel as surrogate escapes and go out
        through the binary buffer unchanged.
        """
        output = self.render()
        out = stdout if stdout is not None else sys.stdout
        buffer = getattr(out, "buffer", None)
        if buffer is None:
            out.write(output)
            out.flush()
            return
        out.flush()
        buffer.write(os.fsencode(output))
        buffer.flush()
