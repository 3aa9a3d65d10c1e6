#!/usr/bin/env python3
"""
RAINBOWPATH SELECTION - Override Resolution & Style Choice
----------------------------------------------------------
Each axis (path segments, separators) owns a palette, an indexer and a
list of overrides. Once the path has been counted, overrides get their
Python-style indices resolved; during rendering every position asks the
indexer for a palette slot and layers all matching overrides on top.

Author: RainbowPath Team
Date: 2026-10-19
"""

import logging
from typing import List, Optional, Sequence, Tuple

from rainbowpath.core.errors import OverrideIndexError
from rainbowpath.core.models import Override, Palette, Style, merge
from rainbowpath.indexing.indexers import IndexerKind, RandomSource

logger = logging.getLogger("rainbowpath.selection")

PATH_SEPARATOR = "/"


def count_components(path: str, separator: str = PATH_SEPARATOR) -> Tuple[int, int]:
    """
    Returns (segments, separators). Segments are the non-empty runs between
    separators, so a leading or doubled separator adds no segment.
    """
    separators = path.count(separator)
    segments = sum(1 for part in path.split(separator) if part)
    return segments, separators


def resolve_index(raw_index: int, count: int) -> int:
    """Maps a signed index onto [0, count), with -1 meaning the last element."""
    if raw_index < 0:
        if raw_index < -count:
            raise OverrideIndexError(f"Invalid override index {raw_index}", raw_index)
        return count + raw_index
    if raw_index >= count:
        raise OverrideIndexError(f"Invalid override index {raw_index}", raw_index)
    return raw_index


def normalize_overrides(overrides: List[Override], count: int) -> None:
    """
    Fills in `resolved_index` for every override on one axis. Always
    recomputed from `raw_index`, so running it twice changes nothing.
    """
    for override in overrides:
        override.resolved_index = resolve_index(override.raw_index, count)
        logger.debug("Override %d resolved to %d of %d",
                     override.raw_index, override.resolved_index, count)


def choose_style(palette: Palette, overrides: Sequence[Override], indexer: IndexerKind,
                 position: int, segment: bytes, rng: Optional[RandomSource] = None) -> Style:
    """
    Picks the palette style for `position`, then merges every override that
    targets it, in declaration order, so later overrides win per attribute.
    """
    slot = indexer.select(palette.size, position, segment, rng)
    style = palette.get(slot)
    for override in overrides:
        if override.resolved_index == position:
            style = merge(style, override.style)
    return style
