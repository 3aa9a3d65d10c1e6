"""
Configuration model for rainbowpath.

The config loader and the CLI both write into a single Config instance
(built-in defaults, then the config file, then command-line flags). The
engine only reads it.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from rainbowpath.core.models import Override, Palette
from rainbowpath.core.palettes import default_path_palette, default_separator_palette
from rainbowpath.indexing.indexers import IndexerKind

TERMINAL_KINDS = ("ansi", "terminfo")


@dataclass
class Config:
    """
    Top-level configuration for one rainbowpath run.
    """

    path: Optional[str] = None
    separator: str = "/"
    path_palette: Optional[Palette] = None
    separator_palette: Optional[Palette] = None
    path_overrides: List[Override] = field(default_factory=list)
    separator_overrides: List[Override] = field(default_factory=list)
    new_line: bool = True
    bash_escape: bool = False
    compact: bool = False
    strip_leading: bool = False
    path_indexer: IndexerKind = IndexerKind.SEQUENTIAL
    separator_indexer: IndexerKind = IndexerKind.SEQUENTIAL
    terminal: str = "ansi"

    def effective_path_palette(self, color_count: int) -> Palette:
        if self.path_palette is not None:
            return self.path_palette
        return default_path_palette(color_count)

    def effective_separator_palette(self, color_count: int) -> Palette:
        if self.separator_palette is not None:
            return self.separator_palette
        return default_separator_palette(color_count)
