# src/rainbowpath/core/palettes.py
from rainbowpath.core.models import Attr, Palette, Style

# Built-in tables, picked by terminal color count when the user gives none.

PATH_PALETTE_8 = Palette(Style(fg=Attr.set(color)) for color in (1, 3, 2, 6, 4, 5))

PATH_PALETTE_256 = Palette(Style(fg=Attr.set(color)) for color in (160, 208, 220, 82, 39, 63))

SEPARATOR_PALETTE_8 = Palette([Style(fg=Attr.set(7), dim=Attr.set(True))])

SEPARATOR_PALETTE_256 = Palette([Style(fg=Attr.set(239), bold=Attr.set(True))])


def default_path_palette(color_count: int) -> Palette:
    return PATH_PALETTE_256 if color_count >= 256 else PATH_PALETTE_8


def default_separator_palette(color_count: int) -> Palette:
    return SEPARATOR_PALETTE_256 if color_count >= 256 else SEPARATOR_PALETTE_8
