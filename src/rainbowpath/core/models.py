#!/usr/bin/env python3
"""
RAINBOWPATH CORE MODELS
-----------------------
Defines the fundamental data structures used across the RainbowPath engine.
These models represent the lowest level of the styling abstraction:
attributes, styles, palettes, overrides and raw config-file options.

Author: RainbowPath Team
Date: 2026-10-19
"""

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Iterable, Iterator, List, Optional, Union


class AttrState(Enum):
    """Three-state marker for a single style attribute."""
    UNSET = "unset"          # Not mentioned, inherit the lower layer
    SET = "set"              # Explicitly set to `value`
    REVERTED = "reverted"    # Explicitly cleared by a higher layer


@dataclass(frozen=True)
class Attr:
    """
    A single attribute slot of a Style.

    `value` is only meaningful when `state` is SET: an int color for fg/bg,
    True for the boolean attributes.
    """
    state: AttrState = AttrState.UNSET
    value: Any = None

    @classmethod
    def set(cls, value: Any) -> "Attr":
        return cls(AttrState.SET, value)

    @property
    def is_set(self) -> bool:
        return self.state is AttrState.SET

    def merged(self, upper: "Attr") -> "Attr":
        """Right-biased merge of `upper` on top of this attribute."""
        if upper.state is AttrState.SET:
            return upper
        if upper.state is AttrState.REVERTED:
            return UNSET
        return self


UNSET = Attr()
REVERTED = Attr(AttrState.REVERTED)

COLOR_ATTRIBUTES = ("fg", "bg")
FLAG_ATTRIBUTES = ("bold", "dim", "underlined", "blink")


@dataclass(frozen=True)
class Style:
    """
    A set of independently tri-stated visual attributes.

    A freshly constructed Style has every field UNSET; the parser only
    touches the fields its expression mentions.
    """
    fg: Attr = UNSET
    bg: Attr = UNSET
    bold: Attr = UNSET
    dim: Attr = UNSET
    underlined: Attr = UNSET
    blink: Attr = UNSET

    def to_expression(self) -> str:
        """
        Serializes the style back to property-list syntax, e.g. `fg=1,bold,!bg`.
        Unset attributes are omitted; an all-unset style has no expression.
        """
        parts = []
        for name in COLOR_ATTRIBUTES + FLAG_ATTRIBUTES:
            attr = getattr(self, name)
            if attr.state is AttrState.REVERTED:
                parts.append(f"!{name}")
            elif attr.is_set and name in COLOR_ATTRIBUTES:
                parts.append(f"{name}={attr.value}")
            elif attr.is_set and attr.value:
                parts.append(name)
        return ",".join(parts)


def merge(lower: Style, upper: Style) -> Style:
    """
    Layers `upper` on top of `lower`, field by field.

    UNSET in upper keeps the lower attribute, SET replaces it, REVERTED
    clears it back to UNSET regardless of what lower held.
    """
    changes = {
        f.name: getattr(lower, f.name).merged(getattr(upper, f.name))
        for f in fields(Style)
    }
    return replace(lower, **changes)


class Palette:
    """
    Ordered, non-empty sequence of Styles cycled through by an indexer.
    """

    def __init__(self, styles: Iterable[Style]):
        self._styles: List[Style] = list(styles)
        if not self._styles:
            raise ValueError("A palette needs at least one style")

    def __len__(self) -> int:
        return len(self._styles)

    def __iter__(self) -> Iterator[Style]:
        return iter(self._styles)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Palette):
            return NotImplemented
        return self._styles == other._styles

    def __repr__(self) -> str:
        return f"Palette({self.to_expression()!r})"

    @property
    def size(self) -> int:
        return len(self._styles)

    def get(self, index: int) -> Style:
        """Callers pre-validate the index via modulo; anything else is a bug."""
        if not 0 <= index < len(self._styles):
            raise IndexError(f"palette index {index} out of range for size {len(self._styles)}")
        return self._styles[index]

    def to_expression(self) -> str:
        return ";".join(style.to_expression() for style in self._styles)


@dataclass
class Override:
    """
    A Style bound to one position of the segment or separator axis.

    `resolved_index` stays None until normalization has seen the real
    element count of the rendered path.
    """
    raw_index: int
    style: Style
    resolved_index: Optional[int] = None


@dataclass
class Option:
    """
    One assignment read from a config file.

    An `index` marks a positional override (`override[3] = "fg=2"`);
    scalar settings (`compact = true`) carry none.
    """
    name: str                        # The option key, e.g. 'separator-palette'
    value: Union[bool, str]          # Bool for true/false literals, str for quoted values
    index: Optional[int] = None      # The bracketed override index, if any
    line: int = 0                    # Source line for error reporting

    @property
    def is_bool(self) -> bool:
        return isinstance(self.value, bool)
