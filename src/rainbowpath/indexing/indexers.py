#!/usr/bin/env python3
"""
RAINBOWPATH INDEXERS - Palette Slot Selection
---------------------------------------------
Three interchangeable strategies that map (palette size, position,
segment bytes) to a palette slot:

1. sequential - cycles through the palette by position
2. hash       - DJB2 over the segment bytes, stable for the same text
3. random     - a uniform draw from an explicitly passed RandomSource

Author: RainbowPath Team
Date: 2026-10-19
"""

import logging
import os
import random
import time
from enum import Enum
from typing import Optional

from rainbowpath.core.errors import ConfigError

logger = logging.getLogger("rainbowpath.indexers")

DJB2_SEED = 5381
HASH_MASK = (1 << 64) - 1  # Wraps like a 64-bit size_t


class RandomSource:
    """
    The one piece of process-wide mutable state: a generator seeded once
    at startup. Tests pass a fixed seed; production seeds from the OS.
    """

    def __init__(self, seed: Optional[int] = None):
        if seed is None:
            seed = self._startup_seed()
        self._random = random.Random(seed)

    @staticmethod
    def _startup_seed() -> int:
        try:
            return int.from_bytes(os.urandom(8), "little")
        except NotImplementedError:
            logger.debug("No secure random source available, seeding from the clock")
            return time.time_ns()

    def randrange(self, stop: int) -> int:
        return self._random.randrange(stop)


def index_sequential(palette_size: int, position: int, segment: bytes) -> int:
    return position % palette_size


def djb2(data: bytes) -> int:
    value = DJB2_SEED
    for byte in data:
        value = (value * 33 + byte) & HASH_MASK
    return value


def index_hash(palette_size: int, position: int, segment: bytes) -> int:
    return djb2(segment) % palette_size


def index_random(palette_size: int, position: int, segment: bytes, rng: RandomSource) -> int:
    return rng.randrange(palette_size)


class IndexerKind(Enum):
    """A named, swappable selection strategy."""
    SEQUENTIAL = "sequential"
    HASH = "hash"
    RANDOM = "random"

    @classmethod
    def from_name(cls, name: str) -> "IndexerKind":
        try:
            return cls(name)
        except ValueError:
            choices = ", ".join(kind.value for kind in cls)
            raise ConfigError(f"Invalid indexing method '{name}' (expected one of {choices})") from None

    def select(self, palette_size: int, position: int, segment: bytes,
               rng: Optional[RandomSource] = None) -> int:
        """Returns a slot in [0, palette_size)."""
        if self is IndexerKind.SEQUENTIAL:
            return index_sequential(palette_size, position, segment)
        if self is IndexerKind.HASH:
            return index_hash(palette_size, position, segment)
        if rng is None:
            raise ValueError("The random indexer needs a RandomSource")
        return index_random(palette_size, position, segment, rng)
