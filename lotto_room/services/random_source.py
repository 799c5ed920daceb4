"""Randomness used by the draw engine.

The engine only needs "pick one element of this pool"; tests inject a scripted
source to get deterministic draws.
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from collections.abc import Sequence


class RandomSource(ABC):
    """Uniform choice over a non-empty pool of numbers."""

    @abstractmethod
    def choice(self, pool: Sequence[int]) -> int:
        ...


class SystemRandomSource(RandomSource):
    """OS entropy backed source; draws are not reproducible."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.SystemRandom()

    def choice(self, pool: Sequence[int]) -> int:
        if not pool:
            raise ValueError("Cannot choose from an empty pool")
        return int(self._rng.choice(list(pool)))
