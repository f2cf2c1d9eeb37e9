"""Seeded random stream shared by every generation phase.

A local ``random.Random`` keeps generation isolated from module-level
randomness, so one seed reproduces one map (and one sequence of maps when the
same instance is reused across levels).
"""

from __future__ import annotations

import random
from typing import List, Optional, Sequence, TypeVar

T = TypeVar("T")


class PseudoRandom:
    def __init__(self, seed: Optional[int] = None):
        if seed is None:
            seed = random.randint(0, 2**31 - 1)
        self.seed = seed
        self._random = random.Random(seed)

    def next(self) -> float:
        """Return a float in [0, 1)."""
        return self._random.random()

    def next_int(self, lo: int, hi: int) -> int:
        """Return an int in [lo, hi). ``hi == lo`` always yields ``lo``."""
        return int(self.next() * (hi - lo) + lo)

    def sample(self, items: Sequence[T]) -> T:
        return items[self.next_int(0, len(items))]

    def sample_and_remove(self, items: List[T]) -> T:
        return items.pop(self.next_int(0, len(items)))


__all__ = ["PseudoRandom"]
