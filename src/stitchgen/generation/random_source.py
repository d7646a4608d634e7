"""
Seedable random source injected into the generator.

Each generator run owns one RandomSource; runs with the same seed, catalog and
settings produce the same level.
"""

from __future__ import annotations

import random
from typing import List, Optional, Sequence, TypeVar

from ..errors import InvalidArgument

T = TypeVar('T')

MAX_SEED = 2 ** 31 - 1


class RandomSource:
    """Thin wrapper around random.Random that records its seed.

    Args:
        seed: Seed for reproducible runs; None draws one from the system RNG
    """

    def __init__(self, seed: Optional[int] = None):
        if seed is None:
            seed = random.randint(0, MAX_SEED)
        self._seed = int(seed)
        self._rng = random.Random(self._seed)

    @property
    def seed(self) -> int:
        return self._seed

    def random(self) -> float:
        """Uniform float in [0, 1)."""
        return self._rng.random()

    def randint(self, low: int, high: int) -> int:
        """Uniform int in [low, high], both included."""
        return self._rng.randint(low, high)

    def uniform(self, low: float, high: float) -> float:
        return self._rng.uniform(low, high)

    def choice(self, items: Sequence[T]) -> T:
        if not items:
            raise InvalidArgument("Cannot choose from an empty sequence")
        return self._rng.choice(items)

    def shuffle(self, items: List[T]) -> None:
        self._rng.shuffle(items)

    def weighted_choice(self, items: Sequence[T], weights: Sequence[float]) -> T:
        """Pick one item with probability proportional to its weight."""
        if not items:
            raise InvalidArgument("Cannot choose from an empty sequence")
        if len(items) != len(weights):
            raise InvalidArgument(f"Got {len(items)} items but {len(weights)} weights")
        if any(w < 0 for w in weights) or sum(weights) <= 0:
            raise InvalidArgument("Weights must be non-negative with a positive total")
        return self._rng.choices(items, weights=weights, k=1)[0]

    def weighted_order(self, items: Sequence[T], weights: Sequence[float]) -> List[T]:
        """Order items by repeated weighted draws without replacement.

        Items with weight 0 are left out.
        """
        if len(items) != len(weights):
            raise InvalidArgument(f"Got {len(items)} items but {len(weights)} weights")
        pool = [(item, w) for item, w in zip(items, weights) if w > 0]
        ordered = []
        while pool:
            total = sum(w for _, w in pool)
            pick = self._rng.random() * total
            for i, (item, w) in enumerate(pool):
                pick -= w
                if pick < 0 or i == len(pool) - 1:
                    ordered.append(item)
                    del pool[i]
                    break
        return ordered

    def __repr__(self) -> str:
        return f"RandomSource(seed={self._seed})"
