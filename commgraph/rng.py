"""Pseudo-random sources consumed by the random topology builder."""

from __future__ import annotations

import random as _random
from typing import Protocol


class RandomSource(Protocol):
    """Anything that can draw uniformly distributed bounded integers."""

    def next_in_range(self, bound: int) -> int:
        """Return an integer uniformly distributed in ``[0, bound)``."""
        ...


class SeededRandom:
    """``RandomSource`` backed by a private ``random.Random`` instance.

    Deterministic when ``seed`` is given, entropy-seeded otherwise. Each
    instance owns its generator so independent builds never share state.

    Args:
        seed: Optional seed for reproducible draws.
    """

    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed
        self._rng = _random.Random(seed)

    def next_in_range(self, bound: int) -> int:
        if bound <= 0:
            raise ValueError(f"bound must be positive, got {bound}")
        return self._rng.randrange(bound)

    def __repr__(self) -> str:
        return f"SeededRandom(seed={self.seed!r})"
