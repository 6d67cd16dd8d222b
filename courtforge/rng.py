"""Injectable random source for the court core.

Every probability roll in the court goes through a `CourtRandom` so a run
can be replayed from a seed and tests can force specific branches by
subclassing and overriding `random`/`randint`/`choice`.
"""
from __future__ import annotations

import logging
import random as _random
from typing import Any, Optional, Sequence

logger = logging.getLogger(__name__)


class CourtRandom:
    """Thin wrapper over `random.Random` exposing the rolls the court uses."""

    def __init__(self, seed: Optional[int] = None, rng: Optional[_random.Random] = None) -> None:
        self._rng = rng or _random.Random(seed)
        self.seed = seed

    def random(self) -> float:
        """Return a float in [0.0, 1.0)."""
        return self._rng.random()

    def randint(self, a: int, b: int) -> int:
        """Return an integer in [a, b], inclusive."""
        return self._rng.randint(a, b)

    def choice(self, seq: Sequence[Any]) -> Any:
        if not seq:
            raise IndexError("Cannot choose from an empty sequence")
        return self._rng.choice(list(seq))

    def chance(self, probability: float) -> bool:
        """Roll once against `probability`; values <= 0 never fire, >= 1 always do."""
        return self.random() < probability


def make_rng(seed: Optional[int] = None) -> CourtRandom:
    if seed is not None:
        logger.debug("court random source seeded with %s", seed)
    return CourtRandom(seed=seed)
