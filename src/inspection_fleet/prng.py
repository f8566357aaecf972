"""Seeded pseudo-random draws used by every generator.

Nothing here touches the global ``random`` state: a draw is a pure function
of its integer seed, so the same seed gives the same value in every process.
Callers derive independent-looking draws by offsetting a base seed
(``seed + 1``, ``seed + 100``, ...) or by walking a :class:`SeedCounter`.
"""

import math
from typing import List, Sequence, TypeVar

T = TypeVar("T")


def seeded_random(seed: int) -> float:
    """Return a value in [0, 1) derived from ``seed`` as frac(sin(seed) * 10000)."""
    x = math.sin(seed) * 10000
    return x - math.floor(x)


class SeedCounter:
    """Monotonically advancing seed; each draw consumes one seed value."""

    def __init__(self, seed: int):
        self.seed = seed

    def next(self) -> float:
        value = seeded_random(self.seed)
        self.seed += 1
        return value

    def next_int(self, upper: int, offset: int = 0) -> int:
        """Draw an integer in [offset, offset + upper)."""
        return math.floor(self.next() * upper) + offset


def pick_distinct(items: Sequence[T], count: int, counter: SeedCounter) -> List[T]:
    """Pick ``count`` distinct items, shuffled by one counter draw per item."""
    keyed = [(counter.next(), item) for item in items]
    keyed.sort(key=lambda pair: pair[0])
    return [item for _, item in keyed[: max(count, 0)]]
