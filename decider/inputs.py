# decider/inputs.py
from __future__ import annotations

import random
from typing import List, Optional

# Benchmark shape: 2000 values in [-65000, 65000).
DEFAULT_COUNT = 2000
DEFAULT_LOW = -65000
DEFAULT_HIGH = 65000


def seeded(seed: Optional[int] = None) -> random.Random:
    return random.Random(seed)


def random_elements(
    count: int = DEFAULT_COUNT,
    low: int = DEFAULT_LOW,
    high: int = DEFAULT_HIGH,
    rng: Optional[random.Random] = None,
) -> List[int]:
    """
    Draw `count` integers uniformly from [low, high).

    Pass an rng built by seeded() for reproducible inputs; the module-level
    random state is never touched.
    """
    if count < 0:
        raise ValueError("count must be >= 0")
    if high <= low:
        raise ValueError(f"empty range [{low}, {high})")
    rng = rng or random.Random()
    return [rng.randrange(low, high) for _ in range(count)]
