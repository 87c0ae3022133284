from __future__ import annotations

import random
from typing import Optional


class RNG(random.Random):
    """Seeded RNG so a given seed always yields the same station layout."""


def new_rng(seed: Optional[int] = None) -> RNG:
    """Fresh RNG for one grid; seed None draws from system entropy."""
    rng = RNG()
    rng.seed(seed)
    return rng
