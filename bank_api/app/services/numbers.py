from __future__ import annotations

import random
from typing import Callable, Optional

NumberGenerator = Callable[[], int]


class AccountNumberGenerator:
    """Draws account numbers uniformly from ``[1, upper_bound)``."""

    def __init__(self, upper_bound: int, rng: Optional[random.Random] = None) -> None:
        if upper_bound < 2:
            raise ValueError("upper_bound must leave room for at least one number")
        self.upper_bound = upper_bound
        self._rng = rng or random.Random()

    def __call__(self) -> int:
        return self._rng.randrange(1, self.upper_bound)
