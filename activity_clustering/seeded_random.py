"""Deterministic pseudo-random generator used to seed k-means++."""

from __future__ import annotations

MULTIPLIER = 9301
INCREMENT = 49297
MODULUS = 233280


class SeededRandom:
    """Linear-congruential generator reproducible from an integer seed.

    The recurrence ``seed = (seed * 9301 + 49297) % 233280`` is kept exact so
    fixtures computed elsewhere stay valid.
    """

    def __init__(self, seed: int = 42) -> None:
        self._state = int(seed)

    def next(self) -> float:
        """Advance the generator and return a float in [0, 1)."""

        self._state = (self._state * MULTIPLIER + INCREMENT) % MODULUS
        return self._state / MODULUS
