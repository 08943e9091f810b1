"""Randomised height generator.

Heights follow a geometric distribution: starting at 0 a node is promoted
one level at a time with probability ``p`` until a trial fails or the
ceiling is reached, so ``P(height >= L) = p ** L`` below the ceiling and the
remaining tail mass is folded into ``max_level``.
"""
from __future__ import annotations

from random import random

__all__ = ["DEFAULT_MAX_LEVEL", "PROMOTION_PROBABILITY", "biased_random_level"]

DEFAULT_MAX_LEVEL = 16  # Supports > 65k elements on average.
PROMOTION_PROBABILITY = 0.5


def biased_random_level(max_level: int, p: float = PROMOTION_PROBABILITY) -> int:
    """Draw a height in ``[0, max_level]``."""
    if max_level < 0:
        raise ValueError(f"max_level must be >= 0, got {max_level}")
    if not 0.0 <= p < 1.0:
        raise ValueError(f"promotion probability must be in [0, 1), got {p}")
    lvl = 0
    while lvl < max_level and random() < p:
        lvl += 1
    return lvl
