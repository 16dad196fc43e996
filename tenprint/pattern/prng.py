"""Stateless coordinate hash used to pick each cell's diagonal."""

import math


def seeded_random(x: int, y: int, seed: float) -> float:
    """Hash a grid coordinate and seed to a float in [0, 1).

    Args:
        x: Column index.
        y: Row index.
        seed: Pattern seed.

    Returns:
        The fractional part of ``sin(x * 12.9898 + y * 78.233 + seed) * 43758.5453``.
    """
    value = math.sin(x * 12.9898 + y * 78.233 + seed) * 43758.5453
    return value - math.floor(value)
