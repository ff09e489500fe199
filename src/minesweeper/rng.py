"""
Random number sources for mine placement.

Any object with ``randint(a, b)`` returning a uniform integer in the
inclusive range ``[a, b]`` can place mines, so ``random.Random`` works as
is and a numpy ``Generator`` works through ``NumpyRandom``.
"""
import random
from typing import Optional, Protocol

import numpy as np


class RandomSource(Protocol):
    """Uniform integer generator over an inclusive range."""

    def randint(self, a: int, b: int) -> int:
        ...


class NumpyRandom:
    """
    Adapter exposing a numpy Generator as a RandomSource.

    Args:
        generator: Generator to draw from (e.g. a Gymnasium ``np_random``).
    """

    def __init__(self, generator: np.random.Generator) -> None:
        self.generator = generator

    def randint(self, a: int, b: int) -> int:
        return int(self.generator.integers(a, b, endpoint=True))


def make_rng(seed: Optional[int] = None) -> RandomSource:
    """Create a RandomSource, reproducible when a seed is given."""
    return random.Random(seed)
