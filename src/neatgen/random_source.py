"""
NEAT Random Source Module

This module implements the RandomSource class, the single seedable source
of randomness threaded through every stochastic step of the generational
pipeline (initialization, culling, parent selection, mutation, crossover).

Classes:
    RandomSource: Seedable wrapper around a numpy random Generator
"""

import numpy as np

class RandomSource:
    """
    A seedable source of random draws.

    Every operation that needs randomness receives a RandomSource explicitly,
    rather than reaching for a module-level generator. Two RandomSource
    instances created with the same seed, and queried in the same order,
    produce identical draws, so whole runs can be replayed.

    Public Attributes:
        seed: The seed used to create the underlying generator (None = OS entropy)

    Public Methods:
        random():           Uniform draw in [0, 1)
        gauss(mean, stdev): Gaussian draw
        integer(n):         Uniform integer draw in [0, n)
        reseed(seed):       Restart the generator from a new seed
    """

    def __init__(self, seed: int | None = None):
        self.seed: int | None = seed
        self._rng = np.random.default_rng(seed)

    def reseed(self, seed: int | None = None) -> None:
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def random(self) -> float:
        return float(self._rng.random())

    def gauss(self, mean: float = 0.0, stdev: float = 1.0) -> float:
        return float(self._rng.normal(mean, stdev))

    def integer(self, n: int) -> int:
        """
        Uniform integer draw in [0, n).

        Parameters:
            n: exclusive upper bound, must be positive
        """
        if n <= 0:
            raise ValueError(f"integer() upper bound must be positive, got {n}")
        return int(self._rng.integers(0, n))
