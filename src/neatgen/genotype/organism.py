"""
NEAT Organism Module

This module implements the Organism class, the envelope pairing a genome
with the fitness it achieved.

Classes:
    Organism: A genome together with its fitness vector
"""

import math
import numpy as np
from typing import Any, Sequence

class Organism:
    """
    An organism in the NEAT population.

    The generational pipeline never looks inside the genome: it only needs to
    know that an organism exists, which genome it carries, and how fit it is.
    Fitness is a fixed-size vector so that fitness functions may report
    auxiliary objectives; index 0 is the primary value used for all ranking
    and selection.

    Public Attributes:
        ID:      Unique identifier (drawn from the InnovationTracker)
        genome:  The opaque genome encoding this organism's network
        fitness: Fitness vector (None until evaluated)

    Public properties:
        primary_fitness: fitness[0], the value used for selection and ranking
        complexity:      number of node genes plus number of connection genes

    Public Methods:
        set_fitness(value): Store a scalar or vector fitness
    """

    def __init__(self, genome: Any, organism_id: int, fitness: Sequence[float] | float | None = None):
        """
        Parameters:
            genome:      the genome carried by this organism
            organism_id: unique identifier
            fitness:     optional, already-evaluated fitness
        """
        self.ID     : int               = organism_id
        self.genome : Any               = genome
        self.fitness: np.ndarray | None = None
        if fitness is not None:
            self.set_fitness(fitness)

    def set_fitness(self, value: Sequence[float] | float) -> None:
        """
        Store the fitness of this organism as a 1-D float vector.
        A scalar becomes a vector of length one.
        """
        self.fitness = np.atleast_1d(np.asarray(value, dtype=float))

    @property
    def primary_fitness(self) -> float:
        """
        The primary fitness value, fitness[0].
        NaN is treated as 0.0 (invalid networks get the worst fitness).
        """
        if self.fitness is None or len(self.fitness) == 0:
            raise ValueError(f"fitness of organism {self.ID} has not been evaluated")
        value = float(self.fitness[0])
        return 0.0 if math.isnan(value) else value

    @property
    def complexity(self) -> int:
        return len(self.genome.node_genes) + len(self.genome.conn_genes)

    def __str__(self):
        fitness = "n/a" if self.fitness is None else f"{self.primary_fitness:.4f}"
        return f"ID={self.ID}, fitness={fitness}"

    def __repr__(self):
        return f"Organism(ID={self.ID}, genome={self.genome!r})"
