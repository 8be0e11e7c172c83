"""
NEAT Species Module

This module implements the Species class for the NEAT algorithm.
A species represents a cluster of genetically similar organisms
that compete primarily within their own niche.

Classes:
    Species: Represents a single species with members and fitness tracking

Module Attributes:
    FITNESS_SHARING: fitness sharing policies, by name
"""

import numpy as np
from typing import Callable, TYPE_CHECKING

if TYPE_CHECKING:
    from neatgen.genotype import Organism

def _shared_fitness(fitness: float, species_size: int) -> float:
    return fitness / species_size

def _raw_fitness(fitness: float, species_size: int) -> float:
    return fitness

# Transforms applied to each member's fitness before summing it into the
# species fitness: (member fitness, species size) => contribution
FITNESS_SHARING: dict[str, Callable[[float, int], float]] = {
    'shared': _shared_fitness,
    'none'  : _raw_fitness,
}

class Species:
    """
    A species representing a cluster of genetically similar organisms in NEAT.

    In NEAT, the population is divided into species based on genetic similarity,
    allowing different evolutionary niches to develop independently. This protects
    innovative structures from being eliminated by competition with more mature
    solutions, as organisms only compete for reproduction budget within their
    own species.

    Each species keeps an example organism, used as the anchor for compatibility
    distance comparisons during speciation. Offspring join the first species
    whose example is close enough. Species track their best fitness over time
    and go extinct if they stagnate (fail to improve).

    Public Attributes:
        id:              Unique species identifier
        organisms:       Member organisms (fitness-descending once culled)
        age:             Number of generations this species has survived
        best_fitness:    Best primary fitness ever achieved by a member
        best_fit_age:    Age at which 'best_fitness' was recorded
        example:         Organism used for distance calculations during speciation
        current_fitness: Aggregated fitness for the current generation (None until calculated)

    Public Methods:
        calc_fitness(sharing):                    Aggregate member fitness, update the record
        is_stagnant(age_to_stagnation):           Check if species has stopped improving
        cull(survival_percent, elite_count):      Fitness-sorted survivors of truncation selection
        next_generation(example):                 The empty successor of this species

    Life Cycle:
    1. Created at initialization, or when an offspring fits no existing species
    2. Fitness is aggregated from its members once they have been evaluated
    3. Goes extinct if stagnant, unless it holds the fittest organism
    4. Survivors are culled, elites are carried over, offspring are bred
    5. Succeeded by a species with the same ID, one generation older
    6. Removed if no organism ends up in it after speciation
    """

    def __init__(self, species_id: int, example: 'Organism | None' = None,
                 organisms: 'list[Organism] | None' = None, age: int = 0,
                 best_fitness: float = -np.inf, best_fit_age: int = 0):
        """
        Initialize a new species.

        Parameters:
            species_id:   unique species identifier
            example:      the Organism that represents this species in the speciation process
            organisms:    initial members (defaults to the example alone, if given)
            age:          generations survived so far
            best_fitness: best fitness on record
            best_fit_age: age at which the best fitness was recorded
        """
        self.id: int = species_id
        self.example: 'Organism | None' = example

        if organisms is None:
            organisms = [example] if example is not None else []
        self.organisms: list['Organism'] = organisms

        self.age         : int   = age
        self.best_fitness: float = best_fitness
        self.best_fit_age: int   = best_fit_age

        self.current_fitness: float | None = None

    def calc_fitness(self, sharing: str = 'shared') -> float:
        """
        Aggregate the fitness of all members into the species fitness.

        Each member's primary fitness is passed through the fitness sharing
        policy and the results are summed. If the fittest member beats the
        species record, the record and the age at which it was set are updated.

        Parameters:
            sharing: name of the fitness sharing policy (see FITNESS_SHARING)

        Returns:
            The aggregated fitness, also stored in 'current_fitness'
        """
        if sharing not in FITNESS_SHARING:
            raise ValueError(f"Unknown fitness sharing policy: {sharing}")
        share = FITNESS_SHARING[sharing]

        size = len(self.organisms)
        self.current_fitness = sum(share(org.primary_fitness, size) for org in self.organisms)

        if self.organisms:
            best = max(org.primary_fitness for org in self.organisms)
            if best > self.best_fitness:
                self.best_fitness = best
                self.best_fit_age = self.age

        return self.current_fitness

    def is_stagnant(self, age_to_stagnation: int) -> bool:
        """
        A species is stagnant if its best fitness has not improved
        for 'age_to_stagnation' generations or more.
        """
        return self.age - self.best_fit_age >= age_to_stagnation

    def cull(self, survival_percent: float, elite_count: int) -> list['Organism']:
        """
        Truncation selection.

        Sorts the members by primary fitness (highest first) and keeps the top
        'survival_percent' of them, but never fewer than 'elite_count' and
        never fewer than one, nor more than the species holds. The species
        itself is left untouched.

        Returns:
            The surviving organisms, fitness-descending. The first 'elite_count'
            of them are the species' elite.
        """
        size = len(self.organisms)
        if size == 0:
            return []

        ranked = sorted(self.organisms, key=lambda org: org.primary_fitness, reverse=True)

        keep = int(survival_percent * size)
        keep = max(keep, elite_count, 1)
        keep = min(keep, size)
        return ranked[:keep]

    def next_generation(self, example: 'Organism') -> 'Species':
        """
        Create the successor of this species: same ID and fitness record,
        one generation older, anchored on 'example', and with no members yet.
        """
        return Species(self.id, example, organisms=[], age=self.age + 1,
                       best_fitness=self.best_fitness, best_fit_age=self.best_fit_age)

    def __len__(self):
        return len(self.organisms)

    def __str__(self):
        return f"Species {self.id}: {len(self.organisms)} organisms, age {self.age}"
