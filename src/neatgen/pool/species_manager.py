"""
NEAT Species Manager Module

This module implements the SpeciesManager class for the NEAT algorithm.
The manager holds the species-level policies of a generational step:
fitness aggregation, stagnation-based extinction, reproduction budgets,
and the speciation of offspring.

Speciation in NEAT:
In traditional genetic algorithms, new structural innovations often have lower
initial fitness and are quickly eliminated. NEAT addresses this by organizing
the population into species - groups of genetically similar organisms that
compete primarily within their own niche. This allows novel structures time to
optimize before facing global competition.

Key Concepts:
- Species: A cluster of genetically similar organisms
- Example: An organism used to define species membership
- Compatibility Threshold: Maximum genetic distance for same-species membership
- Explicit Fitness Sharing: Offspring allocation proportional to species fitness
- Stagnation: Species removed if they fail to improve over many generations

The Speciation Process:
- Each surviving species enters the next generation anchored on a random survivor
- Offspring are compared against the species examples, in species order
- An offspring joins the first species whose example is close enough
- Offspring that fit no species found a new species, later offspring may join it
- Species left without members are removed

Classes:
    SpeciesManager: Species-level policies of the generational step
"""

import logging
import numpy as np
from typing import TYPE_CHECKING

from neatgen.pool.species import Species
if TYPE_CHECKING:
    from neatgen.genotype import GeneticOperators, InnovationTracker
    from neatgen.pool.reproduction import Child
    from neatgen.run.config import Config

logger = logging.getLogger(__name__)

class SpeciesManager:
    """
    Applies the species-level policies of a generational step.

    Public Methods:
        aggregate_fitness(species):                   Aggregate species fitness, find the protected species
        select_survivors(species, protected):         Drop stagnant species
        calculate_offspring_allocations(living):      Reproduction budget per species
        speciate(next_species, children, tracker):    Cluster children into species
        prune(species):                               Remove species without members
    """

    def __init__(self, config: 'Config', operators: 'GeneticOperators'):
        """
        Parameters:
            config:    stores configuration parameters
            operators: genome collaborators (the compatibility distance)
        """
        self._config    = config
        self._operators = operators

    def aggregate_fitness(self, species: list[Species]) -> Species | None:
        """
        Calculate the aggregated fitness of every species, and find the
        species holding the fittest organism in the whole population.

        Ties go to the organism seen first, scanning species in order
        and organisms in order within each species.

        Returns:
            The species holding the fittest organism (None if there are no organisms)
        """
        best_species = None
        best_fitness = -np.inf
        for spec in species:
            spec.calc_fitness(self._config.fitness_sharing)
            for org in spec.organisms:
                if org.primary_fitness > best_fitness:
                    best_fitness = org.primary_fitness
                    best_species = spec
        return best_species

    def select_survivors(self, species: list[Species], protected: Species | None) -> list[Species]:
        """
        Drop the species that have stagnated.

        A species survives if it holds the fittest organism of the population,
        or if it has improved its best fitness within the last
        'age_to_stagnation' generations. Species order is preserved.
        """
        living = []
        for spec in species:
            if spec is protected or not spec.is_stagnant(self._config.age_to_stagnation):
                living.append(spec)
            else:
                logger.info("species %d went extinct after %d stagnant generations",
                            spec.id, spec.age - spec.best_fit_age)
        return living

    def calculate_offspring_allocations(self, living: list[Species]) -> dict[int, int]:
        """
        Calculate how many children (elite included) each species should produce.

        Allocates children proportionally to species fitness relative to the total
        fitness of all living species, rounding down. When the total fitness is
        zero, every species gets an equal share.

        Returns:
            Dictionary mapping species ID to number of children
        """
        population_size = self._config.population_size
        total_fitness   = sum(spec.current_fitness for spec in living)

        allocations = {}
        for spec in living:
            if total_fitness == 0:
                allocations[spec.id] = int(population_size / len(living))
            else:
                allocations[spec.id] = int(spec.current_fitness / total_fitness * population_size)
        return allocations

    def speciate(self, next_species: list[Species], children: list['Child'],
                 tracker: 'InnovationTracker') -> list[Species]:
        """
        Assign the children of the next generation to species.

        Elite children already know their species and are appended to it.
        Every other child is compared, in order, against the example of each
        species in 'next_species' (in list order, including species created
        earlier in this same pass), and joins the first one whose compatibility
        distance is below 'compatibility_threshold'. If none qualifies, a new
        species is created with the child as its only member and its example.

        This greedy first-match assignment depends on the order of both lists;
        that order is part of the contract, and is what makes runs reproducible.

        Parameters:
            next_species: successor species of the next generation (no members yet), extended in place
            children:     (home species or None, organism) pairs
            tracker:      ID source for new species

        Returns:
            'next_species'
        """
        threshold = self._config.compatibility_threshold

        for home, child in children:
            if home is not None:
                home.organisms.append(child)
                continue

            for spec in next_species:
                if self._operators.distance(self._config, child, spec.example) < threshold:
                    spec.organisms.append(child)
                    break
            else:
                spec = Species(tracker.next_id(), child)
                next_species.append(spec)
                logger.info("new species %d founded by organism %d", spec.id, child.ID)

        assigned_count = sum(len(spec.organisms) for spec in next_species)
        assert assigned_count == len(children), "Lost organisms during speciation!"
        return next_species

    def prune(self, species: list[Species]) -> list[Species]:
        """
        Remove the species that have no members.
        """
        return [spec for spec in species if spec.organisms]
