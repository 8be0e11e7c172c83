"""
NEAT Reproduction Module

This module implements the Reproduction class, which turns the culled
survivors of each species into the offspring of the next generation.

Classes:
    Reproduction: Per-slot dispatch between elitism, mutation and crossover
"""

import logging
from typing import TYPE_CHECKING

from neatgen.pool.selection import pool_fitness, roulette_select
if TYPE_CHECKING:
    from neatgen.genotype import GeneticOperators, InnovationTracker, Organism
    from neatgen.pool.species import Species
    from neatgen.random_source import RandomSource
    from neatgen.run.config import Config

logger = logging.getLogger(__name__)

# A child of the next generation, tagged with the next-generation species it
# must join (elites), or None if speciation decides where it goes (offspring).
Child = tuple['Species | None', 'Organism']

class Reproduction:
    """
    Produces the children of the next generation.

    For each surviving species, the elite are carried over unchanged and the
    rest of the species' budget is filled one slot at a time: a slot may be
    deferred to the population-wide top-up (soft interspecies mating
    pressure), or filled by mutating a clone of a roulette-selected parent, or
    by crossing over two roulette-selected parents and mutating the result.
    Once every species has spawned, the children are truncated or topped up
    so that the next generation has exactly 'population_size' organisms.

    Configuration parameters used:
        - population_size
        - elite_count
        - crossover_rate
        - interspecies_mating_rate

    Public Methods:
        spawn(next_species, survivors, budget, ...): Children contributed by one species
        fill(children, ...):                         Truncate/top-up to the population size
    """

    def __init__(self, config: 'Config', operators: 'GeneticOperators'):
        """
        Parameters:
            config:    stores configuration parameters
            operators: genome collaborators (clone, mutate, crossover)
        """
        self._config    = config
        self._operators = operators

    def spawn(self,
              next_species      : 'Species',
              survivors         : list['Organism'],
              budget            : int,
              population_pool   : list['Organism'],
              population_fitness: float,
              tracker           : 'InnovationTracker',
              rng               : 'RandomSource') -> list[Child]:
        """
        Generate the children contributed by one species.

        Parameters:
            next_species:       the successor species the elite are carried into
            survivors:          the species' culled members, fitness-descending
            budget:             total number of children allotted to the species, elite included
            population_pool:    survivors of every living species, for interspecies mating
            population_fitness: total primary fitness of 'population_pool'
            tracker:            ID source
            rng:                random source

        Returns:
            The elite (tagged with 'next_species') followed by the new offspring (untagged)
        """
        config = self._config

        # Elitism: the top survivors go straight into the successor species.
        # They count against the budget, but are carried even if they exceed it.
        elites   = survivors[:config.elite_count]
        children = [(next_species, org) for org in elites]

        species_fitness = pool_fitness(survivors)
        for _ in range(budget - len(elites)):

            # Leave this slot to the population-wide top-up, which
            # may well mate organisms from different species
            if rng.random() < config.interspecies_mating_rate:
                continue

            parent1 = roulette_select(survivors, species_fitness, rng)

            # Mutation only
            if len(survivors) == 1 or rng.random() > config.crossover_rate:
                child = self._operators.clone_organism(parent1, tracker.next_id())
                self._operators.mutate(config, tracker, rng, child)

            # Crossover, then mutation
            else:
                if rng.random() < config.interspecies_mating_rate:
                    parent2 = roulette_select(population_pool, population_fitness, rng)
                else:
                    parent2 = roulette_select(survivors, species_fitness, rng)
                child = self._operators.crossover(tracker, rng, parent1, parent2)
                self._operators.mutate(config, tracker, rng, child)

            children.append((None, child))

        logger.debug("species %d: budget %d, %d elite, %d offspring",
                     next_species.id, budget, len(elites), len(children) - len(elites))
        return children

    def fill(self,
             children          : list[Child],
             population_pool   : list['Organism'],
             population_fitness: float,
             tracker           : 'InnovationTracker',
             rng               : 'RandomSource') -> list[Child]:
        """
        Bring the number of children to exactly 'population_size'.

        Surplus children are dropped from the end. Missing children are bred
        from two parents drawn from the whole population, crossed over and
        mutated.

        Elites are carried even past their species' budget, so a surplus can
        reach them: when the species spawned first already fill the population,
        the elites of later species are dropped along with their offspring and
        do not reappear in the next generation.
        """
        size = self._config.population_size

        if len(children) > size:
            logger.debug("dropping %d surplus children", len(children) - size)
            return children[:size]

        children = list(children)
        while len(children) < size:
            parent1 = roulette_select(population_pool, population_fitness, rng)
            parent2 = roulette_select(population_pool, population_fitness, rng)
            child   = self._operators.crossover(tracker, rng, parent1, parent2)
            self._operators.mutate(self._config, tracker, rng, child)
            children.append((None, child))
        return children
