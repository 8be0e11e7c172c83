"""
NEAT Population Module

This module implements the Population class, the top-level container of
one generation in the NEAT evolutionary algorithm, and the generational
step that produces the next one.

Classes:
    Population: One generation of species, and the step to the next generation
"""

import logging
from typing import TYPE_CHECKING

from neatgen.genotype.organism     import Organism
from neatgen.pool.reproduction     import Reproduction
from neatgen.pool.selection        import pool_fitness
from neatgen.pool.species          import Species
from neatgen.pool.species_manager  import SpeciesManager
if TYPE_CHECKING:
    from neatgen.genotype import GeneticOperators, InnovationTracker
    from neatgen.random_source import RandomSource
    from neatgen.run.config import Config

logger = logging.getLogger(__name__)

class Population:
    """
    One generation of evolving organisms in the NEAT algorithm, split into species.

    A Population is never modified to become the next generation: 'advance()'
    builds and returns a new Population, and the caller replaces the old one.
    The ID source and random source are owned by the caller and passed into
    every step, so that a run can be replayed from a seed.

    Public Attributes:
        generation: Generation number, starting at 1
        species:    Ordered list of Species

    Public Methods:
        initial(config, operators, tracker, rng): Create generation 1 (class method)
        advance(tracker, rng):                    Create the next generation
        organisms():                              All organisms, species by species
        mean_complexity():                        Mean population complexity
        get_fittest_organism():                   The organism with highest primary fitness
    """

    def __init__(self, config: 'Config', operators: 'GeneticOperators',
                 species: list[Species], generation: int = 1):
        """
        Parameters:
            config:     stores configuration parameters
            operators:  genome collaborators (clone, mutate, crossover, distance)
            species:    the species making up this generation
            generation: generation number
        """
        self._config    = config
        self._operators = operators

        self.generation: int           = generation
        self.species   : list[Species] = species

        self._species_manager = SpeciesManager(config, operators)
        self._reproduction    = Reproduction(config, operators)

    @classmethod
    def initial(cls, config: 'Config', operators: 'GeneticOperators',
                tracker: 'InnovationTracker', rng: 'RandomSource') -> 'Population':
        """
        Create the first generation: a single species holding 'population_size'
        clones of one seed genome, each with its connection weights independently
        re-randomized from a normal distribution.

        Raises:
            GenomeConstructionError: if the seed genome cannot be built
                                     (propagated from the operators as-is)
        """
        species     = Species(tracker.next_id())
        seed_genome = operators.initial_genome(config, tracker)

        for _ in range(config.population_size):
            organism_id = tracker.next_id()
            genome      = operators.clone_genome(seed_genome, organism_id)
            for conn in genome.conn_genes.values():
                conn.weight = rng.gauss(config.weight_init_mean, config.weight_init_stdev)
            species.organisms.append(Organism(genome, organism_id))
        species.example = species.organisms[0]

        return cls(config, operators, [species], generation=1)

    def advance(self, tracker: 'InnovationTracker', rng: 'RandomSource') -> 'Population':
        """
        Create the next generation through selection, reproduction and speciation.

        This is the main generational step in the NEAT algorithm. Every organism
        must have its fitness evaluated before calling it.

        Step 1: Fitness Aggregation
        - Aggregate the fitness of each species (using the fitness sharing policy)
        - Find the species holding the fittest organism; it is protected this step

        Step 2: Extinction
        - Drop species that have not improved for 'age_to_stagnation' generations,
          except the protected one

        Step 3: Culling
        - Sort each surviving species by fitness, keep the top 'survival_percent'
          (at least 'elite_count')
        - Pick a random survivor as the example of the species' successor

        Step 4: Reproduction
        - Allocate children to each species proportionally to its fitness
        - Carry the elite over unchanged, breed the rest of the budget
        - Truncate or top up so the generation has exactly 'population_size' organisms

        Step 5: Speciation
        - Assign the offspring to species by compatibility distance
        - Remove species that ended up without members

        Parameters:
            tracker: ID source; reset exactly once, before reproduction starts
            rng:     random source

        Returns:
            The next generation

        Raises:
            SelectionError: if a parent must be drawn from a pool with no positive fitness
        """
        config  = self._config
        manager = self._species_manager

        protected = manager.aggregate_fitness(self.species)
        living    = manager.select_survivors(self.species, protected)

        survivors    = {}  # species ID => culled organisms, fitness-descending
        next_species = []  # successors of the living species, in the same order
        for spec in living:
            kept = spec.cull(config.survival_percent, config.elite_count)
            survivors[spec.id] = kept
            next_species.append(spec.next_generation(kept[rng.integer(len(kept))]))

        population_pool    = [org for spec in living for org in survivors[spec.id]]
        population_fitness = pool_fitness(population_pool)

        allocations = manager.calculate_offspring_allocations(living)

        tracker.reset()
        children = []
        for spec, successor in zip(living, next_species):
            children.extend(self._reproduction.spawn(successor, survivors[spec.id], allocations[spec.id],
                                                     population_pool, population_fitness, tracker, rng))
        children = self._reproduction.fill(children, population_pool, population_fitness, tracker, rng)

        next_species = manager.speciate(next_species, children, tracker)
        next_species = manager.prune(next_species)

        logger.debug("generation %d: %d species, %d organisms",
                     self.generation + 1, len(next_species), len(children))
        return Population(config, self._operators, next_species, self.generation + 1)

    def organisms(self) -> list[Organism]:
        """
        All organisms of this generation, species by species, in member order.
        """
        return [org for spec in self.species for org in spec.organisms]

    def mean_complexity(self) -> float:
        """
        Mean population complexity: the total gene count (node genes plus
        connection genes) of each species, averaged over the number of species.

        Note that the average is taken over species, not organisms.
        Returns 0.0 for a population without species.
        """
        if not self.species:
            return 0.0
        total = sum(org.complexity for org in self.organisms())
        return total / len(self.species)

    def get_fittest_organism(self) -> Organism | None:
        """
        Find and return the organism with the highest primary fitness.
        Ties go to the organism seen first.

        Returns:
            The fittest organism, or None if the population is empty
        """
        organisms = self.organisms()
        if not organisms:
            return None
        return max(organisms, key=lambda org: org.primary_fitness)

    def __len__(self):
        return sum(len(spec.organisms) for spec in self.species)

    def __str__(self):
        return f"Population: Generation is {self.generation} with {len(self.species)} Species"
