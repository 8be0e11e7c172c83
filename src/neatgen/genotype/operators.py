"""
NEAT Genetic Operators Module

This module defines the contract between the generational pipeline and the
genome-level collaborators: seed genome construction, cloning, mutation,
crossover and the compatibility distance used for speciation.

The pipeline treats genomes as opaque. The only structural assumptions it
makes are that a genome exposes 'node_genes' and 'conn_genes' mappings, and
that each connection gene carries a mutable 'weight'.

Classes:
    GenomeConstructionError: Raised when the seed genome cannot be built
    GeneticOperators:        Abstract base class for the genome collaborators
"""

from abc    import ABC, abstractmethod
from typing import Any, TYPE_CHECKING

from neatgen.genotype.organism import Organism
if TYPE_CHECKING:
    from neatgen.genotype.innovation_tracker import InnovationTracker
    from neatgen.random_source import RandomSource
    from neatgen.run.config import Config

class GenomeConstructionError(RuntimeError):
    """
    The seed genome for the initial population could not be constructed.
    """

class GeneticOperators(ABC):
    """
    Abstract base class for the genome-level operators used by the population.

    Subclasses must implement:
    - initial_genome(config, tracker): Build the seed genome
    - clone_genome(genome, new_id):    Deep copy a genome under a new identity
    - mutate(config, tracker, rng, organism):        Mutate an organism's genome in place
    - crossover(tracker, rng, parent1, parent2):     Produce a child organism
    - distance(config, organism_a, organism_b):      Compatibility distance (>= 0)

    Subclasses inherit:
    - clone_organism(organism, new_id): Wrap a cloned genome in a new, unevaluated Organism
    """

    @abstractmethod
    def initial_genome(self, config: 'Config', tracker: 'InnovationTracker') -> Any:
        """
        Build the seed genome cloned into the initial population.
        Raises GenomeConstructionError if the genome cannot be built.
        """
        pass

    @abstractmethod
    def clone_genome(self, genome: Any, new_id: int) -> Any:
        """
        Return an independent copy of 'genome' identified by 'new_id'.
        """
        pass

    @abstractmethod
    def mutate(self, config: 'Config', tracker: 'InnovationTracker',
               rng: 'RandomSource', organism: Organism) -> None:
        """
        Apply structural and weight mutation to the organism's genome, in place.
        """
        pass

    @abstractmethod
    def crossover(self, tracker: 'InnovationTracker', rng: 'RandomSource',
                  parent1: Organism, parent2: Organism) -> Organism:
        """
        Produce a new, unevaluated organism inheriting genes from both parents.
        """
        pass

    @abstractmethod
    def distance(self, config: 'Config', organism_a: Organism, organism_b: Organism) -> float:
        """
        Return the compatibility distance between two organisms.
        """
        pass

    def clone_organism(self, organism: Organism, new_id: int) -> Organism:
        return Organism(self.clone_genome(organism.genome, new_id), new_id)
