"""
NEAT Genotype Package

This package holds the genotype-side pieces the generational pipeline works
with: the organism envelope, the ID source, and the contract for the genome
collaborators (construction, cloning, mutation, crossover, distance).

Modules:
    organism:           Organism class
    innovation_tracker: InnovationTracker class
    operators:          GeneticOperators base class and GenomeConstructionError

Exported Classes:
    Organism:                A genome paired with a fitness vector
    InnovationTracker:       Owned ID source and per-generation innovation cache
    GeneticOperators:        Abstract base class for the genome collaborators
    GenomeConstructionError: Raised when the seed genome cannot be built
"""

from neatgen.genotype.innovation_tracker import InnovationTracker
from neatgen.genotype.operators          import GeneticOperators, GenomeConstructionError
from neatgen.genotype.organism           import Organism

__all__ = ['GeneticOperators',
           'GenomeConstructionError',
           'InnovationTracker',
           'Organism']
