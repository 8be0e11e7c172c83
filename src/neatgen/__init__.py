"""
neatgen - the generational engine of NEAT (NeuroEvolution of Augmenting Topologies).

This package advances a population of evolving network topologies from one
generation to the next: species fitness aggregation, stagnation-based
extinction, truncation selection with elitism, fitness-proportionate
reproduction budgets, mutation/crossover dispatch, and distance-based
speciation. Genome encoding and the genetic operators themselves are
supplied by the caller through the GeneticOperators interface.

Main components:
- genotype: Organism envelope, ID source, genome collaborator contract
- pool: Species, selection, reproduction, speciation and the Population
- run: Configuration and the trial driver
- random_source: Seedable random source

Example:
    >>> from neatgen import Config, Trial
    >>> config = Config("config.ini")
    >>> class MyTrial(Trial):
    ...     def _evaluate_fitness(self, organism):
    ...         # Implement fitness evaluation
    ...         pass
    >>> trial = MyTrial(config, MyOperators())
    >>> trial.run()
"""

__version__ = "0.1.0"

# Import main classes for convenient access
from neatgen.run.config import Config
from neatgen.run.trial import Trial
from neatgen.genotype.innovation_tracker import InnovationTracker
from neatgen.genotype.operators import GeneticOperators, GenomeConstructionError
from neatgen.genotype.organism import Organism
from neatgen.pool.population import Population
from neatgen.pool.selection import SelectionError
from neatgen.pool.species import Species
from neatgen.random_source import RandomSource

__all__ = [
    "Config",
    "Trial",
    "InnovationTracker",
    "GeneticOperators",
    "GenomeConstructionError",
    "Organism",
    "Population",
    "SelectionError",
    "Species",
    "RandomSource",
]
