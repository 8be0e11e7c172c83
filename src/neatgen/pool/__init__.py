"""
NEAT Pool Package

This package implements the population-level machinery of the NEAT algorithm:
species, parent selection, reproduction, speciation, and the generational step.

Modules:
    species:         Species class and fitness sharing policies
    selection:       Roulette wheel selection and SelectionError
    reproduction:    Reproduction class
    species_manager: SpeciesManager class
    population:      Population class

Exported Classes:
    Population:     One generation, and the step to the next one
    Reproduction:   Elitism, mutation and crossover dispatch
    SelectionError: Raised when no parent can be selected
    Species:        A cluster of genetically similar organisms
    SpeciesManager: Fitness aggregation, extinction, budgets, speciation
"""

from neatgen.pool.population      import Population
from neatgen.pool.reproduction    import Reproduction
from neatgen.pool.selection       import SelectionError, roulette_select
from neatgen.pool.species         import Species, FITNESS_SHARING
from neatgen.pool.species_manager import SpeciesManager

__all__ = ['FITNESS_SHARING',
           'Population',
           'Reproduction',
           'SelectionError',
           'Species',
           'SpeciesManager',
           'roulette_select']
