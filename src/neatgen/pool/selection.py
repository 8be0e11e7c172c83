"""
NEAT Selection Module

Fitness-proportionate ("roulette wheel") parent selection, used both within
a species and across the whole population.

Classes:
    SelectionError: Raised when no parent can be selected

Functions:
    pool_fitness(organisms):                  Total primary fitness of a candidate pool
    roulette_select(organisms, total, rng):   Select one organism, fitness-proportionately
"""

from typing import Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from neatgen.genotype import Organism
    from neatgen.random_source import RandomSource

class SelectionError(RuntimeError):
    """
    Selection was asked to pick from an empty pool, or from a pool
    with no positive fitness to distribute.
    """

def pool_fitness(organisms: Sequence['Organism']) -> float:
    """
    Sum the primary fitness of a pool, in pool order.

    Accumulating in the same order as 'roulette_select' walks the pool
    guarantees that the walk reaches the total exactly.
    """
    total = 0.0
    for org in organisms:
        total += org.primary_fitness
    return total

def roulette_select(organisms: Sequence['Organism'], total_fitness: float,
                    rng: 'RandomSource') -> 'Organism':
    """
    Select an organism with probability proportional to its primary fitness.

    A target is drawn uniformly in [0, total_fitness); the pool is walked
    accumulating fitness, and the first organism whose cumulative fitness
    meets or exceeds the target is returned.

    Parameters:
        organisms:     the candidate pool
        total_fitness: the pool's total primary fitness (see 'pool_fitness')
        rng:           random source

    Returns:
        The selected organism

    Raises:
        SelectionError: if the pool is empty, its total fitness is not
                        positive, or the walk never reaches the target
    """
    if not organisms:
        raise SelectionError("cannot select from an empty pool")
    if not total_fitness > 0.0:
        raise SelectionError(f"cannot select from a pool with total fitness {total_fitness}")

    target     = rng.random() * total_fitness
    cumulative = 0.0
    for org in organisms:
        cumulative += org.primary_fitness
        if cumulative >= target:
            return org

    raise SelectionError(f"selection target {target} exceeds pool fitness {cumulative}")
