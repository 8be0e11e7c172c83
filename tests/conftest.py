"""Pytest configuration and shared fixtures."""

import pytest
import sys
from pathlib import Path
from unittest.mock import Mock

# Add the source directory to the Python path
root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir / 'src'))

from neatgen.genotype import GeneticOperators, GenomeConstructionError, InnovationTracker, Organism
from neatgen.random_source import RandomSource
from neatgen.run.config import Config


# ============================================================================
# A minimal genome and its operators
# ============================================================================

class ToyConnection:
    """Connection gene reduced to what the population touches: a weight."""

    def __init__(self, weight):
        self.weight = weight


class ToyGenome:
    """Genome with fixed nodes and innovation-keyed connections."""

    def __init__(self, genome_id, node_genes, conn_genes):
        self.id = genome_id
        self.node_genes = node_genes
        self.conn_genes = conn_genes

    def weights(self):
        return [conn.weight for conn in self.conn_genes.values()]


class ToyOperators(GeneticOperators):
    """
    Weight-only genetic operators.

    Mutation perturbs one connection weight, crossover averages homologous
    weights, and distance is the sum of absolute weight differences.
    Calls are counted so tests can tell which reproduction path was taken.
    """

    def __init__(self, fail=False, num_inputs=2):
        self.fail = fail
        self.num_inputs = num_inputs
        self.mutate_calls = 0
        self.crossover_calls = 0

    def initial_genome(self, config, tracker):
        if self.fail:
            raise GenomeConstructionError("no seed genome")
        output_id  = self.num_inputs
        node_genes = {node_id: 'node' for node_id in range(self.num_inputs + 1)}
        conn_genes = {tracker.get_innovation_number(node_id, output_id): ToyConnection(1.0)
                      for node_id in range(self.num_inputs)}
        return ToyGenome(0, node_genes, conn_genes)

    def clone_genome(self, genome, new_id):
        return ToyGenome(new_id,
                         dict(genome.node_genes),
                         {innov: ToyConnection(conn.weight) for innov, conn in genome.conn_genes.items()})

    def mutate(self, config, tracker, rng, organism):
        self.mutate_calls += 1
        conns = list(organism.genome.conn_genes.values())
        if conns:
            conns[rng.integer(len(conns))].weight += rng.gauss(0.0, 0.1)

    def crossover(self, tracker, rng, parent1, parent2):
        self.crossover_calls += 1
        child_id = tracker.next_id()
        genome   = self.clone_genome(parent1.genome, child_id)
        for innov, conn in genome.conn_genes.items():
            other = parent2.genome.conn_genes.get(innov)
            if other is not None:
                conn.weight = (conn.weight + other.weight) / 2.0
        return Organism(genome, child_id)

    def distance(self, config, organism_a, organism_b):
        conns_a = organism_a.genome.conn_genes
        conns_b = organism_b.genome.conn_genes
        shared  = conns_a.keys() & conns_b.keys()
        disjoint = len(conns_a.keys() ^ conns_b.keys())
        return disjoint + sum(abs(conns_a[i].weight - conns_b[i].weight) for i in shared)


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def mock_config():
    """Create a mock Config object with common parameters."""
    config = Mock(spec=Config)
    config.population_size = 10
    config.weight_init_mean = 0.0
    config.weight_init_stdev = 1.0
    config.seed = 42
    config.compatibility_threshold = 3.0
    config.elite_count = 1
    config.survival_percent = 0.5
    config.crossover_rate = 0.75
    config.interspecies_mating_rate = 0.0
    config.fitness_sharing = 'shared'
    config.age_to_stagnation = 5
    config.fitness_termination_check = False
    config.fitness_criterion = 'max'
    config.fitness_threshold = None
    config.max_number_generations = 5
    return config


@pytest.fixture
def tracker():
    return InnovationTracker()


@pytest.fixture
def rng():
    return RandomSource(42)


@pytest.fixture
def operators():
    return ToyOperators()


@pytest.fixture
def make_organism(tracker):
    """Factory for evaluated organisms carrying a ToyGenome."""
    def _make(fitness, weights=(1.0, 1.0), node_count=3):
        organism_id = tracker.next_id()
        node_genes  = {node_id: 'node' for node_id in range(node_count)}
        conn_genes  = {innov: ToyConnection(w) for innov, w in enumerate(weights)}
        return Organism(ToyGenome(organism_id, node_genes, conn_genes), organism_id, fitness)
    return _make


@pytest.fixture
def failing_operators():
    """Operators whose seed genome construction fails."""
    return ToyOperators(fail=True)
