"""
Integration tests for basic NEAT evolution.

These tests run complete trials on a toy problem (evolving connection
weights towards a target) and verify that the generational step makes
progress while keeping its bookkeeping invariants.

NOTE: These tests use a fixed random seed for reproducibility.
"""

import pytest

from neatgen.run.config import Config
from neatgen.run.trial import Trial


# ============================================================================
# Helper Trial Class
# ============================================================================

TARGET = (2.0, -2.0)


class TrialTargetTest(Trial):
    """Rewards connection weights close to TARGET."""

    def __init__(self, config, operators):
        super().__init__(config, operators, suppress_output=False)
        self.history = []

    def _evaluate_fitness(self, organism):
        error = sum((w - t) ** 2 for w, t in zip(organism.genome.weights(), TARGET))
        return [1.0 / (1.0 + error), error]

    def _report_progress(self):
        population = self._population
        self.history.append({
            'generation'     : population.generation,
            'best'           : population.get_fittest_organism().primary_fitness,
            'size'           : len(population.organisms()),
            'species'        : len(population.species),
            'mean_complexity': population.mean_complexity(),
        })

    def _final_report(self):
        pass


@pytest.fixture
def config():
    config = Config()
    config.population_size = 60
    config.max_number_generations = 40
    config.compatibility_threshold = 1.0
    config.elite_count = 2
    config.survival_percent = 0.3
    config.interspecies_mating_rate = 0.02
    config.seed = 42
    return config


# ============================================================================
# Test Basic Evolution
# ============================================================================

class TestBasicEvolution:

    def test_fitness_improves(self, config, operators):
        trial = TrialTargetTest(config, operators)
        trial.run()

        assert trial.history[-1]['best'] > trial.history[0]['best']
        assert trial.history[-1]["best"] > 0.8

    def test_population_size_constant(self, config, operators):
        trial = TrialTargetTest(config, operators)
        trial.run()

        assert all(entry['size'] == 60 for entry in trial.history)

    def test_at_least_one_species(self, config, operators):
        trial = TrialTargetTest(config, operators)
        trial.run()

        assert all(entry['species'] >= 1 for entry in trial.history)

    def test_fitness_vector_keeps_auxiliary_objective(self, config, operators):
        trial = TrialTargetTest(config, operators)
        trial.run()

        champion = trial._population.get_fittest_organism()
        assert len(champion.fitness) == 2
        assert champion.fitness[0] == pytest.approx(1.0 / (1.0 + champion.fitness[1]))

    def test_stagnation_threshold_zero_keeps_only_the_leader(self, config, operators):
        config.age_to_stagnation = 0
        config.max_number_generations = 5
        trial = TrialTargetTest(config, operators)
        trial.run()

        assert all(entry['size'] == 60 for entry in trial.history)
