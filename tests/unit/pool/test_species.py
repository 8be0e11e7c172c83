"""
Unit tests for neatgen.pool.species module.

This module contains tests for the Species class, which represents
a cluster of genetically similar organisms in NEAT.
"""

import math
import pytest

from neatgen.pool.species import Species, FITNESS_SHARING


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def ten_organisms(make_organism):
    """Ten organisms with distinct fitness 1..10, in scrambled order."""
    return [make_organism(float(f)) for f in (3, 9, 1, 10, 5, 7, 2, 8, 4, 6)]


# ============================================================================
# Test Species Initialization
# ============================================================================

class TestSpeciesInit:
    """Test Species.__init__ method."""

    def test_init_with_example_makes_it_the_only_member(self, make_organism):
        example = make_organism(1.0)
        species = Species(4, example)

        assert species.id == 4
        assert species.example is example
        assert species.organisms == [example]

    def test_init_without_example_is_empty(self):
        species = Species(4)

        assert species.example is None
        assert species.organisms == []

    def test_init_defaults(self):
        species = Species(1)

        assert species.age == 0
        assert species.best_fitness == -math.inf
        assert species.best_fit_age == 0
        assert species.current_fitness is None

    def test_len(self, ten_organisms):
        assert len(Species(1, organisms=ten_organisms)) == 10


# ============================================================================
# Test Fitness Aggregation
# ============================================================================

class TestSpeciesCalcFitness:
    """Test Species.calc_fitness method."""

    def test_shared_fitness_is_mean(self, make_organism):
        species = Species(1, organisms=[make_organism(f) for f in (1.0, 2.0, 3.0)])

        assert species.calc_fitness('shared') == pytest.approx(2.0)
        assert species.current_fitness == pytest.approx(2.0)

    def test_unshared_fitness_is_sum(self, make_organism):
        species = Species(1, organisms=[make_organism(f) for f in (1.0, 2.0, 3.0)])

        assert species.calc_fitness('none') == pytest.approx(6.0)

    def test_records_best_member_fitness_and_age(self, make_organism):
        species = Species(1, organisms=[make_organism(f) for f in (1.0, 7.0)], age=3)
        species.calc_fitness()

        assert species.best_fitness == 7.0
        assert species.best_fit_age == 3

    def test_does_not_lower_record(self, make_organism):
        species = Species(1, organisms=[make_organism(2.0)], age=6, best_fitness=5.0, best_fit_age=2)
        species.calc_fitness()

        assert species.best_fitness == 5.0
        assert species.best_fit_age == 2

    def test_equal_fitness_is_not_an_improvement(self, make_organism):
        species = Species(1, organisms=[make_organism(5.0)], age=6, best_fitness=5.0, best_fit_age=2)
        species.calc_fitness()

        assert species.best_fit_age == 2

    def test_uses_primary_fitness_only(self, make_organism):
        species = Species(1, organisms=[make_organism([2.0, 1000.0])])

        assert species.calc_fitness('none') == 2.0

    def test_empty_species_has_zero_fitness(self):
        species = Species(1)

        assert species.calc_fitness() == 0.0
        assert species.best_fitness == -math.inf

    def test_unknown_policy_raises(self, make_organism):
        species = Species(1, organisms=[make_organism(1.0)])

        with pytest.raises(ValueError, match="Unknown fitness sharing policy"):
            species.calc_fitness('bogus')

    def test_policies_registry(self):
        assert set(FITNESS_SHARING) == {'shared', 'none'}


# ============================================================================
# Test Stagnation
# ============================================================================

class TestSpeciesIsStagnant:
    """Test Species.is_stagnant method."""

    def test_stagnant_at_threshold(self):
        species = Species(1, age=5, best_fit_age=0)
        assert species.is_stagnant(5)

    def test_not_stagnant_below_threshold(self):
        species = Species(1, age=5, best_fit_age=1)
        assert not species.is_stagnant(5)

    def test_zero_threshold_makes_every_species_stagnant(self):
        species = Species(1, age=0, best_fit_age=0)
        assert species.is_stagnant(0)


# ============================================================================
# Test Culling
# ============================================================================

class TestSpeciesCull:
    """Test Species.cull method."""

    def test_keeps_top_fraction_sorted_descending(self, ten_organisms):
        species = Species(1, organisms=ten_organisms)
        survivors = species.cull(0.5, 1)

        assert [org.primary_fitness for org in survivors] == [10.0, 9.0, 8.0, 7.0, 6.0]

    def test_keep_count_rounds_down(self, ten_organisms):
        species = Species(1, organisms=ten_organisms)

        assert len(species.cull(0.25, 0)) == 2

    def test_elite_count_raises_keep_count(self, ten_organisms):
        species = Species(1, organisms=ten_organisms)

        assert len(species.cull(0.1, 4)) == 4

    def test_keep_count_clamped_to_size(self, ten_organisms):
        species = Species(1, organisms=ten_organisms)

        assert len(species.cull(0.5, 20)) == 10

    def test_keep_count_at_least_one(self, ten_organisms):
        species = Species(1, organisms=ten_organisms)

        assert len(species.cull(0.0, 0)) == 1

    def test_does_not_modify_members(self, ten_organisms):
        species = Species(1, organisms=list(ten_organisms))
        species.cull(0.5, 1)

        assert species.organisms == ten_organisms

    def test_empty_species(self):
        assert Species(1).cull(0.5, 1) == []


# ============================================================================
# Test Next Generation
# ============================================================================

class TestSpeciesNextGeneration:
    """Test Species.next_generation."""

    def test_successor_keeps_identity_and_record(self, make_organism):
        example = make_organism(3.0)
        species = Species(9, make_organism(1.0), age=4, best_fitness=12.0, best_fit_age=2)
        successor = species.next_generation(example)

        assert successor.id == 9
        assert successor.age == 5
        assert successor.best_fitness == 12.0
        assert successor.best_fit_age == 2
        assert successor.example is example

    def test_successor_has_no_members(self, make_organism):
        species = Species(9, make_organism(1.0))
        successor = species.next_generation(species.example)

        assert successor.organisms == []
        assert successor.current_fitness is None
