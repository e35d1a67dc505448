"""
Tests for evolution/initializer.py.
"""
import pytest

from core.exceptions import EmptyCatalogError
from evolution.initializer import TeamGenerator, TeamInitializer
from evolution.population import FixedSizePopulation
from pokemon.pokedex import Pokedex


class TestInitializer:
    """Tests for generation 0 construction."""

    def test_builds_population(self, small_catalog, rng):
        """Generation 0 has the requested size and team size."""
        initializer = TeamInitializer(TeamGenerator(small_catalog, team_size=4), population_size=15)
        population = initializer.initialize(rng)

        assert isinstance(population, FixedSizePopulation)
        assert population.generation_id == 0
        assert len(population) == 15
        assert all(len(g) == 4 for g in population)

    def test_sizes_at_least_one(self, small_catalog):
        """Non-positive sizes are raised to one."""
        initializer = TeamInitializer(TeamGenerator(small_catalog, team_size=0), population_size=-3)
        assert initializer.generator.team_size == 1
        assert initializer.population_size == 1

    def test_empty_catalog_fails_fast(self, rng):
        """No teams can be built from an empty catalog."""
        initializer = TeamInitializer(TeamGenerator(Pokedex([])), population_size=5)
        with pytest.raises(EmptyCatalogError):
            initializer.initialize(rng)
