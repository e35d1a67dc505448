"""
Tests for evolution/mutation.py.
"""
import pytest

from core.exceptions import EmptyCatalogError
from evolution.genome import TeamGenome
from evolution.mutation import SwapMutation
from evolution.population import Population
from pokemon.pokedex import Pokedex


def _population_of_teams(make_pokemon, teams=10, size=6, generation_id=0):
    population = Population(generation_id)
    for t in range(teams):
        population.add(TeamGenome([make_pokemon(f"T{t}M{i}") for i in range(size)], fitness=10.0))
    return population


class TestSwapMutation:
    """Tests for single-gene swap mutation."""

    def test_probability_zero_never_alters(self, make_pokemon, small_catalog, rng):
        """With probability 0 every genome passes through as-is."""
        population = _population_of_teams(make_pokemon)
        mutated = SwapMutation(small_catalog, probability=0.0).apply(population, rng)

        assert mutated.members == population.members
        assert mutated.generation_id == 1

    def test_probability_one_single_item_catalog(self, make_pokemon, rng):
        """With probability 1 and one catalog item, exactly one gene becomes that item."""
        only = make_pokemon("Onlymon", "DRAGON")
        catalog = Pokedex([only])
        population = _population_of_teams(make_pokemon)

        mutated = SwapMutation(catalog, probability=1.0).apply(population, rng)

        assert len(mutated) == len(population)
        for original, child in zip(population.members, mutated.members):
            assert child is not original
            changed = [i for i in range(6) if child.genes[i] != original.genes[i]]
            assert len(changed) == 1
            assert child.genes[changed[0]] == only
            assert child.fitness == 0.0

    def test_originals_untouched(self, make_pokemon, small_catalog, rng):
        """Mutation never edits genes in place."""
        population = _population_of_teams(make_pokemon, teams=3)
        snapshot = [g.genes for g in population]
        SwapMutation(small_catalog, probability=1.0).apply(population, rng)
        assert [g.genes for g in population] == snapshot

    def test_partial_probability(self, make_pokemon, small_catalog, rng):
        """Intermediate probabilities mutate some but not all teams."""
        population = _population_of_teams(make_pokemon, teams=200, size=2)
        mutated = SwapMutation(small_catalog, probability=0.3).apply(population, rng)
        passed_through = sum(1 for g in mutated if g in population)
        assert 0 < passed_through < 200

    def test_empty_catalog_fails(self, make_pokemon, rng):
        """Swapping from an empty catalog raises."""
        population = _population_of_teams(make_pokemon, teams=1)
        with pytest.raises(EmptyCatalogError):
            SwapMutation(Pokedex([]), probability=1.0).apply(population, rng)
