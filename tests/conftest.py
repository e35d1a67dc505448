"""
Pytest configuration and shared fixtures for team optimizer tests.
"""

import random
import sys
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from evolution.genome import TeamGenome
from evolution.population import Population
from pokemon.model import Pokemon, Rarity
from pokemon.pokedex import Pokedex
from pokemon.types import TypePool


@pytest.fixture(scope="session")
def type_pool():
    """The bundled type chart."""
    return TypePool.default()


@pytest.fixture(scope="session")
def pokedex(type_pool):
    """The bundled sample Pokedex."""
    return Pokedex.default(type_pool)


@pytest.fixture
def make_pokemon(type_pool):
    """Factory for Pokemon with sensible defaults."""
    counter = {'next': 1}

    def _make(
        name=None,
        type1="NORMAL",
        type2=None,
        stats=(80, 80, 80, 80, 80, 80),
        number=None,
        rarity=Rarity.COMMON,
        total=0,
    ):
        if number is None:
            number = counter['next']
            counter['next'] += 1
        hp, attack, defense, special_attack, special_defense, speed = stats
        return Pokemon(
            number=number,
            name=name or f"Testmon{number}",
            type1=type_pool.get(type1),
            type2=type_pool.get(type2) if type2 else None,
            hp=hp,
            attack=attack,
            defense=defense,
            special_attack=special_attack,
            special_defense=special_defense,
            speed=speed,
            total=total,
            rarity=rarity,
        )

    return _make


@pytest.fixture
def make_population(make_pokemon):
    """Factory for populations of one-gene teams with given fitness values."""

    def _make(*fitness_values, generation_id=0):
        population = Population(generation_id)
        for value in fitness_values:
            population.add(TeamGenome([make_pokemon()], fitness=value))
        return population

    return _make


@pytest.fixture
def small_catalog(make_pokemon):
    """A catalog of six distinct single-type Pokemon."""
    return Pokedex([
        make_pokemon("Firemon", "FIRE"),
        make_pokemon("Watermon", "WATER"),
        make_pokemon("Grassmon", "GRASS"),
        make_pokemon("Rockmon", "ROCK"),
        make_pokemon("Steelmon", "STEEL"),
        make_pokemon("Fairymon", "FAIRY"),
    ])


@pytest.fixture
def rng():
    """Seeded random source."""
    return random.Random(1234)

