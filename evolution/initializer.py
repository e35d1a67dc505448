"""
Generation-0 construction: random teams drawn from the catalog.
"""

from __future__ import annotations

import logging
import random

from evolution.genome import TeamGenome
from evolution.population import FixedSizePopulation, Population
from pokemon.pokedex import PokemonCatalog

logger = logging.getLogger(__name__)


class TeamGenerator:
    """Builds random teams of a fixed size (members may repeat)."""

    def __init__(self, catalog: PokemonCatalog, team_size: int = 6):
        self.catalog = catalog
        self.team_size = max(1, team_size)

    def generate(self, rng: random.Random) -> TeamGenome:
        return TeamGenome(self.catalog.random_pokemon(rng) for _ in range(self.team_size))


class TeamInitializer:
    """Creates the initial population."""

    def __init__(self, generator: TeamGenerator, population_size: int = 100):
        self.generator = generator
        self.population_size = max(1, population_size)

    def initialize(self, rng: random.Random) -> Population:
        """
        Generation 0 with ``population_size`` random teams.

        Raises:
            EmptyCatalogError: If the catalog has nothing to pick from
        """
        population = FixedSizePopulation(self.population_size, generation_id=0)
        while not population.is_full():
            population.add(self.generator.generate(rng))
        logger.debug(f"Initial population: {len(population)} teams of {self.generator.team_size}")
        return population
