"""
Mutation operator: replace one random team member with a random catalog pick.
"""

from __future__ import annotations

import logging
import random

from evolution.population import Population
from evolution.selection import GeneticOperator
from pokemon.pokedex import PokemonCatalog

logger = logging.getLogger(__name__)

DEFAULT_GENE_MUTATION_PROBABILITY = 0.3


class MutationOperator(GeneticOperator):
    name = "mutation"


class SwapMutation(MutationOperator):
    """
    Per genome, one draw against ``probability``: on success a new genome
    is built with one random position replaced by ``catalog.random_pokemon``;
    otherwise the genome passes through unchanged (same object).
    """

    name = "swap_mutation"

    def __init__(
        self,
        catalog: PokemonCatalog,
        probability: float = DEFAULT_GENE_MUTATION_PROBABILITY,
    ):
        self.catalog = catalog
        self.probability = probability

    def apply(self, population: Population, rng: random.Random) -> Population:
        mutated = population.next_generation()
        swaps = 0
        for genome in population:
            if rng.random() <= self.probability and genome.genes:
                position = rng.randrange(len(genome.genes))
                genome = genome.with_gene(position, self.catalog.random_pokemon(rng))
                swaps += 1
            mutated.add(genome)
        logger.debug(f"Mutation swapped {swaps}/{len(population)} teams")
        return mutated

    def __repr__(self) -> str:
        return f"SwapMutation(probability={self.probability})"
