"""
Crossover Operators
===================

Parents are paired at random and every pair yields two offspring. A
population of one genome is paired with itself; otherwise the members are
shuffled, one is dropped when the count is odd, and neighbours are paired.
Offspring are new, unscored genomes built over the first
``min(len(a), len(b))`` genes of their parents.
"""

from __future__ import annotations

import logging
import random
from typing import List, Sequence, Tuple

from evolution.genome import TeamGenome
from evolution.population import Population
from evolution.selection import GeneticOperator
from pokemon.model import Pokemon

logger = logging.getLogger(__name__)

Pair = Tuple[TeamGenome, TeamGenome]


def make_random_pairings(members: Sequence[TeamGenome], rng: random.Random) -> List[Pair]:
    """Pair members at random (see module docstring for the rules)."""
    if not members:
        return []
    if len(members) == 1:
        return [(members[0], members[0])]

    pool = list(members)
    rng.shuffle(pool)
    if len(pool) % 2:
        pool.pop()
    return [(pool[i], pool[i + 1]) for i in range(0, len(pool), 2)]


class CrossoverOperator(GeneticOperator):
    """Base for pairwise crossover."""

    name = "crossover"

    def apply(self, population: Population, rng: random.Random) -> Population:
        offspring = population.next_generation()
        for parent_a, parent_b in make_random_pairings(population.members, rng):
            for genes in self.cross(parent_a.genes, parent_b.genes, rng):
                offspring.add(TeamGenome(genes))
        return offspring

    def cross(
        self,
        genes_a: Sequence[Pokemon],
        genes_b: Sequence[Pokemon],
        rng: random.Random,
    ) -> Tuple[List[Pokemon], List[Pokemon]]:
        raise NotImplementedError


class UniformCrossover(CrossoverOperator):
    """Each gene comes from either parent with equal probability."""

    name = "uniform"

    def cross(self, genes_a, genes_b, rng):
        length = min(len(genes_a), len(genes_b))
        first = [genes_a[i] if rng.random() < 0.5 else genes_b[i] for i in range(length)]
        second = [genes_b[i] if rng.random() < 0.5 else genes_a[i] for i in range(length)]
        return first, second


class SinglePointCrossover(CrossoverOperator):
    """One cut in [1, length - 1]; heads and tails are exchanged."""

    name = "single_point"

    def cross(self, genes_a, genes_b, rng):
        length = min(len(genes_a), len(genes_b))
        if length < 2:
            return list(genes_a[:length]), list(genes_b[:length])

        cut = rng.randint(1, length - 1)
        first = list(genes_a[:cut]) + list(genes_b[cut:length])
        second = list(genes_b[:cut]) + list(genes_a[cut:length])
        return first, second


class TwoPointCrossover(CrossoverOperator):
    """Two distinct cuts; only the segment between them is exchanged."""

    name = "two_point"

    def cross(self, genes_a, genes_b, rng):
        length = min(len(genes_a), len(genes_b))
        if length < 2:
            return list(genes_a[:length]), list(genes_b[:length])

        start, end = sorted(rng.sample(range(length), 2))
        first = list(genes_a[:start]) + list(genes_b[start:end]) + list(genes_a[end:length])
        second = list(genes_b[:start]) + list(genes_a[start:end]) + list(genes_b[end:length])
        return first, second
