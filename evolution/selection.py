"""
Selection Operators
===================

Each operator turns a scored population into a mating pool of the same size
and generation id + 1. Every selected member is a clone of its source
genome, so the same parent can appear several times as distinct members.

Wheel-based selection uses left-closed, right-open slots: a draw that lands
exactly on a slot boundary belongs to the slot that starts there.
"""

from __future__ import annotations

import logging
import random
from typing import List, Sequence

import numpy as np

from evolution.genome import TeamGenome
from evolution.population import Population

logger = logging.getLogger(__name__)

DEFAULT_TOURNAMENT_SIZE = 5


class GeneticOperator:
    """Common interface of selection, crossover and mutation operators."""

    name: str = "operator"

    def apply(self, population: Population, rng: random.Random) -> Population:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def spin_wheel(cumulative: np.ndarray, draw: float) -> int:
    """Index of the right-open slot containing draw on a cumulative wheel."""
    index = int(np.searchsorted(cumulative, draw, side='right'))
    return min(index, len(cumulative) - 1)


class SelectionOperator(GeneticOperator):
    """Base for operators that build a same-size mating pool."""

    name = "selection"

    def apply(self, population: Population, rng: random.Random) -> Population:
        selected = population.next_generation()
        if population.is_empty():
            return selected
        for genome in self.select(population.members, len(population), rng):
            selected.add(genome.clone())
        return selected

    def select(
        self,
        members: List[TeamGenome],
        count: int,
        rng: random.Random,
    ) -> Sequence[TeamGenome]:
        raise NotImplementedError


class RouletteWheelSelection(SelectionOperator):
    """Fitness-proportional selection; uniform when total fitness is not positive."""

    name = "roulette"

    def select(self, members, count, rng):
        fitness = np.array([g.fitness for g in members], dtype=float)
        total = float(fitness.sum())
        if total <= 0:
            return [members[rng.randrange(len(members))] for _ in range(count)]

        cumulative = np.cumsum(fitness) / total
        return [members[spin_wheel(cumulative, rng.random())] for _ in range(count)]


class RankSelection(SelectionOperator):
    """Selection proportional to rank (1 = worst) instead of raw fitness."""

    name = "rank"

    def select(self, members, count, rng):
        ordered = sorted(members, key=lambda g: g.fitness)
        ranks = np.arange(1, len(ordered) + 1, dtype=float)
        cumulative = np.cumsum(ranks) / ranks.sum()
        return [ordered[spin_wheel(cumulative, rng.random())] for _ in range(count)]


class KTournamentSelection(SelectionOperator):
    """
    Tournament selection over windows of k members sampled without replacement.

    In proportional mode the winner is drawn by fitness within the window,
    falling back to the fittest member when the window's total fitness is
    not positive.
    """

    name = "tournament"

    def __init__(self, k: int = DEFAULT_TOURNAMENT_SIZE, proportional: bool = False):
        self.k = max(1, k)
        self.proportional = proportional

    def select(self, members, count, rng):
        window_size = min(self.k, len(members))
        winners = []
        while len(winners) < count:
            window = rng.sample(members, window_size)
            winners.append(self._winner(window, rng))
        return winners

    def _winner(self, window: List[TeamGenome], rng: random.Random) -> TeamGenome:
        fittest = max(window, key=lambda g: g.fitness)
        if not self.proportional:
            return fittest

        fitness = np.array([g.fitness for g in window], dtype=float)
        total = float(fitness.sum())
        if total <= 0:
            return fittest
        cumulative = np.cumsum(fitness) / total
        return window[spin_wheel(cumulative, rng.random())]

    def __repr__(self) -> str:
        return f"KTournamentSelection(k={self.k}, proportional={self.proportional})"
