"""
Fitness Evaluation
==================

``FitnessFunction`` scores every genome of a population and caches the best
member on it. ``TeamFitnessFunction`` is the team-composition score:

    fitness = HIGH * avg_stats
            + NORMAL * type_diversity
            + NORMAL * team_resistances
            + NORMAL * legendary_score
            + HIGH * common_weaknesses

Each sub-metric is mapped into [0, 100] with ``normalize``. Teams with more
than one mega evolution score exactly 0.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Dict, Optional

import numpy as np

from evolution.genome import TeamGenome
from evolution.population import Population
from pokemon.model import MAX_TOTAL_STATS_STANDARD, MIN_TOTAL_STATS
from pokemon.types import TOTAL_TYPE_COUNT

logger = logging.getLogger(__name__)

DEFAULT_TEAM_SIZE = 6


def normalize(
    x: float,
    min_x: float,
    max_x: float,
    min_y: float = 0.0,
    max_y: float = 100.0,
) -> float:
    """
    Linearly map x from [min_x, max_x] onto [min_y, max_y], clamped to [0, 100].

    Inverted bounds (min_x > max_x) are allowed and invert the mapping.
    A zero-width domain returns max_y (clamped).
    """
    if max_x == min_x:
        return float(min(max(max_y, 0.0), 100.0))
    value = (x - min_x) / (max_x - min_x) * (max_y - min_y) + min_y
    return float(min(max(value, 0.0), 100.0))


class FitnessFunction:
    """Base evaluator. Subclasses implement ``evaluate``."""

    @property
    def is_maximum(self) -> bool:
        """True when higher fitness is better."""
        return True

    def evaluate(self, genome: TeamGenome) -> float:
        raise NotImplementedError

    def evaluate_population(self, population: Population) -> Population:
        """Score every member, then cache the best one on the population."""
        best: Optional[TeamGenome] = None
        for genome in population:
            genome.fitness = self.evaluate(genome)
            if best is None or self.is_better(genome.fitness, best.fitness):
                best = genome
        population.best = best
        return population

    def is_better(self, candidate: float, incumbent: float) -> bool:
        if self.is_maximum:
            return candidate > incumbent
        return candidate < incumbent

    @property
    def name(self) -> str:
        return type(self).__name__


class TeamFitnessFunction(FitnessFunction):
    """Weighted team-composition fitness."""

    def __init__(
        self,
        team_size: int = DEFAULT_TEAM_SIZE,
        low: float = 0.5,
        normal: float = 1.0,
        high: float = 1.5,
    ):
        self.team_size = team_size
        self.low = low  # Reserved weight, unused by the current formula
        self.normal = normal
        self.high = high

    @classmethod
    def from_weights(cls, weights, team_size: int = DEFAULT_TEAM_SIZE) -> "TeamFitnessFunction":
        """Build from an object with low/normal/high attributes (FitnessWeights)."""
        return cls(team_size=team_size, low=weights.low, normal=weights.normal, high=weights.high)

    def evaluate(self, genome: TeamGenome) -> float:
        megas = sum(1 for p in genome.genes if p.is_mega_evolution)
        if megas > 1:
            return 0.0

        metrics = self.metrics(genome)
        return (
            self.high * metrics['avg_stats']
            + self.normal * metrics['type_diversity']
            + self.normal * metrics['team_resistances']
            + self.normal * metrics['legendary_score']
            + self.high * metrics['common_weaknesses']
        )

    def metrics(self, genome: TeamGenome) -> Dict[str, float]:
        """The five normalized sub-metrics of a team."""
        return {
            'avg_stats': self.avg_stats(genome),
            'type_diversity': self.type_diversity(genome),
            'team_resistances': self.team_resistances(genome),
            'legendary_score': self.legendary_score(genome),
            'common_weaknesses': self.common_weaknesses(genome),
        }

    def avg_stats(self, genome: TeamGenome) -> float:
        if not genome.genes:
            return 0.0
        totals = np.minimum([p.total for p in genome.genes], MAX_TOTAL_STATS_STANDARD)
        return normalize(float(np.mean(totals)), MIN_TOTAL_STATS, MAX_TOTAL_STATS_STANDARD)

    def type_diversity(self, genome: TeamGenome) -> float:
        distinct = {t for p in genome.genes for t in p.types}
        return normalize(len(distinct), 1, 2 * self.team_size)

    def team_resistances(self, genome: TeamGenome) -> float:
        covered = set()
        for p in genome.genes:
            covered |= p.resistances
        return normalize(len(covered), 1, TOTAL_TYPE_COUNT)

    def legendary_score(self, genome: TeamGenome) -> float:
        count = sum(p.rarity.legendary_weight for p in genome.genes)
        return normalize(count, self.team_size, 0)

    def common_weaknesses(self, genome: TeamGenome) -> float:
        occurrences = Counter(t for p in genome.genes for t in p.weaknesses)
        if not occurrences:
            return 100.0
        total = sum(occurrences.values())
        average = total / len(occurrences)
        return normalize(average, total, 1)
