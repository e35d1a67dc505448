"""
Populations
===========

A generation of team genomes: duplicate-free, insertion-ordered, tagged with
a generation id and a cached best member set by the fitness evaluator.
Insertion order matters only for reproducibility of seeded runs; the
population is otherwise treated as unordered.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, List, Optional

import numpy as np

from evolution.genome import TeamGenome

logger = logging.getLogger(__name__)


class Population:
    """A set of genomes belonging to one generation."""

    def __init__(self, generation_id: int = 0, members: Iterable[TeamGenome] = ()):
        self.generation_id = generation_id
        self.best: Optional[TeamGenome] = None
        # Dict keyed by genome keeps insertion order with identity membership
        self._members: Dict[TeamGenome, None] = {}
        for genome in members:
            self.add(genome)

    def add(self, genome: TeamGenome) -> bool:
        """Add a genome; False if it is already a member."""
        if genome in self._members:
            return False
        self._members[genome] = None
        return True

    @property
    def members(self) -> List[TeamGenome]:
        return list(self._members)

    def is_empty(self) -> bool:
        return not self._members

    def __len__(self) -> int:
        return len(self._members)

    def __iter__(self) -> Iterator[TeamGenome]:
        return iter(list(self._members))

    def __contains__(self, genome: object) -> bool:
        return genome in self._members

    def fitness_values(self) -> np.ndarray:
        return np.array([g.fitness for g in self._members], dtype=float)

    def average_fitness(self) -> float:
        """Arithmetic mean of member fitness, 0.0 when empty."""
        if not self._members:
            return 0.0
        return float(np.mean(self.fitness_values()))

    def compare_to(self, other: "Population") -> int:
        """Compare by average fitness: -1, 0 or 1."""
        mine = self.average_fitness()
        theirs = other.average_fitness()
        if mine < theirs:
            return -1
        if mine > theirs:
            return 1
        return 0

    def _empty_copy(self, generation_id: int) -> "Population":
        return Population(generation_id)

    def clone(self) -> "Population":
        """Shallow copy: same id, same best reference, same member references."""
        copy = self._empty_copy(self.generation_id)
        copy.best = self.best
        copy._members = dict(self._members)
        return copy

    def next_generation(self) -> "Population":
        """Empty population of the same kind with id + 1."""
        return self._empty_copy(self.generation_id + 1)

    def get_best(self, n: int = 1, maximize: bool = True) -> List[TeamGenome]:
        """Get the n best genomes by fitness."""
        ordered = sorted(self._members, key=lambda g: g.fitness, reverse=maximize)
        return ordered[:n]

    def get_stats(self) -> Dict[str, float]:
        """Get population statistics."""
        if not self._members:
            return {'best': 0.0, 'avg': 0.0, 'worst': 0.0, 'std': 0.0}
        fitnesses = self.fitness_values()
        return {
            'best': float(np.max(fitnesses)),
            'avg': float(np.mean(fitnesses)),
            'worst': float(np.min(fitnesses)),
            'std': float(np.std(fitnesses)),
        }

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(id={self.generation_id}, size={len(self)}, "
            f"avg={self.average_fitness():.4f})"
        )


class FixedSizePopulation(Population):
    """
    Population with a capacity.

    A negative capacity is clamped to 0; a capacity of 0 means unbounded.
    """

    def __init__(
        self,
        max_size: int,
        generation_id: int = 0,
        members: Iterable[TeamGenome] = (),
    ):
        if max_size < 0:
            logger.debug(f"Negative population capacity {max_size} clamped to 0")
        self.max_size = max(0, max_size)
        super().__init__(generation_id, members)

    @property
    def is_bounded(self) -> bool:
        return self.max_size > 0

    def is_full(self) -> bool:
        return self.is_bounded and len(self) >= self.max_size

    def add(self, genome: TeamGenome) -> bool:
        if self.is_full():
            return False
        return super().add(genome)

    def _empty_copy(self, generation_id: int) -> "FixedSizePopulation":
        return FixedSizePopulation(self.max_size, generation_id)
