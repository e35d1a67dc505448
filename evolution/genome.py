"""
Team genome: a fixed-length tuple of Pokemon plus its fitness score.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, Tuple

from core.exceptions import InvalidFitnessError
from pokemon.model import Pokemon


class TeamGenome:
    """
    A candidate team.

    Genes are an immutable tuple; operators build new genomes instead of
    editing one. Equality is identity, so two clones are distinct members
    of a population.
    """

    __slots__ = ("genes", "_fitness")

    def __init__(self, genes: Iterable[Pokemon], fitness: float = 0.0):
        self.genes: Tuple[Pokemon, ...] = tuple(genes)
        self._fitness = 0.0
        self.fitness = fitness

    @property
    def fitness(self) -> float:
        return self._fitness

    @fitness.setter
    def fitness(self, value: float) -> None:
        value = float(value)
        if value < 0:
            raise InvalidFitnessError("Fitness cannot be negative", context={"fitness": value})
        self._fitness = value

    @property
    def team_size(self) -> int:
        return len(self.genes)

    def clone(self) -> "TeamGenome":
        """New genome with the same genes and fitness."""
        return TeamGenome(self.genes, self._fitness)

    def with_gene(self, index: int, pokemon: Pokemon) -> "TeamGenome":
        """New unscored genome with one position replaced."""
        genes = list(self.genes)
        genes[index] = pokemon
        return TeamGenome(genes)

    def __len__(self) -> int:
        return len(self.genes)

    def __iter__(self) -> Iterator[Pokemon]:
        return iter(self.genes)

    def __getitem__(self, index: int) -> Pokemon:
        return self.genes[index]

    def __repr__(self) -> str:
        names = ", ".join(p.name for p in self.genes)
        return f"TeamGenome([{names}], fitness={self._fitness:.4f})"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "team": [p.name for p in self.genes],
            "numbers": [p.number for p in self.genes],
            "fitness": self._fitness,
        }
