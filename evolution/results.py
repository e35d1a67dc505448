"""
Run results: every generation produced, the best one, and the run log.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional

import pandas as pd

from evolution.genome import TeamGenome
from evolution.population import Population

if TYPE_CHECKING:
    from evolution.genetic_algorithm import SimpleGeneticAlgorithm


@dataclass
class Results:
    """Output of one SimpleGeneticAlgorithm run."""
    algorithm: Optional["SimpleGeneticAlgorithm"] = None
    generations: List[Population] = field(default_factory=list)
    best_generation: Optional[Population] = None
    log: List[str] = field(default_factory=list)

    @property
    def number_of_iterations(self) -> int:
        """Populations produced, generation 0 included."""
        return len(self.generations)

    @property
    def last_generation(self) -> Optional[Population]:
        return self.generations[-1] if self.generations else None

    @property
    def best_individual(self) -> Optional[TeamGenome]:
        if self.best_generation is None:
            return None
        return self.best_generation.best

    def convergence_frame(self) -> pd.DataFrame:
        """Per-generation fitness statistics, one row per iteration."""
        rows = []
        for iteration, population in enumerate(self.generations):
            stats = population.get_stats()
            rows.append({
                'iteration': iteration,
                'generation_id': population.generation_id,
                'size': len(population),
                **stats,
            })
        return pd.DataFrame(rows, columns=['iteration', 'generation_id', 'size', 'best', 'avg', 'worst', 'std'])

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        best = self.best_individual
        return {
            'iterations': self.number_of_iterations,
            'best_generation_id': self.best_generation.generation_id if self.best_generation else None,
            'best_average_fitness': self.best_generation.average_fitness() if self.best_generation else None,
            'best_individual': best.to_dict() if best else None,
            'log': list(self.log),
        }
