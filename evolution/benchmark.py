"""
Operator Benchmark
==================

Runs every selection x crossover combination several times on the same
catalog and records best fitness, generations and wall time per run.
"""

from __future__ import annotations

import itertools
import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np
import pandas as pd

from config.settings_schema import FitnessWeights, OptimizerConfig, Settings
from core.structured_log import jlog
from evolution.optimizer import CROSSOVER_STRATEGIES, SELECTION_STRATEGIES, run_optimization
from pokemon.pokedex import PokemonCatalog

logger = logging.getLogger(__name__)


@dataclass
class BenchmarkConfig:
    """Fixed GA settings shared by every benchmarked combination."""
    population_size: int = 200
    gene_mutation_probability: float = 0.3
    mutation_probability: float = 1.0
    max_iterations: int = 40
    max_no_improvements: int = 10
    team_size: int = 6
    repetitions: int = 3
    seed: Optional[int] = None
    selections: List[str] = field(default_factory=lambda: list(SELECTION_STRATEGIES))
    crossovers: List[str] = field(default_factory=lambda: list(CROSSOVER_STRATEGIES))

    def combinations(self) -> List[Tuple[str, str]]:
        return list(itertools.product(self.selections, self.crossovers))

    def settings_for(
        self,
        selection: str,
        crossover: str,
        run: int,
        weights: Optional[FitnessWeights] = None,
    ) -> Settings:
        seed = None if self.seed is None else self.seed + run
        return Settings(
            optimizer=OptimizerConfig(
                selection=selection,
                crossover=crossover,
                mutation_probability=self.mutation_probability,
                gene_mutation_probability=self.gene_mutation_probability,
                max_iterations=self.max_iterations,
                max_no_improvements=self.max_no_improvements,
                team_size=self.team_size,
                population_size=self.population_size,
                seed=seed,
            ),
            fitness=weights or FitnessWeights(),
        )


def run_benchmark(
    catalog: PokemonCatalog,
    config: Optional[BenchmarkConfig] = None,
    weights: Optional[FitnessWeights] = None,
) -> pd.DataFrame:
    """
    Benchmark every configured selection/crossover pair.

    Returns:
        DataFrame with one row per run: selection, crossover, run,
        best_fitness, best_average_fitness, iterations, elapsed_s
    """
    config = config or BenchmarkConfig()
    rows = []
    combos = config.combinations()
    logger.info(f"Benchmarking {len(combos)} combinations x {config.repetitions} runs")

    for selection, crossover in combos:
        for run in range(config.repetitions):
            settings = config.settings_for(selection, crossover, run, weights)
            started = time.perf_counter()
            results = run_optimization(settings, catalog)
            elapsed = time.perf_counter() - started

            best = results.best_individual
            rows.append({
                'selection': selection,
                'crossover': crossover,
                'run': run,
                'best_fitness': best.fitness if best else 0.0,
                'best_average_fitness': results.best_generation.average_fitness(),
                'iterations': results.number_of_iterations,
                'elapsed_s': elapsed,
            })

        jlog("benchmark_combination_done", selection=selection, crossover=crossover, runs=config.repetitions)

    return pd.DataFrame(rows)


def summarize_benchmark(frame: pd.DataFrame) -> pd.DataFrame:
    """Mean/std of best fitness, iterations and time per combination, best first."""
    if frame.empty:
        return pd.DataFrame(columns=[
            'selection', 'crossover', 'runs',
            'fitness_mean', 'fitness_std', 'iterations_mean', 'elapsed_mean',
        ])

    rows = []
    for (selection, crossover), group in frame.groupby(['selection', 'crossover'], sort=False):
        fitness = group['best_fitness'].to_numpy(dtype=float)
        rows.append({
            'selection': selection,
            'crossover': crossover,
            'runs': len(group),
            'fitness_mean': float(np.mean(fitness)),
            'fitness_std': float(np.std(fitness)),
            'iterations_mean': float(np.mean(group['iterations'].to_numpy(dtype=float))),
            'elapsed_mean': float(np.mean(group['elapsed_s'].to_numpy(dtype=float))),
        })
    summary = pd.DataFrame(rows)
    return summary.sort_values('fitness_mean', ascending=False).reset_index(drop=True)
