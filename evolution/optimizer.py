"""
Team Optimizer Entry Point
==========================

Wires settings, catalog and operators into a SimpleGeneticAlgorithm run.

Usage:
    from evolution.optimizer import optimize_team

    result = optimize_team(selection="tournament", max_iterations=60, seed=7)
    print(result.team, result.fitness)
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Type

from config.settings_schema import (
    CatalogConfig,
    OptimizerConfig,
    Settings,
    load_validated_settings,
    settings_from_dict,
)
from core.exceptions import UnknownStrategyError
from evolution.crossover import (
    CrossoverOperator,
    SinglePointCrossover,
    TwoPointCrossover,
    UniformCrossover,
)
from evolution.fitness import TeamFitnessFunction
from evolution.genetic_algorithm import SimpleGeneticAlgorithm
from evolution.initializer import TeamGenerator, TeamInitializer
from evolution.mutation import SwapMutation
from evolution.results import Results
from evolution.selection import (
    KTournamentSelection,
    RankSelection,
    RouletteWheelSelection,
    SelectionOperator,
)
from pokemon.model import Pokemon
from pokemon.pokedex import Pokedex, PokemonCatalog
from pokemon.types import TypePool

logger = logging.getLogger(__name__)


SELECTION_STRATEGIES: Dict[str, Type[SelectionOperator]] = {
    "roulette": RouletteWheelSelection,
    "rank": RankSelection,
    "tournament": KTournamentSelection,
}

CROSSOVER_STRATEGIES: Dict[str, Type[CrossoverOperator]] = {
    "uniform": UniformCrossover,
    "single_point": SinglePointCrossover,
    "two_point": TwoPointCrossover,
}


def _strategy_key(name: str) -> str:
    return name.strip().lower().replace("-", "_")


def build_selection(config: OptimizerConfig) -> SelectionOperator:
    """Instantiate the configured selection operator."""
    key = _strategy_key(config.selection)
    if key not in SELECTION_STRATEGIES:
        raise UnknownStrategyError(
            "Unknown selection strategy",
            context={"selection": config.selection, "known": sorted(SELECTION_STRATEGIES)},
        )
    if key == "tournament":
        return KTournamentSelection(k=config.tournament_size, proportional=config.tournament_proportional)
    return SELECTION_STRATEGIES[key]()


def build_crossover(config: OptimizerConfig) -> CrossoverOperator:
    """Instantiate the configured crossover operator."""
    key = _strategy_key(config.crossover)
    if key not in CROSSOVER_STRATEGIES:
        raise UnknownStrategyError(
            "Unknown crossover strategy",
            context={"crossover": config.crossover, "known": sorted(CROSSOVER_STRATEGIES)},
        )
    return CROSSOVER_STRATEGIES[key]()


def load_catalog(config: Optional[CatalogConfig] = None) -> Pokedex:
    """Load the type chart and Pokedex named in the catalog settings (bundled data by default)."""
    config = config or CatalogConfig()
    type_pool = TypePool.from_json(config.type_chart_path) if config.type_chart_path else TypePool.default()
    if not config.pokedex_path:
        return Pokedex.default(type_pool)
    path = Path(config.pokedex_path)
    if path.suffix.lower() == ".json":
        return Pokedex.from_json(path, type_pool)
    return Pokedex.from_csv(path, type_pool)


def build_algorithm(
    settings: Settings,
    catalog: PokemonCatalog,
    rng: Optional[random.Random] = None,
) -> SimpleGeneticAlgorithm:
    """Assemble a SimpleGeneticAlgorithm from validated settings."""
    opt = settings.optimizer
    generator = TeamGenerator(catalog, team_size=opt.team_size)
    return SimpleGeneticAlgorithm(
        fitness_function=TeamFitnessFunction.from_weights(settings.fitness, team_size=opt.team_size),
        initializer=TeamInitializer(generator, population_size=opt.population_size),
        selection=build_selection(opt),
        crossover=build_crossover(opt),
        mutation=SwapMutation(catalog, probability=opt.gene_mutation_probability),
        mutation_probability=opt.mutation_probability,
        max_iterations=opt.max_iterations,
        max_no_improvements=opt.max_no_improvements,
        rng=rng,
        seed=opt.seed,
    )


def run_optimization(
    settings: Settings,
    catalog: PokemonCatalog,
    rng: Optional[random.Random] = None,
) -> Results:
    """Run one optimization and return the full Results."""
    return build_algorithm(settings, catalog, rng).run()


@dataclass
class OptimizationResult:
    """Summary handed back to the host."""
    team: List[Pokemon]
    fitness: float
    iterations: int
    log: List[str] = field(default_factory=list)
    selection: str = ""
    crossover: str = ""
    best_average_fitness: float = 0.0

    @classmethod
    def from_results(cls, results: Results, config: OptimizerConfig) -> "OptimizationResult":
        best = results.best_individual
        return cls(
            team=list(best.genes) if best else [],
            fitness=best.fitness if best else 0.0,
            iterations=results.number_of_iterations,
            log=list(results.log),
            selection=config.selection,
            crossover=config.crossover,
            best_average_fitness=results.best_generation.average_fitness() if results.best_generation else 0.0,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'team': [p.to_dict() for p in self.team],
            'fitness': self.fitness,
            'iterations': self.iterations,
            'selection': self.selection,
            'crossover': self.crossover,
            'best_average_fitness': self.best_average_fitness,
            'log': self.log,
        }


def optimize_team(
    catalog: Optional[PokemonCatalog] = None,
    settings: Optional[Settings] = None,
    config_path: Optional[str | Path] = None,
    rng: Optional[random.Random] = None,
    **overrides: Any,
) -> OptimizationResult:
    """
    Optimize a team end to end.

    Args:
        catalog: Pokemon catalog; loaded from the catalog settings when omitted
        settings: Validated settings; loaded from YAML when omitted
        config_path: Explicit YAML path used when settings are omitted
        rng: Random source (overrides the configured seed)
        **overrides: Optimizer settings to override (e.g. selection="roulette")

    Returns:
        OptimizationResult with the best team found

    Raises:
        ConfigurationError: On invalid settings or overrides
        CatalogError: If the catalog cannot be loaded or is empty
        OperatorError: If a genetic operator fails mid-run
    """
    if settings is None:
        settings = load_validated_settings(config_path)
    if overrides:
        raw = settings.model_dump()
        raw["optimizer"].update(overrides)
        settings = settings_from_dict(raw)
    if catalog is None:
        catalog = load_catalog(settings.catalog)

    results = run_optimization(settings, catalog, rng)
    result = OptimizationResult.from_results(results, settings.optimizer)
    logger.info(
        f"Best team ({result.fitness:.2f}) after {result.iterations} generations: "
        f"{', '.join(p.name for p in result.team)}"
    )
    return result
