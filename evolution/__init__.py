"""
Evolution engine: team genomes, populations, fitness, genetic operators,
the generational loop and the optimizer entry point.
"""

from .genome import TeamGenome
from .population import FixedSizePopulation, Population
from .fitness import FitnessFunction, TeamFitnessFunction, normalize
from .selection import (
    GeneticOperator,
    KTournamentSelection,
    RankSelection,
    RouletteWheelSelection,
    SelectionOperator,
)
from .crossover import (
    CrossoverOperator,
    SinglePointCrossover,
    TwoPointCrossover,
    UniformCrossover,
    make_random_pairings,
)
from .mutation import MutationOperator, SwapMutation
from .initializer import TeamGenerator, TeamInitializer
from .genetic_algorithm import SimpleGeneticAlgorithm
from .results import Results
from .optimizer import OptimizationResult, optimize_team, run_optimization

__all__ = [
    'TeamGenome',
    'FixedSizePopulation',
    'Population',
    'FitnessFunction',
    'TeamFitnessFunction',
    'normalize',
    'GeneticOperator',
    'KTournamentSelection',
    'RankSelection',
    'RouletteWheelSelection',
    'SelectionOperator',
    'CrossoverOperator',
    'SinglePointCrossover',
    'TwoPointCrossover',
    'UniformCrossover',
    'make_random_pairings',
    'MutationOperator',
    'SwapMutation',
    'TeamGenerator',
    'TeamInitializer',
    'SimpleGeneticAlgorithm',
    'Results',
    'OptimizationResult',
    'optimize_team',
    'run_optimization',
]
