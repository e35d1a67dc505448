"""
Simple Genetic Algorithm
========================

Generational loop over team populations:

    init -> evaluate(gen 0)
    repeat: select -> crossover -> maybe mutate -> evaluate -> improvement check

A generation improves when its average fitness beats the best generation so
far (in the evaluator's direction). The run stops once ``max_iterations``
populations exist (generation 0 included) or after ``max_no_improvements``
consecutive generations without improvement (0 disables early stopping).

Mutation is gated twice: one draw per generation against the algorithm's
``mutation_probability`` decides whether the mutation operator runs at all,
and the operator then draws per team.
"""

from __future__ import annotations

import logging
import random
import time
from typing import Callable, Optional

from core.exceptions import OperatorError
from core.structured_log import jlog
from evolution.fitness import FitnessFunction
from evolution.initializer import TeamInitializer
from evolution.population import Population
from evolution.results import Results
from evolution.selection import GeneticOperator

logger = logging.getLogger(__name__)

DEFAULT_MUTATION_PROBABILITY = 1.0
DEFAULT_MAX_ITERATIONS = 40
DEFAULT_MAX_NO_IMPROVEMENTS = 20

IMPROVEMENT_MARK = " ✅ Improvement"
EARLY_STOP_MARK = " ⏹️ Early stop"


class SimpleGeneticAlgorithm:
    """
    Generational genetic algorithm over team genomes.

    Out-of-range settings are clamped, not rejected: a mutation probability
    outside [0, 1] becomes 1.0, fewer than one iteration becomes one, and a
    negative no-improvement threshold becomes 0 (disabled).
    """

    def __init__(
        self,
        fitness_function: FitnessFunction,
        initializer: TeamInitializer,
        selection: GeneticOperator,
        crossover: GeneticOperator,
        mutation: GeneticOperator,
        mutation_probability: float = DEFAULT_MUTATION_PROBABILITY,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
        max_no_improvements: int = DEFAULT_MAX_NO_IMPROVEMENTS,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ):
        """
        Args:
            fitness_function: Scores populations and picks their best member
            initializer: Builds generation 0
            selection: Mating pool operator
            crossover: Offspring operator
            mutation: Gene swap operator
            mutation_probability: Chance the mutation operator runs on a generation
            max_iterations: Maximum populations produced, generation 0 included
            max_no_improvements: Early stop threshold (0 disables)
            rng: Random source; a new one seeded with ``seed`` when omitted
            seed: Seed for the default random source
        """
        if not 0.0 <= mutation_probability <= 1.0:
            logger.warning(f"Mutation probability {mutation_probability} out of [0, 1], using 1.0")
            mutation_probability = 1.0
        if max_iterations < 1:
            logger.warning(f"max_iterations={max_iterations} clamped to 1")
            max_iterations = 1
        if max_no_improvements < 0:
            logger.warning(f"max_no_improvements={max_no_improvements} clamped to 0")
            max_no_improvements = 0

        self.fitness_function = fitness_function
        self.initializer = initializer
        self.selection = selection
        self.crossover = crossover
        self.mutation = mutation
        self.mutation_probability = mutation_probability
        self.max_iterations = max_iterations
        self.max_no_improvements = max_no_improvements
        self.seed = seed
        self.rng = rng if rng is not None else random.Random(seed)

        logger.info(
            f"SimpleGeneticAlgorithm initialized: selection={selection!r}, "
            f"crossover={crossover!r}, mutation={mutation!r}, "
            f"max_iterations={max_iterations}, max_no_improvements={max_no_improvements}"
        )

    def _step(
        self,
        operator: str,
        generation_id: int,
        action: Callable[[], Population],
    ) -> Population:
        """Run one operator, re-raising failures with generation and operator context."""
        try:
            return action()
        except OperatorError:
            raise
        except Exception as e:
            logger.error(f"{operator} failed while building generation {generation_id}: {e}")
            raise OperatorError(
                f"{operator} failed",
                context={"generation": generation_id, "operator": operator},
                cause=e,
            ) from e

    def _apply(self, operator: GeneticOperator, population: Population) -> Population:
        return self._step(
            operator.name,
            population.generation_id + 1,
            lambda: operator.apply(population, self.rng),
        )

    def _evaluate(self, population: Population) -> Population:
        return self._step(
            self.fitness_function.name,
            population.generation_id,
            lambda: self.fitness_function.evaluate_population(population),
        )

    def _is_improvement(self, candidate: Population, incumbent: Population) -> bool:
        comparison = candidate.compare_to(incumbent)
        if self.fitness_function.is_maximum:
            return comparison > 0
        return comparison < 0

    @staticmethod
    def _log_line(iteration: int, population: Population, best: Population) -> str:
        return (
            f"Gen {iteration}) AvgFitness={population.average_fitness():.4f}"
            f"|BestSoFar={best.average_fitness():.4f}"
        )

    def run(self) -> Results:
        """
        Run the evolution.

        Returns:
            Results with every generation, the best one and the run log

        Raises:
            EmptyCatalogError: If generation 0 cannot be built
            OperatorError: If an operator or the evaluation fails mid-run
        """
        started = time.perf_counter()
        jlog(
            "ga_run_started",
            selection=self.selection.name,
            crossover=self.crossover.name,
            mutation=self.mutation.name,
            mutation_probability=self.mutation_probability,
            max_iterations=self.max_iterations,
            max_no_improvements=self.max_no_improvements,
            seed=self.seed,
        )

        results = Results(algorithm=self)

        first = self.initializer.initialize(self.rng)
        first = self._evaluate(first)
        results.generations.append(first)
        results.best_generation = first
        results.log.append(self._log_line(0, first, first))
        logger.debug(results.log[-1])

        no_improvements = 0
        stop_early = False
        current = first

        while results.number_of_iterations < self.max_iterations and not stop_early:
            mating_pool = self._apply(self.selection, current)
            offspring = self._apply(self.crossover, mating_pool)
            if self.rng.random() <= self.mutation_probability:
                offspring = self._apply(self.mutation, offspring)
            current = self._evaluate(offspring)
            results.generations.append(current)

            line_suffix = ""
            if self._is_improvement(current, results.best_generation):
                results.best_generation = current
                no_improvements = 0
                line_suffix += IMPROVEMENT_MARK
            else:
                no_improvements += 1

            if self.max_no_improvements > 0 and no_improvements >= self.max_no_improvements:
                stop_early = True
                line_suffix += EARLY_STOP_MARK

            iteration = results.number_of_iterations - 1
            results.log.append(self._log_line(iteration, current, results.best_generation) + line_suffix)
            logger.debug(results.log[-1])

        elapsed = time.perf_counter() - started
        best = results.best_individual
        logger.info(
            f"Evolution finished after {results.number_of_iterations} generations "
            f"(best avg={results.best_generation.average_fitness():.4f}, "
            f"early_stop={stop_early}, {elapsed:.2f}s)"
        )
        jlog(
            "ga_run_completed",
            iterations=results.number_of_iterations,
            best_generation_id=results.best_generation.generation_id,
            best_average_fitness=results.best_generation.average_fitness(),
            best_fitness=best.fitness if best else None,
            early_stop=stop_early,
            elapsed_s=round(elapsed, 4),
        )
        return results
