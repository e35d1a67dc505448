"""
Tests for evolution/fitness.py - normalization and the team fitness formula.
"""
import pytest
from hypothesis import given
from hypothesis import strategies as st

from evolution.fitness import FitnessFunction, TeamFitnessFunction, normalize
from evolution.genome import TeamGenome
from evolution.population import Population
from pokemon.model import Pokemon, Rarity
from pokemon.types import TypePool

finite = st.floats(min_value=-1e6, max_value=1e6, allow_nan=False, allow_infinity=False)


class TestNormalize:
    """Tests for the clamped linear map."""

    def test_linear(self):
        """Maps the domain linearly onto [0, 100]."""
        assert normalize(5, 0, 10) == 50.0
        assert normalize(0, 0, 10) == 0.0
        assert normalize(10, 0, 10) == 100.0

    def test_clamped(self):
        """Values outside the domain are clamped."""
        assert normalize(20, 0, 10) == 100.0
        assert normalize(-5, 0, 10) == 0.0

    def test_inverted_bounds(self):
        """Inverted bounds invert the mapping."""
        assert normalize(0, 6, 0) == 100.0
        assert normalize(6, 6, 0) == 0.0
        assert normalize(3, 6, 0) == 50.0

    def test_zero_width_domain(self):
        """A zero-width domain returns max_y."""
        assert normalize(3, 4, 4) == 100.0
        assert normalize(3, 4, 4, 0, 40) == 40.0

    @given(x=finite, a=finite, b=finite)
    def test_always_within_bounds(self, x, a, b):
        """The result is always in [0, 100]."""
        assert 0.0 <= normalize(x, a, b) <= 100.0


class _MinimizingFitness(FitnessFunction):
    @property
    def is_maximum(self):
        return False

    def evaluate(self, genome):
        return genome.fitness


class _IdentityFitness(FitnessFunction):
    def evaluate(self, genome):
        return genome.fitness


class TestEvaluatePopulation:
    """Tests for population evaluation and best tracking."""

    def test_best_is_maximum(self, make_population):
        """Maximizing evaluators cache the highest member."""
        population = make_population(1.0, 9.0, 4.0)
        _IdentityFitness().evaluate_population(population)
        assert population.best.fitness == 9.0

    def test_best_is_minimum(self, make_population):
        """Minimizing evaluators cache the lowest member."""
        population = make_population(3.0, 1.0, 4.0)
        _MinimizingFitness().evaluate_population(population)
        assert population.best.fitness == 1.0

    def test_empty_population(self):
        """An empty population keeps best None."""
        population = Population()
        _IdentityFitness().evaluate_population(population)
        assert population.best is None

    def test_base_evaluate_not_implemented(self):
        """The base class has no formula."""
        with pytest.raises(NotImplementedError):
            FitnessFunction().evaluate(TeamGenome([]))


class TestTeamFitness:
    """Tests for the team composition formula."""

    def test_two_megas_score_zero(self, make_pokemon):
        """More than one mega evolution forces fitness to exactly 0."""
        genome = TeamGenome([
            make_pokemon("Mega Venusaur", "GRASS", "POISON"),
            make_pokemon("Mega Blastoise", "WATER"),
            make_pokemon("Pikachu", "ELECTRIC"),
        ])
        assert TeamFitnessFunction().evaluate(genome) == 0.0

    def test_one_mega_is_scored(self, make_pokemon):
        """A single mega evolution is allowed."""
        genome = TeamGenome([
            make_pokemon("Mega Venusaur", "GRASS", "POISON"),
            make_pokemon("Meganium", "GRASS"),
        ])
        assert TeamFitnessFunction().evaluate(genome) > 0.0

    def test_avg_stats_capped(self, make_pokemon):
        """Totals above 600 are capped before averaging."""
        fitness = TeamFitnessFunction()
        strong = make_pokemon(stats=(130, 130, 130, 130, 130, 130))  # 780
        weak = make_pokemon(stats=(30, 30, 30, 30, 30, 25))  # 175
        assert fitness.avg_stats(TeamGenome([strong])) == 100.0
        assert fitness.avg_stats(TeamGenome([weak])) == 0.0
        assert fitness.avg_stats(TeamGenome([strong, weak])) == pytest.approx(
            normalize((600 + 175) / 2, 175, 600)
        )

    def test_type_diversity(self, make_pokemon):
        """Distinct defined types over [1, 2 x team size]."""
        fitness = TeamFitnessFunction(team_size=6)
        mono = TeamGenome([make_pokemon(type1="NORMAL") for _ in range(6)])
        assert fitness.type_diversity(mono) == 0.0

        mixed = TeamGenome([
            make_pokemon(type1="FIRE", type2="FLYING"),
            make_pokemon(type1="WATER", type2="GROUND"),
        ])
        assert fitness.type_diversity(mixed) == pytest.approx(normalize(4, 1, 12))

    def test_team_resistances(self, make_pokemon):
        """Union of resistance sets over [1, 18]."""
        fitness = TeamFitnessFunction()
        genome = TeamGenome([make_pokemon(type1="FIRE"), make_pokemon(type1="NORMAL")])
        # Fire resists six types, Normal is immune to Ghost
        assert fitness.team_resistances(genome) == pytest.approx(normalize(7, 1, 18))

    def test_legendary_score_inverted(self, make_pokemon):
        """More legendary weight means a lower score."""
        fitness = TeamFitnessFunction(team_size=6)
        commons = TeamGenome([make_pokemon() for _ in range(6)])
        assert fitness.legendary_score(commons) == 100.0

        stacked = TeamGenome(
            [make_pokemon(rarity=Rarity.LEGENDARY) for _ in range(3)]
            + [make_pokemon() for _ in range(3)]
        )
        assert fitness.legendary_score(stacked) == 0.0

        mixed = TeamGenome([make_pokemon(rarity=Rarity.SUB_LEGENDARY), make_pokemon(rarity=Rarity.PARADOX)])
        assert fitness.legendary_score(mixed) == pytest.approx(normalize(2, 6, 0))

    def test_common_weaknesses(self, make_pokemon):
        """Shared weaknesses lower the score."""
        fitness = TeamFitnessFunction()
        # Two Fire types share Water, Ground and Rock: total 6, average 2
        genome = TeamGenome([make_pokemon(type1="FIRE"), make_pokemon(type1="FIRE")])
        assert fitness.common_weaknesses(genome) == pytest.approx(80.0)

    def test_no_weaknesses_scores_maximum(self):
        """A team without any weakness scores 100."""
        neutral = TypePool.from_matrix({})
        pokemon = Pokemon(number=1, name="Plainmon", type1=neutral.get("NORMAL"), hp=100)
        assert TeamFitnessFunction().common_weaknesses(TeamGenome([pokemon])) == 100.0

    def test_weighted_sum(self, make_pokemon):
        """Fitness is the weighted sum of the sub-metrics."""
        fitness = TeamFitnessFunction(normal=2.0, high=3.0)
        genome = TeamGenome([
            make_pokemon(type1="WATER", type2="GROUND"),
            make_pokemon(type1="STEEL", type2="FLYING"),
            make_pokemon(type1="FIRE", rarity=Rarity.LEGENDARY),
        ])
        m = fitness.metrics(genome)
        expected = (
            3.0 * m['avg_stats'] + 2.0 * m['type_diversity'] + 2.0 * m['team_resistances']
            + 2.0 * m['legendary_score'] + 3.0 * m['common_weaknesses']
        )
        assert fitness.evaluate(genome) == pytest.approx(expected)

    def test_from_weights(self):
        """Weights can come from a settings object."""
        from config.settings_schema import FitnessWeights

        fitness = TeamFitnessFunction.from_weights(FitnessWeights(normal=0.8, high=2.0), team_size=3)
        assert fitness.normal == 0.8
        assert fitness.high == 2.0
        assert fitness.team_size == 3
