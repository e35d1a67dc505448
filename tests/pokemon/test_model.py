"""
Tests for pokemon/model.py - Pokemon construction invariants and rarity.
"""
import pytest

from core.exceptions import InvalidPokemonError
from pokemon.model import Pokemon, Rarity
from pokemon.types import TypeName


class TestPokemonConstruction:
    """Tests for Pokemon invariants."""

    def test_total_is_recomputed(self, make_pokemon):
        """An inconsistent total should be replaced by the stat sum."""
        pokemon = make_pokemon(stats=(10, 20, 30, 40, 50, 60), total=999)
        assert pokemon.total == 210

    def test_missing_primary_type_is_swapped(self, type_pool):
        """A Pokemon with only a secondary type gets it as primary."""
        pokemon = Pokemon(
            number=1,
            name="Swapmon",
            type1=type_pool.get(TypeName.UNDEFINED),
            type2=type_pool.get("GRASS"),
            hp=50,
        )
        assert pokemon.type1.name is TypeName.GRASS
        assert not pokemon.type2.is_defined
        assert pokemon.types == (TypeName.GRASS,)

    def test_missing_second_type_is_undefined(self, make_pokemon):
        """type2=None becomes the UNDEFINED sentinel."""
        pokemon = make_pokemon(type1="FIRE")
        assert pokemon.type2.name is TypeName.UNDEFINED

    def test_no_defined_type_rejected(self, type_pool):
        """A Pokemon needs at least one defined type."""
        with pytest.raises(InvalidPokemonError):
            Pokemon(number=1, name="Nomon", type1=type_pool.get(None), type2=None)

    def test_negative_stat_rejected(self, make_pokemon):
        """Negative stats are construction errors."""
        with pytest.raises(InvalidPokemonError):
            make_pokemon(stats=(50, -1, 50, 50, 50, 50))

    def test_defensive_profile_derived(self, make_pokemon):
        """Resistances and weaknesses come from the types."""
        pokemon = make_pokemon(type1="ELECTRIC")
        assert pokemon.weaknesses == {TypeName.GROUND}
        assert pokemon.resistances == {TypeName.FLYING, TypeName.STEEL, TypeName.ELECTRIC}

    def test_equality_by_number_and_name(self, make_pokemon):
        """Two Pokemon with the same number and name are equal."""
        a = make_pokemon("Pikachu", "ELECTRIC", number=25)
        b = make_pokemon("Pikachu", "ELECTRIC", number=25, stats=(1, 1, 1, 1, 1, 1))
        c = make_pokemon("Raichu", "ELECTRIC", number=25)
        assert a == b
        assert hash(a) == hash(b)
        assert a != c

    def test_to_dict(self, make_pokemon):
        """to_dict exposes names rather than enums."""
        data = make_pokemon("Lapras", "WATER", "ICE", number=131).to_dict()
        assert data['type1'] == "WATER"
        assert data['type2'] == "ICE"
        assert data['total'] == 480
        assert data['rarity'] == "COMMON"


class TestMegaEvolution:
    """Tests for the mega evolution flag."""

    def test_mega_names(self, make_pokemon):
        """Names containing 'Mega' are mega evolutions."""
        assert make_pokemon("Mega Charizard X", "FIRE").is_mega_evolution
        assert make_pokemon("Mega Gengar", "GHOST").is_mega_evolution

    def test_meganium_is_not_mega(self, make_pokemon):
        """Meganium contains 'Mega' but is not a mega evolution."""
        assert not make_pokemon("Meganium", "GRASS").is_mega_evolution

    def test_plain_name(self, make_pokemon):
        """Ordinary names are not mega evolutions."""
        assert not make_pokemon("Charizard", "FIRE").is_mega_evolution


class TestRarity:
    """Tests for rarity ordering and weights."""

    def test_tier_order(self):
        """Tiers should be ordered from common to mythical."""
        assert Rarity.COMMON < Rarity.SUB_LEGENDARY < Rarity.PSEUDO_LEGENDARY
        assert Rarity.PSEUDO_LEGENDARY < Rarity.LEGENDARY < Rarity.MYTHICAL

    def test_full_comparison_set(self):
        """Tiered members support <=, >, >= and sorting."""
        assert Rarity.COMMON <= Rarity.MYTHICAL
        assert Rarity.LEGENDARY <= Rarity.LEGENDARY
        assert Rarity.MYTHICAL >= Rarity.SUB_LEGENDARY
        assert Rarity.LEGENDARY > Rarity.PSEUDO_LEGENDARY
        assert not Rarity.COMMON >= Rarity.SUB_LEGENDARY
        shuffled = [Rarity.MYTHICAL, Rarity.COMMON, Rarity.LEGENDARY, Rarity.SUB_LEGENDARY, Rarity.PSEUDO_LEGENDARY]
        assert sorted(shuffled) == [
            Rarity.COMMON, Rarity.SUB_LEGENDARY, Rarity.PSEUDO_LEGENDARY, Rarity.LEGENDARY, Rarity.MYTHICAL,
        ]

    def test_paradox_is_not_ordered(self):
        """PARADOX sits outside the tier scale."""
        assert Rarity.PARADOX.tier is None
        with pytest.raises(TypeError):
            Rarity.PARADOX < Rarity.LEGENDARY
        with pytest.raises(TypeError):
            Rarity.MYTHICAL >= Rarity.PARADOX
        with pytest.raises(TypeError):
            sorted([Rarity.COMMON, Rarity.PARADOX])

    def test_legendary_weights(self):
        """Weights: 2 for legendary/mythical, 1 for sub-legendary/paradox, else 0."""
        assert Rarity.LEGENDARY.legendary_weight == 2
        assert Rarity.MYTHICAL.legendary_weight == 2
        assert Rarity.SUB_LEGENDARY.legendary_weight == 1
        assert Rarity.PARADOX.legendary_weight == 1
        assert Rarity.PSEUDO_LEGENDARY.legendary_weight == 0
        assert Rarity.COMMON.legendary_weight == 0

    def test_parse(self):
        """Rarity parses names in any case."""
        assert Rarity.parse("sub-legendary") is Rarity.SUB_LEGENDARY
        assert Rarity.parse("PARADOX") is Rarity.PARADOX
        with pytest.raises(InvalidPokemonError):
            Rarity.parse("shiny")
