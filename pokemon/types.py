"""
Pokemon Type Interactions
=========================

Type names, effectiveness multipliers, immutable per-type multiplier tables,
and the pool that builds them once from an attacker x defender matrix.

A Pokemon's resistances and weaknesses are derived from the defensive
tables of its one or two types: the two multipliers against an attacking
type are combined by product, so a 2x weakness cancelled by a 0.5x
resistance is neutral, any immunity wins, and two weaknesses stack.
"""

from __future__ import annotations

import json
import logging
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterator, Mapping, Optional, Tuple

from core.exceptions import CatalogLoadError, InvalidTypeChartError

logger = logging.getLogger(__name__)

DEFAULT_TYPE_CHART = Path(__file__).parent / "data" / "type_effectiveness.json"


class TypeName(Enum):
    """All Pokemon types (Scarlet/Violet chart) plus an explicit sentinel."""
    NORMAL = "normal"
    FIGHTING = "fighting"
    FLYING = "flying"
    POISON = "poison"
    GROUND = "ground"
    ROCK = "rock"
    BUG = "bug"
    GHOST = "ghost"
    STEEL = "steel"
    FIRE = "fire"
    WATER = "water"
    GRASS = "grass"
    ELECTRIC = "electric"
    PSYCHIC = "psychic"
    ICE = "ice"
    DRAGON = "dragon"
    DARK = "dark"
    FAIRY = "fairy"
    UNDEFINED = "undefined"  # Missing second type

    @classmethod
    def defined(cls) -> Tuple["TypeName", ...]:
        """Every type except UNDEFINED, in chart order."""
        return tuple(t for t in cls if t is not cls.UNDEFINED)

    @classmethod
    def parse(cls, value: object) -> "TypeName":
        """
        Parse a type from an enum, its name or its value (case-insensitive).

        None and empty strings map to UNDEFINED.
        """
        if isinstance(value, TypeName):
            return value
        if value is None:
            return cls.UNDEFINED
        text = str(value).strip()
        if not text or text.lower() in ("none", "nan"):
            return cls.UNDEFINED
        try:
            return cls[text.upper()]
        except KeyError:
            raise InvalidTypeChartError(
                "Unknown Pokemon type",
                context={"type": text},
            ) from None


class Multiplier:
    """Damage multipliers of the Pokemon battle system."""

    # Offensive
    SUPER_EFFECTIVE = 2.0
    NOT_VERY_EFFECTIVE = 0.5
    NO_EFFECT = 0.0

    # Defensive
    WEAK_TO = 2.0
    RESISTS = 0.5
    IMMUNE_TO = 0.0

    NORMAL_EFFECTIVENESS = 1.0

    ALLOWED = frozenset({0.0, 0.5, 1.0, 2.0})


TOTAL_TYPE_COUNT = len(TypeName.defined())

EffectivenessMatrix = Mapping[TypeName, Mapping[TypeName, float]]


class PokemonType:
    """
    A type with its offensive and defensive multiplier tables.

    ``offensive[t]`` is the multiplier this type deals to ``t``;
    ``defensive[t]`` is the multiplier this type takes from ``t``.
    Both tables are read-only views. UNDEFINED has empty tables.
    """

    __slots__ = ("name", "offensive", "defensive")

    def __init__(
        self,
        name: TypeName,
        offensive: Optional[Mapping[TypeName, float]] = None,
        defensive: Optional[Mapping[TypeName, float]] = None,
    ):
        offensive = dict(offensive or {})
        defensive = dict(defensive or {})
        if name is TypeName.UNDEFINED and (offensive or defensive):
            raise InvalidTypeChartError("UNDEFINED type cannot carry multipliers")
        if name is not TypeName.UNDEFINED and not (offensive and defensive):
            raise InvalidTypeChartError(
                "Defined type needs offensive and defensive multipliers",
                context={"type": name.name},
            )
        self.name = name
        self.offensive: Mapping[TypeName, float] = MappingProxyType(offensive)
        self.defensive: Mapping[TypeName, float] = MappingProxyType(defensive)

    @classmethod
    def undefined(cls) -> "PokemonType":
        return cls(TypeName.UNDEFINED)

    @property
    def is_defined(self) -> bool:
        return self.name is not TypeName.UNDEFINED

    def defends_against(self, attacker: TypeName) -> float:
        """Multiplier taken from an attacking type (neutral when unspecified)."""
        if not self.is_defined:
            return Multiplier.NORMAL_EFFECTIVENESS
        return self.defensive.get(attacker, Multiplier.NORMAL_EFFECTIVENESS)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PokemonType):
            return NotImplemented
        return self.name is other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return f"PokemonType({self.name.name})"

    def __str__(self) -> str:
        return self.name.name


def derive_resistances_and_weaknesses(
    type1: PokemonType,
    type2: Optional[PokemonType] = None,
) -> Tuple[FrozenSet[TypeName], FrozenSet[TypeName]]:
    """
    Derive the resistance and weakness sets of a one- or two-type Pokemon.

    Args:
        type1: Primary type
        type2: Secondary type (None or UNDEFINED for single-type Pokemon)

    Returns:
        Tuple of (resistances, weaknesses); the sets are disjoint
    """
    resistances = set()
    weaknesses = set()
    for attacker in TypeName.defined():
        combined = type1.defends_against(attacker)
        if type2 is not None:
            combined *= type2.defends_against(attacker)
        if combined < Multiplier.NORMAL_EFFECTIVENESS:
            resistances.add(attacker)
        elif combined > Multiplier.NORMAL_EFFECTIVENESS:
            weaknesses.add(attacker)
    return frozenset(resistances), frozenset(weaknesses)


class TypePool:
    """
    Immutable registry of every PokemonType, built once from a type chart.

    Missing attacker/defender pairs in the chart are neutral (1.0).
    """

    def __init__(self, types: Mapping[TypeName, PokemonType]):
        self._types: Dict[TypeName, PokemonType] = dict(types)
        self._undefined = PokemonType.undefined()

    @classmethod
    def from_matrix(cls, matrix: Mapping[object, Mapping[object, float]]) -> "TypePool":
        """
        Build the pool from an attacker -> defender -> multiplier matrix.

        Keys may be TypeName members or type names in any case.

        Raises:
            InvalidTypeChartError: On unknown types or unsupported multipliers
        """
        offensive: Dict[TypeName, Dict[TypeName, float]] = {t: {} for t in TypeName.defined()}
        defensive: Dict[TypeName, Dict[TypeName, float]] = {t: {} for t in TypeName.defined()}

        for raw_attacker, row in matrix.items():
            attacker = TypeName.parse(raw_attacker)
            if attacker is TypeName.UNDEFINED:
                raise InvalidTypeChartError("Type chart cannot list UNDEFINED as attacker")
            for raw_defender, raw_multiplier in row.items():
                defender = TypeName.parse(raw_defender)
                if defender is TypeName.UNDEFINED:
                    raise InvalidTypeChartError("Type chart cannot list UNDEFINED as defender")
                multiplier = float(raw_multiplier)
                if multiplier not in Multiplier.ALLOWED:
                    raise InvalidTypeChartError(
                        "Unsupported multiplier",
                        context={
                            "attacker": attacker.name,
                            "defender": defender.name,
                            "multiplier": multiplier,
                        },
                    )
                offensive[attacker][defender] = multiplier
                defensive[defender][attacker] = multiplier

        # Fill neutral pairs so every defined type has complete tables
        for attacker in TypeName.defined():
            for defender in TypeName.defined():
                offensive[attacker].setdefault(defender, Multiplier.NORMAL_EFFECTIVENESS)
                defensive[defender].setdefault(attacker, Multiplier.NORMAL_EFFECTIVENESS)

        types = {
            name: PokemonType(name, offensive[name], defensive[name])
            for name in TypeName.defined()
        }
        logger.debug(f"TypePool built with {len(types)} types")
        return cls(types)

    @classmethod
    def from_json(cls, path: str | Path) -> "TypePool":
        """Load the pool from a JSON type chart file."""
        chart_path = Path(path)
        try:
            with chart_path.open("r", encoding="utf-8") as f:
                matrix = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogLoadError(
                "Cannot read type chart",
                context={"path": str(chart_path)},
                cause=e,
            ) from e
        if not isinstance(matrix, dict):
            raise CatalogLoadError(
                "Type chart must be a JSON object",
                context={"path": str(chart_path)},
            )
        return cls.from_matrix(matrix)

    @classmethod
    def default(cls) -> "TypePool":
        """The bundled Scarlet/Violet type chart."""
        return cls.from_json(DEFAULT_TYPE_CHART)

    def get(self, name: object) -> PokemonType:
        """
        Get a type by TypeName or name; UNDEFINED (or None) yields the sentinel.
        """
        type_name = TypeName.parse(name)
        if type_name is TypeName.UNDEFINED:
            return self._undefined
        return self._types[type_name]

    def __iter__(self) -> Iterator[PokemonType]:
        return iter(self._types.values())

    def __len__(self) -> int:
        return len(self._types)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, TypeName) and name in self._types
