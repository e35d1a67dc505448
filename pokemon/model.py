"""
Pokemon Domain Model
====================

The selectable item of the optimizer: national dex number, name, one or two
types, six base stats, rarity, and the resistance/weakness sets derived from
its types when it is built.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional, Tuple

from core.exceptions import InvalidPokemonError
from pokemon.types import PokemonType, TypeName, derive_resistances_and_weaknesses

logger = logging.getLogger(__name__)

MIN_TOTAL_STATS = 175
MAX_TOTAL_STATS_STANDARD = 600
MAX_TOTAL_STATS_LEGENDARY = 780

STAT_NAMES: Tuple[str, ...] = (
    "hp",
    "attack",
    "defense",
    "special_attack",
    "special_defense",
    "speed",
)


class Rarity(Enum):
    """
    Pokemon rarity.

    COMMON < SUB_LEGENDARY < PSEUDO_LEGENDARY < LEGENDARY < MYTHICAL form an
    ordered scale. PARADOX is a tag outside that scale and does not compare.
    """
    COMMON = "common"
    SUB_LEGENDARY = "sub_legendary"
    PSEUDO_LEGENDARY = "pseudo_legendary"
    LEGENDARY = "legendary"
    MYTHICAL = "mythical"
    PARADOX = "paradox"

    @property
    def tier(self) -> Optional[int]:
        return _RARITY_TIERS.get(self)

    @property
    def legendary_weight(self) -> int:
        """Contribution to the team legendary count."""
        return _LEGENDARY_WEIGHTS.get(self, 0)

    def _tiers(self, other: "Rarity") -> Tuple[int, int]:
        if self.tier is None or other.tier is None:
            raise TypeError(f"{self.name} and {other.name} are not ordered")
        return self.tier, other.tier

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Rarity):
            return NotImplemented
        mine, theirs = self._tiers(other)
        return mine < theirs

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Rarity):
            return NotImplemented
        mine, theirs = self._tiers(other)
        return mine <= theirs

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Rarity):
            return NotImplemented
        mine, theirs = self._tiers(other)
        return mine > theirs

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Rarity):
            return NotImplemented
        mine, theirs = self._tiers(other)
        return mine >= theirs

    @classmethod
    def parse(cls, value: Any) -> "Rarity":
        if isinstance(value, Rarity):
            return value
        text = str(value).strip().upper().replace("-", "_").replace(" ", "_")
        try:
            return cls[text]
        except KeyError:
            raise InvalidPokemonError("Unknown rarity", context={"rarity": value}) from None


_RARITY_TIERS = {
    Rarity.COMMON: 0,
    Rarity.SUB_LEGENDARY: 1,
    Rarity.PSEUDO_LEGENDARY: 2,
    Rarity.LEGENDARY: 3,
    Rarity.MYTHICAL: 4,
}

_LEGENDARY_WEIGHTS = {
    Rarity.LEGENDARY: 2,
    Rarity.MYTHICAL: 2,
    Rarity.SUB_LEGENDARY: 1,
    Rarity.PARADOX: 1,
}


@dataclass(eq=False)
class Pokemon:
    """
    A Pokemon with derived defensive profile.

    A missing type is UNDEFINED, an UNDEFINED primary type is swapped with a
    defined secondary one, and ``total`` is always the sum of the stats.
    Two Pokemon are equal when they share dex number and name.
    """
    number: int
    name: str
    type1: PokemonType
    type2: Optional[PokemonType] = None
    hp: int = 0
    attack: int = 0
    defense: int = 0
    special_attack: int = 0
    special_defense: int = 0
    speed: int = 0
    total: int = 0
    rarity: Rarity = Rarity.COMMON
    resistances: FrozenSet[TypeName] = field(init=False, default=frozenset())
    weaknesses: FrozenSet[TypeName] = field(init=False, default=frozenset())

    def __post_init__(self):
        if self.type1 is None:
            self.type1 = PokemonType.undefined()
        if self.type2 is None:
            self.type2 = PokemonType.undefined()

        if not self.type1.is_defined and not self.type2.is_defined:
            raise InvalidPokemonError(
                "Pokemon needs at least one defined type",
                context={"number": self.number, "name": self.name},
            )
        if not self.type1.is_defined:
            self.type1, self.type2 = self.type2, self.type1

        for stat in STAT_NAMES:
            value = getattr(self, stat)
            if value < 0:
                raise InvalidPokemonError(
                    "Negative base stat",
                    context={"name": self.name, "stat": stat, "value": value},
                )

        computed = sum(getattr(self, stat) for stat in STAT_NAMES)
        if self.total and self.total != computed:
            logger.debug(f"{self.name}: total {self.total} recomputed as {computed}")
        self.total = computed
        self.rarity = Rarity.parse(self.rarity)

        self.resistances, self.weaknesses = derive_resistances_and_weaknesses(
            self.type1, self.type2
        )

    @property
    def types(self) -> Tuple[TypeName, ...]:
        """Defined type names, primary first."""
        return tuple(t.name for t in (self.type1, self.type2) if t.is_defined)

    @property
    def is_mega_evolution(self) -> bool:
        return "Mega" in self.name and self.name != "Meganium"

    @property
    def stats(self) -> Dict[str, int]:
        return {stat: getattr(self, stat) for stat in STAT_NAMES}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pokemon):
            return NotImplemented
        return self.number == other.number and self.name == other.name

    def __hash__(self) -> int:
        return hash((self.number, self.name))

    def __repr__(self) -> str:
        types = "/".join(t.name for t in self.types)
        return f"Pokemon(#{self.number} {self.name} [{types}] total={self.total})"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "number": self.number,
            "name": self.name,
            "type1": self.type1.name.name,
            "type2": self.type2.name.name if self.type2.is_defined else None,
            **self.stats,
            "total": self.total,
            "rarity": self.rarity.name,
            "resistances": sorted(t.name for t in self.resistances),
            "weaknesses": sorted(t.name for t in self.weaknesses),
        }
