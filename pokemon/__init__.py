"""
Pokemon domain model: types, the Pokemon item and the Pokedex catalog.
"""

from .types import (
    Multiplier,
    PokemonType,
    TypeName,
    TypePool,
    derive_resistances_and_weaknesses,
)
from .model import (
    MAX_TOTAL_STATS_LEGENDARY,
    MAX_TOTAL_STATS_STANDARD,
    MIN_TOTAL_STATS,
    Pokemon,
    Rarity,
)
from .pokedex import Pokedex, PokemonCatalog, determine_rarity

__all__ = [
    'Multiplier',
    'PokemonType',
    'TypeName',
    'TypePool',
    'derive_resistances_and_weaknesses',
    'MAX_TOTAL_STATS_LEGENDARY',
    'MAX_TOTAL_STATS_STANDARD',
    'MIN_TOTAL_STATS',
    'Pokemon',
    'Rarity',
    'Pokedex',
    'PokemonCatalog',
    'determine_rarity',
]
