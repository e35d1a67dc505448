"""
Pokedex Catalog
===============

Read-only repository of selectable Pokemon. The optimizer only needs two
things from a catalog: a uniformly random Pokemon and a lookup by national
dex number (the ``PokemonCatalog`` protocol). ``Pokedex`` is the bundled
in-memory implementation, loadable from records, CSV or JSON.

Several forms (regional, mega) may share one dex number. A random pick draws
a dex number uniformly, then one of its forms; lookup returns the first form.
"""
from __future__ import annotations

import json
import logging
import math
import random
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, runtime_checkable

import pandas as pd

from core.exceptions import CatalogLoadError, EmptyCatalogError, ItemNotFoundError, ModelError
from pokemon.model import STAT_NAMES, Pokemon, Rarity
from pokemon.types import TypePool

logger = logging.getLogger(__name__)

DEFAULT_POKEDEX = Path(__file__).parent / "data" / "pokedex_sample.csv"

REQUIRED_COLUMNS = ("ndex", "name", "type1") + STAT_NAMES


# National dex numbers by rarity
LEGENDARY_NUMBERS = frozenset({
    150, 249, 250, 382, 383, 384, 483, 484, 487, 643, 644, 646,
    716, 717, 718, 789, 790, 791, 792, 800,
})
SUB_LEGENDARY_NUMBERS = frozenset({
    144, 145, 146, 243, 244, 245, 377, 378, 379, 380, 381, 480, 481, 482,
    485, 486, 488, 638, 639, 640, 641, 642, 645, 772, 773, 785, 786, 787, 788,
})
PSEUDO_LEGENDARY_NUMBERS = frozenset({149, 248, 373, 376, 445, 635, 706, 784})
MYTHICAL_NUMBERS = frozenset({
    151, 251, 385, 386, 489, 490, 491, 492, 493, 494, 647, 648, 649,
    719, 720, 721, 801, 802, 807, 808, 809,
})


def determine_rarity(ndex: int) -> Rarity:
    """Rarity of a national dex number (COMMON when not in any special set)."""
    if ndex in LEGENDARY_NUMBERS:
        return Rarity.LEGENDARY
    if ndex in SUB_LEGENDARY_NUMBERS:
        return Rarity.SUB_LEGENDARY
    if ndex in PSEUDO_LEGENDARY_NUMBERS:
        return Rarity.PSEUDO_LEGENDARY
    if ndex in MYTHICAL_NUMBERS:
        return Rarity.MYTHICAL
    return Rarity.COMMON


@runtime_checkable
class PokemonCatalog(Protocol):
    """What the optimizer consumes from a catalog."""

    def random_pokemon(self, rng: random.Random) -> Pokemon:
        """Uniformly random Pokemon; raises EmptyCatalogError when empty."""
        ...

    def get_by_ndex(self, ndex: int) -> Optional[Pokemon]:
        """Pokemon by national dex number, or None."""
        ...


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and not value.strip()


class Pokedex:
    """In-memory Pokemon catalog keyed by national dex number."""

    def __init__(self, pokemon: Iterable[Pokemon] = ()):
        self._by_ndex: Dict[int, List[Pokemon]] = {}
        for entry in pokemon:
            self._by_ndex.setdefault(entry.number, []).append(entry)
        self._numbers: List[int] = list(self._by_ndex)
        logger.debug(f"Pokedex loaded: {len(self)} Pokemon over {len(self._numbers)} dex numbers")

    # ------------------------------------------------------------------
    # Catalog protocol
    # ------------------------------------------------------------------

    def random_pokemon(self, rng: random.Random) -> Pokemon:
        if not self._numbers:
            raise EmptyCatalogError("Cannot pick a Pokemon from an empty catalog")
        number = rng.choice(self._numbers)
        return rng.choice(self._by_ndex[number])

    def get_by_ndex(self, ndex: int) -> Optional[Pokemon]:
        forms = self._by_ndex.get(ndex)
        return forms[0] if forms else None

    # ------------------------------------------------------------------

    def require(self, ndex: int) -> Pokemon:
        """Like get_by_ndex, but raises ItemNotFoundError when absent."""
        found = self.get_by_ndex(ndex)
        if found is None:
            raise ItemNotFoundError("Pokemon not in catalog", context={"ndex": ndex})
        return found

    def forms(self, ndex: int) -> List[Pokemon]:
        return list(self._by_ndex.get(ndex, []))

    def find_by_name(self, name: str) -> Optional[Pokemon]:
        wanted = name.strip().lower()
        for entry in self.all_pokemon():
            if entry.name.lower() == wanted:
                return entry
        return None

    def all_pokemon(self) -> List[Pokemon]:
        return [entry for forms in self._by_ndex.values() for entry in forms]

    def __len__(self) -> int:
        return sum(len(forms) for forms in self._by_ndex.values())

    def __iter__(self):
        return iter(self.all_pokemon())

    def to_frame(self) -> pd.DataFrame:
        """Catalog as a DataFrame (one row per form)."""
        return pd.DataFrame([entry.to_dict() for entry in self.all_pokemon()])

    # ------------------------------------------------------------------
    # Loaders
    # ------------------------------------------------------------------

    @classmethod
    def from_records(
        cls,
        records: Iterable[Mapping[str, Any]],
        type_pool: Optional[TypePool] = None,
    ) -> "Pokedex":
        """
        Build a catalog from flat records.

        Each record needs ``ndex`` (or ``number``), ``name``, ``type1`` and the
        six stats; ``type2``, ``total`` and ``rarity`` are optional. A blank
        rarity is derived from the dex number.

        Raises:
            CatalogLoadError: If a record is incomplete or invalid
        """
        pool = type_pool or TypePool.default()
        pokemon = []
        for index, record in enumerate(records):
            try:
                pokemon.append(_record_to_pokemon(record, pool))
            except (KeyError, TypeError, ValueError, ModelError) as e:
                raise CatalogLoadError(
                    "Invalid Pokedex record",
                    context={"record": index, "name": record.get("name")},
                    cause=e,
                ) from e
        return cls(pokemon)

    @classmethod
    def from_csv(cls, path: str | Path, type_pool: Optional[TypePool] = None) -> "Pokedex":
        """Load a catalog from a CSV file (see REQUIRED_COLUMNS)."""
        csv_path = Path(path)
        try:
            df = pd.read_csv(csv_path, dtype={"type2": "object", "rarity": "object"})
        except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            raise CatalogLoadError(
                "Cannot read Pokedex CSV",
                context={"path": str(csv_path)},
                cause=e,
            ) from e

        missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
        if missing:
            raise CatalogLoadError(
                "Pokedex CSV is missing columns",
                context={"path": str(csv_path), "missing": missing},
            )
        logger.info(f"Loaded {len(df)} rows from {csv_path.name}")
        return cls.from_records(df.to_dict(orient="records"), type_pool)

    @classmethod
    def from_json(cls, path: str | Path, type_pool: Optional[TypePool] = None) -> "Pokedex":
        """
        Load a catalog from a JSON list of Pokemon.

        Entries may be flat records or use a nested ``stats`` object as
        produced by ``Pokemon.to_dict``-style exports.
        """
        json_path = Path(path)
        try:
            with json_path.open("r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogLoadError(
                "Cannot read Pokedex JSON",
                context={"path": str(json_path)},
                cause=e,
            ) from e
        if not isinstance(raw, list):
            raise CatalogLoadError(
                "Pokedex JSON must be a list",
                context={"path": str(json_path)},
            )

        records = []
        for index, entry in enumerate(raw):
            if not isinstance(entry, dict):
                raise CatalogLoadError(
                    "Pokedex JSON entries must be objects",
                    context={"path": str(json_path), "entry": index},
                )
            record = dict(entry)
            stats = record.pop("stats", None)
            if isinstance(stats, dict):
                record.update(stats)
            records.append(record)
        return cls.from_records(records, type_pool)

    @classmethod
    def default(cls, type_pool: Optional[TypePool] = None) -> "Pokedex":
        """The bundled sample Pokedex."""
        return cls.from_csv(DEFAULT_POKEDEX, type_pool)


def _record_to_pokemon(record: Mapping[str, Any], pool: TypePool) -> Pokemon:
    ndex = record["ndex"] if "ndex" in record else record["number"]
    ndex = int(ndex)

    rarity_value = record.get("rarity")
    rarity = determine_rarity(ndex) if _is_blank(rarity_value) else Rarity.parse(rarity_value)

    type2_value = record.get("type2")
    total = record.get("total")

    return Pokemon(
        number=ndex,
        name=str(record["name"]).strip(),
        type1=pool.get(record["type1"]),
        type2=None if _is_blank(type2_value) else pool.get(type2_value),
        hp=int(record["hp"]),
        attack=int(record["attack"]),
        defense=int(record["defense"]),
        special_attack=int(record["special_attack"]),
        special_defense=int(record["special_defense"]),
        speed=int(record["speed"]),
        total=0 if _is_blank(total) else int(total),
        rarity=rarity,
    )
