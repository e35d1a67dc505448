"""
Typed Settings Schema (Pydantic)
================================

Provides typed, validated configuration for the team optimizer.

Probabilities and iteration counts are deliberately left unconstrained here:
the genetic algorithm clamps them at construction time, so a settings file
with ``mutation_probability: 1.7`` still runs (with 1.0). Structural values
such as team and population sizes are validated.

Usage:
    from config.settings_schema import load_validated_settings

    settings = load_validated_settings()
    settings.optimizer.selection      # "rank"
    settings.fitness.high             # 1.5
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from config.settings_loader import load_settings
from core.exceptions import SettingsValidationError

logger = logging.getLogger(__name__)


SelectionName = Literal["roulette", "rank", "tournament"]
CrossoverName = Literal["uniform", "single_point", "two_point"]


# ============================================================================
# Schema Definitions
# ============================================================================

class OptimizerConfig(BaseModel):
    """Genetic algorithm configuration."""
    model_config = ConfigDict(extra="forbid")

    selection: SelectionName = Field(default="rank", description="Selection strategy")
    crossover: CrossoverName = Field(default="uniform", description="Crossover strategy")
    mutation_probability: float = Field(
        default=1.0,
        description="Probability that the mutation operator runs on a generation",
    )
    gene_mutation_probability: float = Field(
        default=0.3,
        description="Per-team probability of swapping one member inside the mutation operator",
    )
    max_iterations: int = Field(default=40, description="Maximum generations produced")
    max_no_improvements: int = Field(
        default=20,
        description="Generations without improvement before stopping (0 disables)",
    )
    team_size: int = Field(default=6, ge=1, description="Pokemon per team")
    population_size: int = Field(default=100, ge=1, description="Teams in generation 0")
    tournament_size: int = Field(default=5, ge=1)
    tournament_proportional: bool = False
    seed: Optional[int] = Field(default=None, description="Random seed for reproducible runs")

    @field_validator("selection", "crossover", mode="before")
    @classmethod
    def _normalize_name(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower().replace("-", "_")
        return value


class FitnessWeights(BaseModel):
    """Weights applied to the team fitness sub-metrics."""
    model_config = ConfigDict(extra="forbid")

    low: float = Field(default=0.5, ge=0)
    normal: float = Field(default=1.0, ge=0)
    high: float = Field(default=1.5, ge=0)


class CatalogConfig(BaseModel):
    """Where the type chart and the Pokedex are loaded from (None = bundled data)."""
    model_config = ConfigDict(extra="forbid")

    pokedex_path: Optional[str] = None
    type_chart_path: Optional[str] = None


class Settings(BaseModel):
    """Complete settings schema."""
    model_config = ConfigDict(extra="allow")  # Allow extra sections not in schema

    optimizer: OptimizerConfig = Field(default_factory=OptimizerConfig)
    fitness: FitnessWeights = Field(default_factory=FitnessWeights)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)


# ============================================================================
# Validation Functions
# ============================================================================

def _load_yaml_config(path: Optional[str | Path] = None) -> Dict[str, Any]:
    """Load raw YAML configuration."""
    return load_settings(path=path)


def load_validated_settings(path: Optional[str | Path] = None) -> Settings:
    """
    Load and validate settings from YAML.

    Args:
        path: Optional explicit YAML path; defaults to TEAMFORGE_CONFIG_PATH
            or the bundled config/base.yaml

    Returns:
        Validated Settings object

    Raises:
        SettingsValidationError: If settings are invalid
    """
    raw = _load_yaml_config(path)
    return settings_from_dict(raw)


def settings_from_dict(raw: Dict[str, Any]) -> Settings:
    """
    Validate an in-memory settings mapping.

    Raises:
        SettingsValidationError: If the mapping does not match the schema
    """
    try:
        return Settings(**raw)
    except ValidationError as e:
        logger.error(f"Settings validation failed: {e}")
        raise SettingsValidationError(
            "Settings validation failed",
            context={"errors": len(e.errors())},
            cause=e,
        ) from e
