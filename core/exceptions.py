"""
Unified Exception Hierarchy for the Team Optimizer.

All exceptions inherit from OptimizerError, enabling consistent error
handling in hosts that embed the engine (a web service, a CLI, a benchmark).

Usage:
    from core.exceptions import OptimizerError, CatalogError, OperatorError

    try:
        results = run_optimization(settings, pokedex)
    except CatalogError as e:
        # Catalog is empty or could not be loaded
        report_catalog_problem(e.error_code, e.context)
    except OperatorError as e:
        # A genetic operator failed; e.context names generation and operator
        log_and_abort(e)
    except OptimizerError as e:
        # Catch-all for optimizer errors
        log_error(e)
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional


# =============================================================================
# BASE EXCEPTION
# =============================================================================

class OptimizerError(Exception):
    """
    Base exception for all optimizer errors.

    Attributes:
        error_code: Unique identifier for this error type
        is_recoverable: Whether the caller can retry with different input
        context: Additional context about the error
        timestamp: When the error occurred
    """
    error_code: str = "OPTIMIZER_ERROR"
    is_recoverable: bool = True

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        self.message = message
        self.context = context or {}
        self.cause = cause
        self.timestamp = datetime.utcnow()
        super().__init__(message)

    def __str__(self) -> str:
        base = f"[{self.error_code}] {self.message}"
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base = f"{base} ({ctx_str})"
        return base

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "is_recoverable": self.is_recoverable,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "cause": str(self.cause) if self.cause else None,
        }


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================

class ConfigurationError(OptimizerError):
    """
    Raised when optimizer settings cannot be used.

    Out-of-range probabilities and iteration counts are clamped by the
    algorithm and never raise; this covers unknown strategy names and
    settings files that fail schema validation.
    """
    error_code = "CONFIG_ERROR"


class SettingsValidationError(ConfigurationError):
    """
    Raised when the settings file fails schema validation.
    """
    error_code = "SETTINGS_VALIDATION_FAIL"


class UnknownStrategyError(ConfigurationError):
    """
    Raised when a selection or crossover strategy name is not registered.
    """
    error_code = "UNKNOWN_STRATEGY"


# =============================================================================
# CATALOG ERRORS
# =============================================================================

class CatalogError(OptimizerError):
    """
    Base class for errors raised by the Pokemon catalog.
    """
    error_code = "CATALOG_ERROR"


class EmptyCatalogError(CatalogError):
    """
    Raised when a random Pokemon is requested from an empty catalog.

    The engine fails fast instead of building degenerate teams.
    """
    error_code = "CATALOG_EMPTY"
    is_recoverable = False


class CatalogLoadError(CatalogError):
    """
    Raised when a type chart or Pokedex file is missing or malformed.
    """
    error_code = "CATALOG_LOAD_FAIL"
    is_recoverable = False


class ItemNotFoundError(CatalogError):
    """
    Raised when a Pokemon is required by national dex number but absent.
    """
    error_code = "ITEM_NOT_FOUND"


# =============================================================================
# MODEL ERRORS
# =============================================================================

class ModelError(OptimizerError):
    """
    Base class for violations of domain model invariants.

    These are construction errors; there is no recoverable default.
    """
    error_code = "MODEL_ERROR"
    is_recoverable = False


class InvalidPokemonError(ModelError):
    """
    Raised when a Pokemon has no defined type or a negative stat.
    """
    error_code = "INVALID_POKEMON"


class InvalidTypeChartError(ModelError):
    """
    Raised when a type chart names an unknown type or an unsupported multiplier.
    """
    error_code = "INVALID_TYPE_CHART"


class InvalidFitnessError(ModelError):
    """
    Raised when a negative fitness is assigned to a genome.
    """
    error_code = "INVALID_FITNESS"


# =============================================================================
# EVOLUTION ERRORS
# =============================================================================

class EvolutionError(OptimizerError):
    """
    Base class for failures inside an evolutionary run.
    """
    error_code = "EVOLUTION_ERROR"
    is_recoverable = False


class OperatorError(EvolutionError):
    """
    Raised when an operator or the fitness evaluation fails mid-run.

    The context carries the generation id being built and the operator name.
    """
    error_code = "OPERATOR_FAILED"


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def is_recoverable(error: Exception) -> bool:
    """
    Check if an error can be retried with different input.

    Args:
        error: The exception to check

    Returns:
        True for recoverable optimizer errors, False otherwise
    """
    if isinstance(error, OptimizerError):
        return error.is_recoverable
    return False


def get_error_code(error: Exception) -> str:
    """
    Get the error code for an exception.

    Args:
        error: The exception to get the code for

    Returns:
        Error code string, or "UNKNOWN" for foreign exceptions
    """
    if isinstance(error, OptimizerError):
        return error.error_code
    return "UNKNOWN"
