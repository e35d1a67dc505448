"""
Core Infrastructure
====================

Foundational components shared by the optimizer packages.

Components:
- exceptions: Unified exception hierarchy
- structured_log: JSON event logging
"""

from .exceptions import (
    OptimizerError,
    ConfigurationError,
    CatalogError,
    EmptyCatalogError,
    ModelError,
    EvolutionError,
    OperatorError,
    get_error_code,
    is_recoverable,
)
from .structured_log import configure_event_log, jlog, read_recent_logs

__all__ = [
    # Exceptions
    'OptimizerError',
    'ConfigurationError',
    'CatalogError',
    'EmptyCatalogError',
    'ModelError',
    'EvolutionError',
    'OperatorError',
    'get_error_code',
    'is_recoverable',
    # Structured Logging
    'configure_event_log',
    'jlog',
    'read_recent_logs',
]
