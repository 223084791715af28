"""
Core module for relentless - contains domain models, configuration, and exceptions.
"""

from .models import (
    Task,
    TaskStats,
    DayStatus,
    DayBreakdown,
    AggregateStats,
    AppConfig
)

from .exceptions import (
    RelentlessError,
    ConfigurationError,
    StorageError,
    ImportPayloadError,
    TaskNotFoundError
)

__all__ = [
    # Models
    'Task',
    'TaskStats',
    'DayStatus',
    'DayBreakdown',
    'AggregateStats',
    'AppConfig',
    # Exceptions
    'RelentlessError',
    'ConfigurationError',
    'StorageError',
    'ImportPayloadError',
    'TaskNotFoundError'
]
