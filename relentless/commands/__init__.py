"""
Command implementations for relentless.
"""

from .tasks import AddCommand, RemoveCommand, ArchiveCommand
from .daily import ListCommand, DoneCommand
from .history import CalendarCommand, HeatmapCommand
from .stats import StatsCommand
from .transfer import ExportCommand, ImportCommand
from .settings import ConfigCommand

__all__ = [
    'AddCommand',
    'RemoveCommand',
    'ArchiveCommand',
    'ListCommand',
    'DoneCommand',
    'CalendarCommand',
    'HeatmapCommand',
    'StatsCommand',
    'ExportCommand',
    'ImportCommand',
    'ConfigCommand',
]
