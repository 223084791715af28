"""
Utility functions for relentless.
"""

from .io import safe_read_json, safe_write_json, atomic_write
from .date import (
    format_date_key, parse_date_key, parse_date_key_safe, is_date_key,
    today, today_key, local_date, shift_key, days_between, date_range, month_days
)

__all__ = [
    # I/O utilities
    'safe_read_json',
    'safe_write_json',
    'atomic_write',
    # Date-key utilities
    'format_date_key',
    'parse_date_key',
    'parse_date_key_safe',
    'is_date_key',
    'today',
    'today_key',
    'local_date',
    'shift_key',
    'days_between',
    'date_range',
    'month_days',
]
