"""
relentless - daily protocol tracker.

Streaks, completion rates and day classifications are derived from a
task roster and a sparse per-day completion log.
"""

__version__ = "1.0.0"
