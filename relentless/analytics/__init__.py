"""Analytics: per-task streaks, day classification and roster aggregates."""

from .streaks import compute_stats, completion_percent, days_since_creation, streak_lost
from .days import (
    CalendarCell,
    active_tasks_on,
    classify_day,
    day_breakdown,
    day_detail,
    heatmap,
    heatmap_intensity,
    month_grid,
)
from .aggregate import aggregate

__all__ = [
    'compute_stats',
    'completion_percent',
    'days_since_creation',
    'streak_lost',
    'CalendarCell',
    'active_tasks_on',
    'classify_day',
    'day_breakdown',
    'day_detail',
    'heatmap',
    'heatmap_intensity',
    'month_grid',
    'aggregate',
]
