"""Roster-wide completed versus missed totals."""

from datetime import tzinfo
from typing import Mapping, Optional, Sequence, Set

from ..core.models import AggregateStats, Task
from ..tracking.log import done_dates
from ..utils.date import today_key as current_day_key
from .streaks import completion_percent, days_since_creation


def aggregate(
    tasks: Sequence[Task],
    log: Mapping[str, Set[str]],
    today_key: Optional[str] = None,
    tz: Optional[tzinfo] = None,
) -> AggregateStats:
    """
    Sum possible and actual completions over every task in the roster.

    Each task contributes one possible completion per day since its
    creation. Archived tasks are included; removed tasks are not, since
    they are no longer in the roster.
    """
    if today_key is None:
        today_key = current_day_key(tz)

    total_possible = 0
    total_completed = 0
    for task in tasks:
        total_possible += days_since_creation(task, today_key, tz)
        total_completed += len(done_dates(log, task.id))

    return AggregateStats(
        total_possible=total_possible,
        total_completed=total_completed,
        total_failed=max(0, total_possible - total_completed),
        completion_rate=completion_percent(total_completed, total_possible),
    )
