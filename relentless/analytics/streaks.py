"""
Streak and completion statistics for individual tasks.

Everything here is a pure function of the task, the completion log and
the current date key, so results can be recomputed on every change.
"""

from datetime import tzinfo
from typing import Iterable, Mapping, Optional, Set

from ..core.models import Task, TaskStats
from ..tracking.log import done_dates
from ..utils.date import days_between, is_date_key, parse_date_key, parse_date_key_safe, shift_key


def completion_percent(part: int, whole: int) -> int:
    """
    ``part / whole`` as a whole percentage, rounding halves up.

    Returns 0 when ``whole`` is not positive.
    """
    if whole <= 0:
        return 0
    return (200 * part + whole) // (2 * whole)


def days_since_creation(task: Task, today_key: str, tz: Optional[tzinfo] = None) -> int:
    """
    Inclusive number of days from the task's creation day through today.

    Never less than 1, so a task created today (or apparently in the
    future) still counts one eligible day.
    """
    span = days_between(task.created_date(tz), parse_date_key(today_key))
    return max(1, span + 1)


def current_streak(dates: Set[str], today_key: str) -> int:
    """
    Consecutive completed days ending today or yesterday.

    Today still being open does not break the streak; it breaks only once
    both today and yesterday are missing.

    Args:
        dates: Date keys on which the task was completed
        today_key: Current date key

    Returns:
        Streak length in days
    """
    today_done = today_key in dates
    check_key = shift_key(today_key, -1)

    if not today_done and check_key not in dates:
        return 0

    streak = 0
    while check_key in dates:
        streak += 1
        check_key = shift_key(check_key, -1)

    return streak + (1 if today_done else 0)


def longest_streak(dates: Iterable[str]) -> int:
    """
    Longest run of consecutive completed days anywhere in the history.

    Single pass over the sorted completion dates; calendar gaps are never
    iterated. Keys that are not valid dates are ignored.
    """
    parsed = sorted(d for d in (parse_date_key_safe(key) for key in set(dates)) if d is not None)

    best_streak = 0
    run = 0
    previous = None
    for d in parsed:
        if previous is not None and (d - previous).days == 1:
            run += 1
        else:
            run = 1
        best_streak = max(best_streak, run)
        previous = d
    return best_streak


def compute_stats(
    task: Task,
    log: Mapping[str, Set[str]],
    today_key: str,
    tz: Optional[tzinfo] = None,
) -> TaskStats:
    """
    Compute streaks and completion figures for one task.

    Args:
        task: Task to analyze
        log: Full completion log (dangling ids are fine)
        today_key: Current date key in the user's zone
        tz: Zone used to find the task's creation day (local when None)

    Returns:
        TaskStats for the task
    """
    dates = {key for key in done_dates(log, task.id) if is_date_key(key)}
    total = len(dates)

    return TaskStats(
        current_streak=current_streak(dates, today_key),
        longest_streak=longest_streak(dates),
        total_completions=total,
        completion_rate=completion_percent(total, days_since_creation(task, today_key, tz)),
        last_completed_date=max(dates) if dates else None,
    )


def streak_lost(stats: TaskStats, completed_today: bool) -> bool:
    """True when a task with history has let its streak lapse."""
    return (
        not completed_today
        and stats.current_streak == 0
        and stats.total_completions > 0
        and stats.last_completed_date is not None
    )
