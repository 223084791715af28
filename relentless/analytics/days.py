"""
Day classification for calendar and heatmap views.

Both views are built from the same breakdown (completed active tasks over
active tasks), so a day can never read as perfect in one and partial in
the other.
"""

from dataclasses import dataclass
from datetime import date, timedelta, tzinfo
from typing import List, Mapping, Optional, Sequence, Set, Tuple, Union

from ..core.models import DayBreakdown, DayStatus, Task
from ..tracking.log import completed_on
from ..utils.date import format_date_key, month_days, parse_date_key, today as current_date


@dataclass(frozen=True)
class CalendarCell:
    """One day in a month grid."""

    breakdown: DayBreakdown
    is_future: bool

    @property
    def day(self) -> int:
        return int(self.breakdown.date[-2:])


def sunday_offset(d: date) -> int:
    """Column of ``d`` in a Sunday-first week (Sunday is 0)."""
    return (d.weekday() + 1) % 7


def active_tasks_on(day: date, tasks: Sequence[Task], tz: Optional[tzinfo] = None) -> List[Task]:
    """Tasks created on or before ``day`` that are not archived."""
    return [task for task in tasks if not task.archived and task.created_date(tz) <= day]


def day_breakdown(
    day: date,
    tasks: Sequence[Task],
    log: Mapping[str, Set[str]],
    tz: Optional[tzinfo] = None,
) -> DayBreakdown:
    """
    Count active and completed tasks for a day and classify it.

    Args:
        day: Calendar date to classify
        tasks: Full roster (archived tasks are skipped)
        log: Completion log
        tz: Zone used to find each task's creation day

    Returns:
        DayBreakdown with the derived DayStatus
    """
    key = format_date_key(day)
    active = active_tasks_on(day, tasks, tz)
    done = completed_on(log, key)
    completed = sum(1 for task in active if task.id in done)

    if not active:
        status = DayStatus.EMPTY
    elif completed == len(active):
        status = DayStatus.PERFECT
    elif completed == 0:
        status = DayStatus.FAILED
    else:
        status = DayStatus.PARTIAL

    return DayBreakdown(date=key, total_tasks=len(active), completed_tasks=completed, status=status)


def classify_day(
    day: date,
    tasks: Sequence[Task],
    log: Mapping[str, Set[str]],
    tz: Optional[tzinfo] = None,
) -> DayStatus:
    """Classify a day as empty, perfect, partial or failed."""
    return day_breakdown(day, tasks, log, tz).status


def heatmap_intensity(breakdown: DayBreakdown) -> int:
    """Bucket a day's completion ratio into heatmap levels 0-4."""
    ratio = breakdown.ratio
    if breakdown.total_tasks and breakdown.completed_tasks == breakdown.total_tasks:
        return 4
    if ratio >= 0.75:
        return 3
    if ratio >= 0.5:
        return 2
    if ratio > 0:
        return 1
    return 0


def heatmap(
    tasks: Sequence[Task],
    log: Mapping[str, Set[str]],
    end: Optional[date] = None,
    days: int = 365,
    tz: Optional[tzinfo] = None,
) -> List[DayBreakdown]:
    """Breakdowns for the trailing ``days`` days ending at ``end``, oldest first."""
    if end is None:
        end = current_date(tz)
    start = end - timedelta(days=max(1, days) - 1)
    return [
        day_breakdown(start + timedelta(days=offset), tasks, log, tz)
        for offset in range((end - start).days + 1)
    ]


def month_grid(
    month: date,
    tasks: Sequence[Task],
    log: Mapping[str, Set[str]],
    today: Optional[date] = None,
    tz: Optional[tzinfo] = None,
) -> List[Optional[CalendarCell]]:
    """
    Calendar cells for the month containing ``month``.

    The list starts with ``None`` padding so the first day lands in its
    Sunday-first weekday column.
    """
    if today is None:
        today = current_date(tz)
    days_in_month = month_days(month)
    cells: List[Optional[CalendarCell]] = [None] * sunday_offset(days_in_month[0])
    for day in days_in_month:
        cells.append(CalendarCell(breakdown=day_breakdown(day, tasks, log, tz), is_future=day > today))
    return cells


def day_detail(
    day: Union[date, str],
    tasks: Sequence[Task],
    log: Mapping[str, Set[str]],
    tz: Optional[tzinfo] = None,
) -> List[Tuple[Task, bool]]:
    """Active tasks for a day paired with whether each was completed."""
    if isinstance(day, str):
        day = parse_date_key(day)
    done = completed_on(log, format_date_key(day))
    return [(task, task.id in done) for task in active_tasks_on(day, tasks, tz)]
