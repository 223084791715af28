"""
Terminal rendering for the list, calendar, heatmap and stats views.

Formatting only: every figure shown here is computed by the analytics
package and passed in.
"""

from datetime import date
from typing import List, Optional, Sequence, Tuple

from ..analytics.days import CalendarCell, heatmap_intensity, sunday_offset
from ..core.models import AggregateStats, DayBreakdown, DayStatus, Task, TaskStats
from ..utils.date import parse_date_key


RULE = "=" * 60
WEEKDAY_HEADER = ["S", "M", "T", "W", "T", "F", "S"]

STATUS_GLYPHS = {
    DayStatus.PERFECT: "█",
    DayStatus.PARTIAL: "▒",
    DayStatus.FAILED: "x",
    DayStatus.EMPTY: "·",
}

# Heatmap levels 0-4, lightest to darkest
INTENSITY_GLYPHS = [" ", "░", "▒", "▓", "█"]


def format_task_list(rows: Sequence[Tuple[Task, TaskStats, bool, bool]], date_str: Optional[str] = None) -> str:
    """
    Format today's protocol list.

    Args:
        rows: (task, stats, completed_today, streak_lost) in display order
        date_str: Optional date shown in the header

    Returns:
        Terminal-formatted string
    """
    lines = [RULE, "  DAILY PROTOCOL" + (f" - {date_str}" if date_str else ""), RULE]

    if not rows:
        lines.append("  No active protocols. Add one with 'relentless add <title>'.")
        return "\n".join(lines)

    for task, stats, done, lost in rows:
        mark = "[x]" if done else "[ ]"
        title = task.title + (" (archived)" if task.archived else "")
        lines.append(f"  {mark} {title}  ({task.id[:8]})")
        flame = "🔥" if stats.current_streak > 0 else "  "
        lines.append(
            f"      {flame} {stats.current_streak:>3} CURR  |  {stats.longest_streak:>3} BEST"
            f"  |  {stats.completion_rate:>3}%  |  {stats.total_completions} total"
        )
        if lost:
            lines.append(f"      ⚠️  Streak lost. Last completed {stats.last_completed_date}.")
    return "\n".join(lines)


def format_calendar(
    month: date,
    cells: Sequence[Optional[CalendarCell]],
    detail: Optional[Tuple[str, Sequence[Tuple[Task, bool]]]] = None,
) -> str:
    """Format a month grid, with an optional per-day detail section."""
    lines = [RULE, f"  HISTORY - {month.strftime('%B %Y')}", RULE]
    lines.append("  " + "  ".join(f"{d:>3}" for d in WEEKDAY_HEADER))

    row: List[str] = []
    for cell in cells:
        if cell is None:
            row.append("   ")
        elif cell.is_future:
            row.append(f"{cell.day:>2} ")
        else:
            row.append(f"{cell.day:>2}{STATUS_GLYPHS[cell.breakdown.status]}")
        if len(row) == 7:
            lines.append("  " + "  ".join(row))
            row = []
    if row:
        lines.append("  " + "  ".join(row))

    lines.append("")
    lines.append("  █ done   ▒ partial   x fail   · no protocols")

    if detail is not None:
        day_key, entries = detail
        lines.append("")
        lines.append(f"  Log: {parse_date_key(day_key).strftime('%A, %b %d')}")
        if not entries:
            lines.append("    No active tasks on this day.")
        for task, done in entries:
            lines.append(f"    {'✓' if done else '✗'} {task.title}" + ("" if done else "  MISSED"))
    return "\n".join(lines)


def format_heatmap(breakdowns: Sequence[DayBreakdown]) -> str:
    """
    Format a trailing heatmap as seven weekday rows, one column per week.
    """
    lines = [RULE, f"  CONSISTENCY HEATMAP - last {len(breakdowns)} days", RULE]
    if not breakdowns:
        return "\n".join(lines)

    padding = sunday_offset(parse_date_key(breakdowns[0].date))
    slots: List[Optional[DayBreakdown]] = [None] * padding + list(breakdowns)
    weeks = (len(slots) + 6) // 7

    for weekday in range(7):
        row = []
        for week in range(weeks):
            index = week * 7 + weekday
            item = slots[index] if index < len(slots) else None
            row.append(" " if item is None else INTENSITY_GLYPHS[heatmap_intensity(item)])
        lines.append(f"  {WEEKDAY_HEADER[weekday]} " + "".join(row))

    lines.append("")
    lines.append("  LESS " + "".join(INTENSITY_GLYPHS[1:]) + " MORE")
    return "\n".join(lines)


def format_stats(stats: AggregateStats, logged_days: int, protocol_count: int) -> str:
    """Format the roster-wide discipline ratio."""
    lines = [RULE, "  PERFORMANCE ANALYTICS", RULE]
    lines.append(f"  Consistency: {stats.completion_rate:>3}%")
    lines.append(f"  Wins: {stats.total_completed:>5}  |  Losses: {stats.total_failed:>5}")
    lines.append(f"  Total logged days: {logged_days}")
    lines.append(f"  Active protocols:  {protocol_count}")
    return "\n".join(lines)
