"""History commands: month calendar and trailing heatmap."""

from datetime import datetime
from typing import Optional

from ..analytics.days import day_detail, heatmap, month_grid
from ..core.exceptions import RelentlessError
from ..utils.date import format_date_key, parse_date_key, today
from ..utils.render import format_calendar, format_heatmap
from .base import TrackerCommand


class CalendarCommand(TrackerCommand):
    """Show a month of day classifications, optionally with one day's detail."""

    def run(self, month_str: Optional[str] = None, day_str: Optional[str] = None) -> bool:
        try:
            tz = self.tz
            current = today(tz)
        except RelentlessError as exc:
            return self._fail("Calendar", exc)

        try:
            selected = parse_date_key(day_str) if day_str else None
            if month_str:
                month = datetime.strptime(month_str, "%Y-%m").date()
            else:
                month = selected or current
        except ValueError:
            print("⚠️  Use YYYY-MM for --month and YYYY-MM-DD for --day.")
            return False

        try:
            tasks, log = self.store.load()
        except RelentlessError as exc:
            return self._fail("Calendar", exc)

        cells = month_grid(month, tasks, log, today=current, tz=tz)
        detail = None
        if selected is not None:
            detail = (format_date_key(selected), day_detail(selected, tasks, log, tz))
        print(format_calendar(month, cells, detail))
        return True


class HeatmapCommand(TrackerCommand):
    """Show completion intensity over the trailing window."""

    def run(self, days: Optional[int] = None) -> bool:
        window = days if days is not None else self.config.heatmap_days
        if window < 1:
            print("⚠️  --days must be at least 1.")
            return False
        try:
            tz = self.tz
            tasks, log = self.store.load()
        except RelentlessError as exc:
            return self._fail("Heatmap", exc)

        print(format_heatmap(heatmap(tasks, log, end=today(tz), days=window, tz=tz)))
        return True
