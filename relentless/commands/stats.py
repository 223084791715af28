"""Stats command - roster-wide completion ratio."""

from ..analytics.aggregate import aggregate
from ..core.exceptions import RelentlessError
from ..tracking.log import count_logged_days
from ..utils.date import today_key
from ..utils.render import format_stats
from .base import TrackerCommand


class StatsCommand(TrackerCommand):
    """Show wins versus losses across all protocols."""

    def run(self) -> bool:
        try:
            tz = self.tz
            tasks, log = self.store.load()
        except RelentlessError as exc:
            return self._fail("Stats", exc)

        if not tasks:
            print("No data available.")
            return True

        summary = aggregate(tasks, log, today_key(tz), tz)
        active = sum(1 for task in tasks if not task.archived)
        print(format_stats(summary, count_logged_days(log), active))
        return True
