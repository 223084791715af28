"""Daily commands: show today's protocol list and toggle completions."""

from typing import Optional

from ..analytics.streaks import compute_stats, streak_lost
from ..core.exceptions import RelentlessError, TaskNotFoundError
from ..tracking.log import is_completed, toggle
from ..tracking.roster import find_task, order_for_today
from ..utils.date import parse_date_key, today_key
from ..utils.render import format_task_list
from .base import TrackerCommand


class ListCommand(TrackerCommand):
    """Show every protocol with its streaks, open ones first."""

    def run(self, include_archived: bool = False) -> bool:
        try:
            tasks, log = self.store.load()
            key = today_key(self.tz)
            visible = [t for t in tasks if include_archived or not t.archived]
            pairs = [(task, compute_stats(task, log, key, self.tz)) for task in visible]
            rows = []
            for task, stats in order_for_today(pairs, log, key):
                done = is_completed(log, key, task.id)
                rows.append((task, stats, done, streak_lost(stats, done)))
            print(format_task_list(rows, date_str=key))
            return True
        except RelentlessError as exc:
            return self._fail("List", exc)


class DoneCommand(TrackerCommand):
    """Toggle a protocol's completion for today or a given date."""

    def run(self, ref: str, date_str: Optional[str] = None) -> bool:
        try:
            current = today_key(self.tz)
        except RelentlessError as exc:
            return self._fail("Toggle", exc)

        key = current
        if date_str:
            try:
                future = parse_date_key(date_str) > parse_date_key(current)
            except ValueError:
                print(f"⚠️  Invalid date '{date_str}'. Use YYYY-MM-DD.")
                return False
            if future:
                print("⚠️  Cannot log a completion in the future.")
                return False
            key = date_str

        try:
            tasks, log = self.store.load()
            task = find_task(tasks, ref)
            log = toggle(log, key, task.id)
            self.store.save_log(log)
        except TaskNotFoundError as exc:
            print(f"⚠️  {exc}")
            return False
        except RelentlessError as exc:
            return self._fail("Toggle", exc)

        if is_completed(log, key, task.id):
            stats = compute_stats(task, log, current, self.tz)
            print(f"✓ '{task.title}' done for {key}. Streak: {stats.current_streak}d")
        else:
            print(f"○ '{task.title}' unmarked for {key}.")
        return True
