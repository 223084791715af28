"""Roster commands: add, remove and archive protocols."""

from ..core.exceptions import RelentlessError, TaskNotFoundError
from ..tracking.roster import add_task, create_task, find_task, remove_task, set_archived
from .base import TrackerCommand


class AddCommand(TrackerCommand):
    """Create a new protocol starting today."""

    def run(self, title: str) -> bool:
        try:
            task = create_task(title)
        except ValueError as exc:
            print(f"⚠️  {exc}")
            return False

        try:
            tasks = self.store.load_tasks()
            self.store.save_tasks(add_task(tasks, task))
        except RelentlessError as exc:
            return self._fail("Add", exc)

        self.logger.debug("Created task %s", task.id)
        print(f"✓ Added protocol '{task.title}' ({task.id[:8]})")
        return True


class RemoveCommand(TrackerCommand):
    """Drop a protocol from the roster; its history stays in the log."""

    def run(self, ref: str) -> bool:
        try:
            tasks = self.store.load_tasks()
            task = find_task(tasks, ref)
            self.store.save_tasks(remove_task(tasks, task.id))
        except TaskNotFoundError as exc:
            print(f"⚠️  {exc}")
            return False
        except RelentlessError as exc:
            return self._fail("Remove", exc)

        print(f"✓ Removed protocol '{task.title}'")
        return True


class ArchiveCommand(TrackerCommand):
    """Archive (or restore) a protocol."""

    def run(self, ref: str, archived: bool = True) -> bool:
        try:
            tasks = self.store.load_tasks()
            task = find_task(tasks, ref)
            self.store.save_tasks(set_archived(tasks, task.id, archived))
        except TaskNotFoundError as exc:
            print(f"⚠️  {exc}")
            return False
        except RelentlessError as exc:
            return self._fail("Archive", exc)

        verb = "Archived" if archived else "Restored"
        print(f"✓ {verb} protocol '{task.title}'")
        return True
