"""
JSON-file persistence for tracker state, namespaced by identity.

Layout::

    <data_dir>/<identity>/tasks.json   list of task records
    <data_dir>/<identity>/logs.json    {date_key: [task ids]}

Unreadable or malformed state never stops the tracker: it is replaced by
an empty roster or log and a warning is logged.
"""

import logging
import re
from pathlib import Path
from typing import List, Mapping, Optional, Sequence, Set, Tuple

from ..core.exceptions import StorageError
from ..core.models import Task
from ..tracking.log import CompletionLog, log_from_json, log_to_json
from ..utils.io import atomic_write, safe_read_json, safe_write_json


IDENTITY_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]{0,127}$")


class TrackerStore:
    """
    Persists the task roster and completion log for one identity.

    The store holds no state of its own; every load reads from disk and
    every save replaces the file atomically.
    """

    TASKS_FILE = "tasks.json"
    LOGS_FILE = "logs.json"

    def __init__(self, identity: str, data_dir: Path, logger: Optional[logging.Logger] = None):
        """
        Initialize the store.

        Args:
            identity: Stable identifier used to namespace the files
            data_dir: Root directory holding one folder per identity

        Raises:
            StorageError: If the identity cannot be used as a folder name
        """
        if not identity or not IDENTITY_PATTERN.match(identity):
            raise StorageError(f"Invalid identity {identity!r}")
        self.identity = identity
        self.data_dir = Path(data_dir)
        self.logger = logger or logging.getLogger(__name__)

    @property
    def namespace_dir(self) -> Path:
        return self.data_dir / self.identity

    @property
    def tasks_path(self) -> Path:
        return self.namespace_dir / self.TASKS_FILE

    @property
    def logs_path(self) -> Path:
        return self.namespace_dir / self.LOGS_FILE

    def load_tasks(self) -> List[Task]:
        raw = safe_read_json(self.tasks_path, default=[])
        if not isinstance(raw, list):
            self.logger.warning("Task file %s is not a list; starting with no tasks", self.tasks_path)
            return []

        tasks: List[Task] = []
        seen = set()
        for entry in raw:
            try:
                if not isinstance(entry, dict):
                    raise ValueError(f"expected an object, got {type(entry).__name__}")
                task = Task.from_dict(entry)
            except ValueError as exc:
                self.logger.warning("Skipping unreadable task record: %s", exc)
                continue
            if task.id in seen:
                self.logger.warning("Skipping duplicate task id %s", task.id)
                continue
            seen.add(task.id)
            tasks.append(task)
        return tasks

    def load_log(self) -> CompletionLog:
        return log_from_json(safe_read_json(self.logs_path, default={}))

    def load(self) -> Tuple[List[Task], CompletionLog]:
        """Load the roster and completion log."""
        tasks, log = self.load_tasks(), self.load_log()
        self.logger.debug("Loaded %d tasks and %d logged days for %s", len(tasks), len(log), self.identity)
        return tasks, log

    def save_tasks(self, tasks: Sequence[Task]) -> None:
        """
        Persist the roster.

        Raises:
            StorageError: If the file could not be written
        """
        if not safe_write_json(self.tasks_path, [task.to_dict() for task in tasks]):
            raise StorageError(f"Could not save tasks to {self.tasks_path}")

    def save_log(self, log: Mapping[str, Set[str]]) -> None:
        """
        Persist the completion log.

        Raises:
            StorageError: If the file could not be written
        """
        if not safe_write_json(self.logs_path, log_to_json(log)):
            raise StorageError(f"Could not save completion log to {self.logs_path}")

    def replace(self, tasks: Sequence[Task], log: Mapping[str, Set[str]]) -> None:
        """
        Overwrite both roster and log wholesale.

        If the log cannot be written the previous roster file is put back,
        so a failed replace leaves the stored state as it was.

        Raises:
            StorageError: If either file could not be written
        """
        try:
            previous = self.tasks_path.read_text(encoding="utf-8") if self.tasks_path.exists() else None
        except (OSError, UnicodeDecodeError) as exc:
            raise StorageError(f"Could not snapshot {self.tasks_path}: {exc}") from exc

        self.save_tasks(tasks)
        try:
            self.save_log(log)
        except StorageError:
            self._restore_tasks(previous)
            raise
        self.logger.info("Replaced state for %s: %d tasks, %d logged days", self.identity, len(tasks), len(log))

    def _restore_tasks(self, previous: Optional[str]) -> None:
        if previous is None:
            try:
                self.tasks_path.unlink()
            except FileNotFoundError:
                pass
            except OSError as exc:
                self.logger.error("Could not remove %s after failed replace: %s", self.tasks_path, exc)
            return
        if not atomic_write(self.tasks_path, previous):
            self.logger.error("Could not restore %s after failed replace", self.tasks_path)
