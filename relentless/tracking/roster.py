"""
Task roster operations.

All functions return new lists; the caller persists the result.
"""

from datetime import datetime, timezone
from typing import List, Mapping, Optional, Sequence, Set, Tuple, TypeVar

from ..core.exceptions import TaskNotFoundError
from ..core.models import Task, new_task_id


T = TypeVar("T")


def create_task(title: str, now: Optional[datetime] = None) -> Task:
    """
    Create a task with a fresh id, stamped with the current instant.

    Raises:
        ValueError: If the title is empty after stripping
    """
    title = (title or "").strip()
    if not title:
        raise ValueError("Task title cannot be empty")
    return Task(
        id=new_task_id(),
        title=title,
        created_at=now or datetime.now(timezone.utc),
    )


def add_task(tasks: Sequence[Task], task: Task) -> List[Task]:
    if any(existing.id == task.id for existing in tasks):
        raise ValueError(f"Task id {task.id} already exists")
    return list(tasks) + [task]


def remove_task(tasks: Sequence[Task], task_id: str) -> List[Task]:
    """Drop a task from the roster. Its completion history is kept."""
    remaining = [task for task in tasks if task.id != task_id]
    if len(remaining) == len(tasks):
        raise TaskNotFoundError(f"Task id {task_id} not found")
    return remaining


def set_archived(tasks: Sequence[Task], task_id: str, archived: bool = True) -> List[Task]:
    updated: List[Task] = []
    found = False
    for task in tasks:
        if task.id == task_id:
            found = True
            task = Task(id=task.id, title=task.title, created_at=task.created_at, archived=archived)
        updated.append(task)
    if not found:
        raise TaskNotFoundError(f"Task id {task_id} not found")
    return updated


def find_task(tasks: Sequence[Task], ref: str) -> Task:
    """
    Resolve a user reference to a task.

    Matches, in order: exact id, exact title (case-insensitive), then a
    unique id prefix.

    Raises:
        TaskNotFoundError: If nothing (or more than one task) matches
    """
    ref = (ref or "").strip()
    if not ref:
        raise TaskNotFoundError("No task reference given")

    for task in tasks:
        if task.id == ref:
            return task

    by_title = [task for task in tasks if task.title.lower() == ref.lower()]
    if len(by_title) == 1:
        return by_title[0]
    if len(by_title) > 1:
        raise TaskNotFoundError(f"'{ref}' matches {len(by_title)} tasks; use the id")

    by_prefix = [task for task in tasks if task.id.startswith(ref)]
    if len(by_prefix) == 1:
        return by_prefix[0]
    if len(by_prefix) > 1:
        raise TaskNotFoundError(f"Id prefix '{ref}' is ambiguous")
    raise TaskNotFoundError(f"Task '{ref}' not found")


def order_for_today(
    items: Sequence[Tuple[Task, T]],
    log: Mapping[str, Set[str]],
    today_key: str,
) -> List[Tuple[Task, T]]:
    """Stable sort putting tasks still open today ahead of finished ones."""
    done_today = log.get(today_key, set())
    return sorted(items, key=lambda item: item[0].id in done_today)
