"""
The completion log: a sparse mapping of date key to the ids completed that day.

A date key is present only while its set is non-empty. Ids may refer to
tasks that have since been removed; nothing here looks them up.
"""

import logging
from typing import Any, Dict, List, Mapping, Set

from ..utils.date import is_date_key


logger = logging.getLogger(__name__)

CompletionLog = Dict[str, Set[str]]


def toggle(log: Mapping[str, Set[str]], date_key: str, task_id: str) -> CompletionLog:
    """
    Flip the completion of ``task_id`` on ``date_key``.

    The input log is left untouched; a new log is returned with the id
    removed if it was present, added otherwise. A day left with no ids is
    dropped entirely.

    Args:
        log: Current completion log
        date_key: Day to toggle (YYYY-MM-DD)
        task_id: Task identifier

    Returns:
        Updated completion log for the caller to persist
    """
    updated: CompletionLog = dict(log)
    day = set(updated.get(date_key, ()))

    if task_id in day:
        day.discard(task_id)
    else:
        day.add(task_id)

    if day:
        updated[date_key] = day
    else:
        updated.pop(date_key, None)
    return updated


def is_completed(log: Mapping[str, Set[str]], date_key: str, task_id: str) -> bool:
    return task_id in log.get(date_key, ())


def completed_on(log: Mapping[str, Set[str]], date_key: str) -> Set[str]:
    """Ids completed on a day (empty set when the day is absent)."""
    return set(log.get(date_key, ()))


def done_dates(log: Mapping[str, Set[str]], task_id: str) -> Set[str]:
    """All date keys on which ``task_id`` was completed."""
    return {key for key, ids in log.items() if task_id in ids}


def count_logged_days(log: Mapping[str, Set[str]]) -> int:
    return sum(1 for ids in log.values() if ids)


def log_from_json(raw: Any) -> CompletionLog:
    """
    Build a completion log from its persisted form.

    Entries whose key is not a YYYY-MM-DD date or whose value is not a
    list of strings are dropped, duplicate ids collapse, and empty days
    are pruned. Anything that is not an object yields an empty log.
    """
    if not isinstance(raw, dict):
        if raw is not None:
            logger.warning("Ignoring completion log of type %s", type(raw).__name__)
        return {}

    log: CompletionLog = {}
    for key, ids in raw.items():
        if not isinstance(key, str) or not isinstance(ids, list):
            logger.warning("Skipping malformed log entry %r", key)
            continue
        if not is_date_key(key):
            logger.warning("Skipping log entry with non-date key %r", key)
            continue
        day = {task_id for task_id in ids if isinstance(task_id, str) and task_id}
        if day:
            log[key] = day
    return log


def log_to_json(log: Mapping[str, Set[str]]) -> Dict[str, List[str]]:
    """Persisted form of the log: sorted id lists, empty days omitted."""
    return {key: sorted(ids) for key, ids in sorted(log.items()) if ids}
