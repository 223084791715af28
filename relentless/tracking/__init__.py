"""Completion log and task roster operations."""

from .log import (
    CompletionLog,
    toggle,
    is_completed,
    completed_on,
    done_dates,
    count_logged_days,
    log_from_json,
    log_to_json
)
from .roster import (
    create_task,
    add_task,
    remove_task,
    set_archived,
    find_task,
    order_for_today
)

__all__ = [
    'CompletionLog',
    'toggle',
    'is_completed',
    'completed_on',
    'done_dates',
    'count_logged_days',
    'log_from_json',
    'log_to_json',
    'create_task',
    'add_task',
    'remove_task',
    'set_archived',
    'find_task',
    'order_for_today',
]
