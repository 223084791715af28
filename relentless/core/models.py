"""
Domain models for relentless.

Tasks and configuration are persisted; everything else here is derived
on demand from the task roster and the completion log.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone, tzinfo
from enum import Enum
from typing import Any, Dict, Optional
from uuid import uuid4
import logging
import os

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .exceptions import ConfigurationError
from ..utils.date import local_date
from ..utils.io import safe_read_json, safe_write_json


logger = logging.getLogger(__name__)

DEFAULT_HEATMAP_DAYS = 365

# 9999-12-31T23:59:59.999Z, the last instant datetime can represent
MAX_EPOCH_MS = 253402300799999


def _normalize_path(path: str) -> str:
    """Expand user and convert to absolute path."""
    return os.path.abspath(os.path.expanduser(path))


def _datetime_to_ms(value: datetime) -> int:
    if value.tzinfo is None:
        value = value.astimezone()
    return int(round(value.timestamp() * 1000))


def _ms_to_datetime(value: Any) -> datetime:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"createdAt must be epoch milliseconds, got {value!r}")
    if not 0 <= value <= MAX_EPOCH_MS:
        raise ValueError(f"createdAt out of range: {value!r}")
    try:
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as exc:
        raise ValueError(f"createdAt out of range: {value!r}") from exc


def new_task_id() -> str:
    """Fresh opaque task identifier."""
    return str(uuid4())


class DayStatus(Enum):
    """Classification of a calendar day against the active roster."""

    EMPTY = "empty"
    PERFECT = "perfect"
    PARTIAL = "partial"
    FAILED = "failed"


@dataclass
class Task:
    """A recurring protocol the user marks complete per day."""

    id: str
    title: str
    created_at: datetime
    archived: bool = False

    def created_date(self, tz: Optional[tzinfo] = None) -> date:
        """First eligible calendar day for this task in ``tz``."""
        return local_date(self.created_at, tz)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "createdAt": _datetime_to_ms(self.created_at),
        }
        if self.archived:
            data["archived"] = True
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Task:
        """
        Build a Task from its persisted form.

        Raises:
            ValueError: If a required field is missing or malformed
        """
        task_id = data.get("id")
        title = data.get("title")
        if not isinstance(task_id, str) or not task_id:
            raise ValueError(f"Task id must be a non-empty string, got {task_id!r}")
        if not isinstance(title, str) or not title.strip():
            raise ValueError(f"Task {task_id} has an empty title")
        return cls(
            id=task_id,
            title=title.strip(),
            created_at=_ms_to_datetime(data.get("createdAt")),
            archived=bool(data.get("archived", False)),
        )


@dataclass(frozen=True)
class TaskStats:
    """Per-task analytics, recomputed from the log on every change."""

    current_streak: int = 0
    longest_streak: int = 0
    total_completions: int = 0
    completion_rate: int = 0
    last_completed_date: Optional[str] = None


@dataclass(frozen=True)
class DayBreakdown:
    """How many active tasks were completed on a given date."""

    date: str
    total_tasks: int
    completed_tasks: int
    status: DayStatus

    @property
    def ratio(self) -> float:
        if self.total_tasks == 0:
            return 0.0
        return self.completed_tasks / self.total_tasks


@dataclass(frozen=True)
class AggregateStats:
    """Roster-wide completed versus missed totals."""

    total_possible: int = 0
    total_completed: int = 0
    total_failed: int = 0
    completion_rate: int = 0


@dataclass
class AppConfig:
    """User configuration for the tracker."""

    identity: Optional[str] = None
    timezone: Optional[str] = None
    heatmap_days: int = DEFAULT_HEATMAP_DAYS
    data_path: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.data_path is not None:
            self.data_path = _normalize_path(self.data_path)
        if not isinstance(self.heatmap_days, int) or self.heatmap_days < 1:
            logger.warning("Ignoring invalid heatmap_days=%r", self.heatmap_days)
            self.heatmap_days = DEFAULT_HEATMAP_DAYS

    def tzinfo(self) -> Optional[tzinfo]:
        """
        Configured zone, or None for the process's local zone.

        Raises:
            ConfigurationError: If the configured zone name is unknown
        """
        if not self.timezone:
            return None
        try:
            return ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ConfigurationError(f"Unknown timezone '{self.timezone}'") from exc

    @classmethod
    def load_from_file(cls, config_path: str) -> AppConfig:
        config_path = _normalize_path(config_path)
        data = safe_read_json(config_path, default={})
        if not isinstance(data, dict):
            logger.warning("Config at %s is not an object; using defaults", config_path)
            return cls()

        known = {"identity", "timezone", "heatmap_days", "data_path"}
        return cls(
            identity=data.get("identity") or None,
            timezone=data.get("timezone") or None,
            heatmap_days=data.get("heatmap_days", DEFAULT_HEATMAP_DAYS),
            data_path=data.get("data_path") or None,
            extra={k: v for k, v in data.items() if k not in known},
        )

    def save_to_file(self, config_path: str) -> bool:
        data = dict(self.extra)
        data.update({
            "identity": self.identity,
            "timezone": self.timezone,
            "heatmap_days": self.heatmap_days,
            "data_path": self.data_path,
        })
        return safe_write_json(_normalize_path(config_path), data)
