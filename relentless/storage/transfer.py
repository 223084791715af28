"""
Backup export and strict import.

Payload format (JSON)::

    {
      "version": 1,
      "deviceId": "...",
      "timestamp": 1718000000000,
      "tasks": [{"id": "...", "title": "...", "createdAt": 1718000000000}],
      "logs": {"2024-06-10": ["<task id>", ...]}
    }

Imports are validated against this schema before anything is written;
a payload that fails validation leaves the destination untouched.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Literal, Mapping, Optional, Sequence, Set, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from ..core.exceptions import ImportPayloadError, StorageError
from ..core.models import MAX_EPOCH_MS, Task
from ..tracking.log import CompletionLog, log_from_json, log_to_json
from ..utils.date import is_date_key
from ..utils.io import safe_write_json
from .store import TrackerStore


EXPORT_VERSION = 1

logger = logging.getLogger(__name__)


class TaskRecord(BaseModel):
    """A task as it appears in an export."""

    model_config = ConfigDict(extra='forbid', strict=True)

    id: str = Field(min_length=1)
    title: str
    createdAt: float = Field(ge=0, le=MAX_EPOCH_MS, allow_inf_nan=False)
    archived: Optional[bool] = None

    @field_validator('title')
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError('title must not be blank')
        return v.strip()


class ExportPayload(BaseModel):
    """Top-level export document."""

    model_config = ConfigDict(extra='forbid', strict=True)

    version: Literal[1]
    deviceId: str = Field(min_length=1)
    timestamp: float = Field(ge=0)
    tasks: List[TaskRecord]
    logs: Dict[str, List[str]]

    @field_validator('logs')
    @classmethod
    def log_keys_are_dates(cls, v: Dict[str, List[str]]) -> Dict[str, List[str]]:
        bad = [key for key in v if not is_date_key(key)]
        if bad:
            raise ValueError(f'log keys must be YYYY-MM-DD dates, got {bad[:3]}')
        return v

    @model_validator(mode='after')
    def task_ids_unique(self) -> 'ExportPayload':
        ids = [task.id for task in self.tasks]
        if len(ids) != len(set(ids)):
            raise ValueError('task ids must be unique')
        return self


@dataclass
class ImportResult:
    """Outcome of parsing (and optionally applying) an import payload."""

    ok: bool
    tasks: List[Task] = field(default_factory=list)
    log: CompletionLog = field(default_factory=dict)
    device_id: Optional[str] = None
    error: Optional[ImportPayloadError] = None

    def __bool__(self) -> bool:
        return self.ok


def _now_ms(now: Optional[datetime] = None) -> int:
    now = now or datetime.now(timezone.utc)
    return int(now.timestamp() * 1000)


def build_export(
    device_id: str,
    tasks: Sequence[Task],
    log: Mapping[str, Set[str]],
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Assemble the export document for the given state."""
    return {
        "version": EXPORT_VERSION,
        "deviceId": device_id,
        "timestamp": _now_ms(now),
        "tasks": [task.to_dict() for task in tasks],
        "logs": log_to_json(log),
    }


def export_to_file(
    path: Union[str, Path],
    device_id: str,
    tasks: Sequence[Task],
    log: Mapping[str, Set[str]],
    now: Optional[datetime] = None,
) -> bool:
    """
    Write an export document to ``path``.

    Returns:
        True if successful, False otherwise
    """
    ok = safe_write_json(path, build_export(device_id, tasks, log, now))
    if ok:
        logger.info("Exported %d tasks to %s", len(tasks), path)
    return ok


def parse_import(text: Union[str, bytes]) -> ImportResult:
    """
    Parse and validate an export document.

    Never raises for bad input; failures come back as
    ``ImportResult(ok=False, error=...)``.
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError, TypeError) as exc:
        return ImportResult(ok=False, error=ImportPayloadError(f"Not valid JSON: {exc}"))

    try:
        payload = ExportPayload.model_validate(data)
    except ValidationError as exc:
        return ImportResult(ok=False, error=ImportPayloadError(f"Invalid backup: {exc}"))

    try:
        tasks = [Task.from_dict(record.model_dump(exclude_none=True)) for record in payload.tasks]
    except ValueError as exc:
        return ImportResult(ok=False, error=ImportPayloadError(f"Invalid backup: {exc}"))

    return ImportResult(
        ok=True,
        tasks=tasks,
        log=log_from_json(payload.logs),
        device_id=payload.deviceId,
    )


def import_into(store: TrackerStore, text: Union[str, bytes]) -> ImportResult:
    """
    Validate ``text`` and, only if valid, overwrite the store's state with it.
    """
    result = parse_import(text)
    if not result.ok:
        logger.warning("Import rejected: %s", result.error)
        return result

    try:
        store.replace(result.tasks, result.log)
    except StorageError as exc:
        return ImportResult(ok=False, error=ImportPayloadError(str(exc)))

    logger.info("Imported %d tasks from device %s into %s", len(result.tasks), result.device_id, store.identity)
    return result
