"""
Safe JSON persistence with atomic replacement and cooperative file locking.
"""

import contextlib
import errno
import json
import logging
import os
import tempfile
import time
from pathlib import Path
from typing import Any, Iterator, Union

try:  # fcntl is only available on POSIX platforms
    import fcntl  # type: ignore
except ImportError:  # pragma: no cover - Windows fallback
    fcntl = None  # type: ignore


logger = logging.getLogger(__name__)

DEFAULT_LOCK_TIMEOUT = 8.0  # seconds
LOCK_SLEEP_INTERVAL = 0.05  # seconds

PathLike = Union[str, Path]


@contextlib.contextmanager
def file_lock(target: Path, exclusive: bool, timeout: float = DEFAULT_LOCK_TIMEOUT) -> Iterator[None]:
    """Hold an advisory lock on ``<target>.lock`` for the duration of the block.

    No-op where fcntl is unavailable.
    """
    if fcntl is None:
        yield
        return

    lock_path = target.parent / f"{target.name}.lock"
    lock_path.parent.mkdir(parents=True, exist_ok=True)
    mode = fcntl.LOCK_EX if exclusive else fcntl.LOCK_SH
    deadline = time.monotonic() + timeout

    with open(lock_path, "a") as lock_file:
        while True:
            try:
                fcntl.flock(lock_file.fileno(), mode | fcntl.LOCK_NB)
                break
            except OSError as exc:  # pragma: no cover - depends on timing
                if exc.errno not in (errno.EACCES, errno.EAGAIN):
                    raise
                if time.monotonic() >= deadline:
                    raise TimeoutError(f"Timed out waiting for lock on {target}") from exc
                time.sleep(LOCK_SLEEP_INTERVAL)
        try:
            yield
        finally:
            fcntl.flock(lock_file.fileno(), fcntl.LOCK_UN)


def safe_read_json(file_path: PathLike, default: Any = None, *, lock_timeout: float = DEFAULT_LOCK_TIMEOUT) -> Any:
    """
    Read JSON from a file, falling back to ``default`` on any failure.

    Args:
        file_path: Path to JSON file
        default: Value returned when the file is missing, unreadable or
                 not valid JSON (an empty dict when omitted)

    Returns:
        Parsed JSON data or default value
    """
    if default is None:
        default = {}

    path = Path(os.path.expanduser(str(file_path)))
    if not path.exists():
        return default

    try:
        with file_lock(path, exclusive=False, timeout=lock_timeout):
            with path.open('r', encoding='utf-8') as handle:
                return json.load(handle)
    except TimeoutError as exc:
        logger.warning("Timed out waiting to read %s: %s", path, exc)
    except (json.JSONDecodeError, UnicodeDecodeError, OSError) as exc:
        logger.warning("Failed to read %s: %s", path, exc)
    return default


def atomic_write(file_path: PathLike, content: str, *, lock_timeout: float = DEFAULT_LOCK_TIMEOUT) -> bool:
    """
    Atomically replace a file's content.

    The content is written to a temporary file in the same directory and
    moved over the target with ``os.replace``.

    Returns:
        True if successful, False otherwise
    """
    path = Path(os.path.expanduser(str(file_path)))
    tmp_path = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with file_lock(path, exclusive=True, timeout=lock_timeout):
            with tempfile.NamedTemporaryFile(
                mode='w',
                dir=str(path.parent),
                prefix='.tmp_',
                delete=False,
                encoding='utf-8'
            ) as tmp_file:
                tmp_file.write(content)
                tmp_path = Path(tmp_file.name)
            os.replace(str(tmp_path), str(path))
        return True
    except (TimeoutError, OSError) as exc:
        logger.error("Error writing to %s: %s", path, exc)
        return False
    finally:
        if tmp_path and tmp_path.exists():
            try:
                tmp_path.unlink()
            except OSError:
                pass


def safe_write_json(file_path: PathLike, data: Any, indent: int = 2, *, lock_timeout: float = DEFAULT_LOCK_TIMEOUT) -> bool:
    """
    Serialize ``data`` as JSON and write it atomically.

    Returns:
        True if successful, False otherwise
    """
    try:
        content = json.dumps(data, indent=indent, ensure_ascii=False, sort_keys=True)
    except (TypeError, ValueError) as exc:
        logger.error("Cannot serialize data for %s: %s", file_path, exc)
        return False
    return atomic_write(file_path, content + "\n", lock_timeout=lock_timeout)
