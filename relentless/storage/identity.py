"""Locally provisioned device identity used to namespace stored state."""

import logging
from pathlib import Path
from typing import Optional
from uuid import uuid4

from ..core.exceptions import StorageError
from ..utils.io import atomic_write


class DeviceIdentity:
    """Reads, or creates on first use, a stable per-device identifier."""

    def __init__(self, path: Path, logger: Optional[logging.Logger] = None):
        self.path = Path(path)
        self.logger = logger or logging.getLogger(__name__)
        self._cached: Optional[str] = None

    def get(self) -> str:
        """
        Return the device id, provisioning a new one if none is stored.

        Raises:
            StorageError: If a new id could not be written
        """
        if self._cached:
            return self._cached

        if self.path.exists():
            try:
                stored = self.path.read_text(encoding="utf-8").strip()
            except OSError as exc:
                self.logger.warning("Could not read device id from %s: %s", self.path, exc)
                stored = ""
            if stored:
                self._cached = stored
                return stored

        device_id = uuid4().hex
        if not atomic_write(self.path, device_id + "\n"):
            raise StorageError(f"Could not store device id at {self.path}")
        self.logger.info("Provisioned new device id %s", device_id)
        self._cached = device_id
        return device_id
