"""Shared plumbing for commands that read or write tracker state."""

import logging
import traceback
from datetime import tzinfo
from typing import Optional

from ..core.config import get_data_dir
from ..core.models import AppConfig
from ..core.paths import get_path_manager
from ..storage.identity import DeviceIdentity
from ..storage.store import TrackerStore


class TrackerCommand:
    """Base for commands operating on one identity's roster and log."""

    def __init__(self, config: AppConfig, verbose: bool = False, store: Optional[TrackerStore] = None):
        self.config = config
        self.verbose = verbose
        self.logger = logging.getLogger(self.__class__.__module__)
        if verbose:
            self.logger.setLevel(logging.DEBUG)
        self._store = store

    @property
    def identity(self) -> str:
        if self.config.identity:
            return self.config.identity
        return DeviceIdentity(get_path_manager().device_id_path, logger=self.logger).get()

    @property
    def store(self) -> TrackerStore:
        if self._store is None:
            self._store = TrackerStore(self.identity, get_data_dir(self.config), logger=self.logger)
        return self._store

    @property
    def tz(self) -> Optional[tzinfo]:
        return self.config.tzinfo()

    def _fail(self, action: str, exc: Exception) -> bool:
        self.logger.error("%s failed: %s", action, exc)
        if self.verbose:
            traceback.print_exc()
        return False
