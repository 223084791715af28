"""
Centralized path management for relentless.

Resolves the working directory and provides a consistent API for
locating the configuration file, per-identity data and exports.
"""

import os
import sys
from pathlib import Path
from typing import Optional
import logging


class PathManager:
    """Manages relentless file paths."""

    APP_DIR_NAME = "relentless"
    HOME_ENV_VAR = "RELENTLESS_HOME"

    # File names
    CONFIG_FILE = "config.json"
    DEVICE_ID_FILE = "device_id"

    def __init__(self, working_dir: Optional[Path] = None, logger: Optional[logging.Logger] = None):
        """Initialize path manager, optionally pinned to a working directory."""
        self.logger = logger or logging.getLogger(__name__)
        self._working_dir: Optional[Path] = Path(working_dir) if working_dir else None

    def _default_user_dir(self) -> Path:
        """Platform-appropriate per-user data directory."""
        if sys.platform == "darwin":
            return Path.home() / "Library" / "Application Support" / self.APP_DIR_NAME
        if sys.platform.startswith("win"):
            appdata = os.environ.get("APPDATA")
            if appdata:
                return Path(appdata) / self.APP_DIR_NAME
            return Path.home() / "AppData" / "Roaming" / self.APP_DIR_NAME
        xdg = os.environ.get("XDG_CONFIG_HOME")
        if xdg:
            return Path(xdg) / self.APP_DIR_NAME
        return Path.home() / ".config" / self.APP_DIR_NAME

    @property
    def working_dir(self) -> Path:
        """
        Get the working directory for relentless data.

        Priority order:
        1. RELENTLESS_HOME environment variable (explicit override)
        2. Platform user directory
        """
        if self._working_dir is not None:
            return self._working_dir

        env_override = os.environ.get(self.HOME_ENV_VAR)
        if env_override:
            self._working_dir = Path(env_override).expanduser().resolve()
            self.logger.debug(f"Using {self.HOME_ENV_VAR} override: {self._working_dir}")
        else:
            self._working_dir = self._default_user_dir()
            self.logger.debug(f"Using user data directory: {self._working_dir}")
        return self._working_dir

    def ensure_directories(self) -> None:
        """Ensure all required directories exist."""
        for directory in (self.working_dir, self.data_dir, self.export_dir):
            directory.mkdir(parents=True, exist_ok=True)
            self.logger.debug(f"Ensured directory exists: {directory}")

    @property
    def data_dir(self) -> Path:
        """Root of the per-identity state directories."""
        return self.working_dir / "data"

    @property
    def export_dir(self) -> Path:
        """Default location for backup exports."""
        return self.working_dir / "exports"

    @property
    def config_path(self) -> Path:
        """Get the configuration file path."""
        return self.working_dir / self.CONFIG_FILE

    @property
    def device_id_path(self) -> Path:
        """File holding the locally provisioned device identity."""
        return self.working_dir / self.DEVICE_ID_FILE


# Global instance for convenience
_path_manager = None


def get_path_manager() -> PathManager:
    """Get or create the global PathManager instance."""
    global _path_manager
    if _path_manager is None:
        _path_manager = PathManager()
    return _path_manager


def set_path_manager(manager: Optional[PathManager]) -> None:
    """Replace the global PathManager (None resets to lazy default)."""
    global _path_manager
    _path_manager = manager
