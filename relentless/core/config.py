"""
Configuration management for relentless.
"""

from pathlib import Path
from typing import Optional

from .exceptions import ConfigurationError
from .models import AppConfig
from .paths import get_path_manager


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    return get_path_manager().config_path


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Load configuration from file or return defaults.

    Args:
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        AppConfig object
    """
    if config_path is None:
        config_path = str(get_default_config_path())
    return AppConfig.load_from_file(config_path)


def save_config(config: AppConfig, config_path: Optional[str] = None) -> None:
    """
    Save configuration to file.

    Raises:
        ConfigurationError: If the file could not be written
    """
    if config_path is None:
        manager = get_path_manager()
        manager.ensure_directories()
        config_path = str(manager.config_path)

    if not config.save_to_file(config_path):
        raise ConfigurationError(f"Could not write configuration to {config_path}")


def get_data_dir(config: Optional[AppConfig] = None) -> Path:
    """Data directory holding per-identity state, honoring a config override."""
    if config is not None and config.data_path:
        path = Path(config.data_path)
        path.mkdir(parents=True, exist_ok=True)
        return path
    manager = get_path_manager()
    manager.ensure_directories()
    return manager.data_dir
