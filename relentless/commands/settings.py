"""Config command - show or update user settings."""

import logging
from typing import Optional

from ..core.config import save_config
from ..core.exceptions import ConfigurationError
from ..core.models import AppConfig
from ..storage.store import IDENTITY_PATTERN


class ConfigCommand:
    """Command for viewing and changing configuration."""

    def __init__(self, config: AppConfig, verbose: bool = False, config_path: Optional[str] = None):
        self.config = config
        self.verbose = verbose
        self.config_path = config_path
        self.logger = logging.getLogger(__name__)
        if verbose:
            self.logger.setLevel(logging.DEBUG)

    def run(
        self,
        timezone: Optional[str] = None,
        identity: Optional[str] = None,
        heatmap_days: Optional[int] = None,
    ) -> bool:
        changed = False
        previous_timezone = self.config.timezone

        if timezone is not None:
            self.config.timezone = timezone or None
            try:
                self.config.tzinfo()
            except ConfigurationError as exc:
                self.config.timezone = previous_timezone
                print(f"⚠️  {exc}")
                return False
            changed = True

        if identity is not None:
            if identity and not IDENTITY_PATTERN.match(identity):
                print(f"⚠️  Invalid identity '{identity}'")
                return False
            self.config.identity = identity or None
            changed = True

        if heatmap_days is not None:
            if heatmap_days < 1:
                print("⚠️  heatmap days must be at least 1")
                return False
            self.config.heatmap_days = heatmap_days
            changed = True

        if changed:
            try:
                save_config(self.config, self.config_path)
            except ConfigurationError as exc:
                self.logger.error("Config save failed: %s", exc)
                print(f"⚠️  {exc}")
                return False

        print(f"timezone:     {self.config.timezone or '(local)'}")
        print(f"identity:     {self.config.identity or '(device)'}")
        print(f"heatmap_days: {self.config.heatmap_days}")
        if self.config.data_path:
            print(f"data_path:    {self.config.data_path}")
        return True
