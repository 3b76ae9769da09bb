"""
Sync configuration management.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

CONFIG_FILENAME = 'sync-config.json'

DEFAULT_EXCLUSIONS: tuple[str, ...] = ('.git', 'node_modules', '.DS_Store')


@dataclass
class SyncConfig:
    """Exclusion rules for a sync run."""
    default_exclusions: list[str] = field(default_factory=lambda: list(DEFAULT_EXCLUSIONS))
    custom_exclusions: list[str] = field(default_factory=list)

    @property
    def exclusions(self) -> list[str]:
        """Default and custom rules combined, first occurrence kept."""
        return list(dict.fromkeys(self.default_exclusions + self.custom_exclusions))


class SettingsManager:
    """Manager for loading/saving the sync configuration file."""

    def __init__(self, config_path: Optional[Path | str] = None):
        self.config_path = Path(config_path) if config_path else self._get_default_path()
        self._config: Optional[SyncConfig] = None

    @staticmethod
    def _get_default_path() -> Path:
        """Config file in the current working directory."""
        return Path.cwd() / CONFIG_FILENAME

    @property
    def config(self) -> SyncConfig:
        """Get current config, loading from disk if needed."""
        if self._config is None:
            self._config = self.load()
        return self._config

    def load(self) -> SyncConfig:
        """Load config from disk, falling back to the built-in defaults."""
        if not self.config_path.exists():
            logging.warning("SettingsManager - No config file found, using default exclusions")
            return SyncConfig()

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logging.warning(
                f"SettingsManager - Could not read {self.config_path}: {e}; "
                f"using default exclusions"
            )
            return SyncConfig()

        if not isinstance(data, dict):
            logging.warning(
                f"SettingsManager - {self.config_path} is not a JSON object; "
                f"using default exclusions"
            )
            return SyncConfig()

        return self._from_dict(data)

    def save(self, config: Optional[SyncConfig] = None) -> bool:
        """Save config to disk."""
        config = config or self._config
        if config is None:
            return False

        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)

            with open(self.config_path, 'w', encoding='utf-8') as f:
                json.dump(self._to_dict(config), f, indent=2)

            self._config = config
            return True

        except OSError as e:
            logging.error(f"SettingsManager - Could not save {self.config_path}: {e}")
            return False

    @staticmethod
    def _to_dict(config: SyncConfig) -> dict:
        """Convert config to the on-disk JSON layout."""
        return {
            'defaultExclusions': list(config.default_exclusions),
            'customExclusions': list(config.custom_exclusions),
        }

    @staticmethod
    def _from_dict(data: dict) -> SyncConfig:
        """Convert the on-disk JSON layout back to a config."""
        def get_rules(camel_key: str, snake_key: str, default: list[str]) -> list[str]:
            value: Any = data.get(camel_key, data.get(snake_key))
            if isinstance(value, list) and all(isinstance(v, str) for v in value):
                return list(value)
            if value is not None:
                logging.warning(
                    f"SettingsManager - '{camel_key}' must be a list of strings; using default"
                )
            return list(default)

        return SyncConfig(
            default_exclusions=get_rules('defaultExclusions', 'default_exclusions', list(DEFAULT_EXCLUSIONS)),
            custom_exclusions=get_rules('customExclusions', 'custom_exclusions', []),
        )
