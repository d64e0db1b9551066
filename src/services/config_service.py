"""
Configuration Service Module

Loads player configuration and builds the flat settings object the
playback model is constructed with.
"""

from typing import Any, Dict, Optional
from pathlib import Path
import copy
import os
import sys
import yaml
import threading
import logging

from models.player_config import PlayerConfig

logger = logging.getLogger(__name__)


class ConfigService:
    """
    Configuration Service

    Reads the built-in player defaults, deep-merges a YAML file over them
    and produces a ``PlayerConfig``.

    Usage Example:
        config = ConfigService("config/player.yaml")

        # Get configuration
        width = config.get("player.width", 480)

        # Set configuration
        config.set("player.autostart", True)
        config.save()

        # Flat settings for the playback model
        player_config = config.build_player_config(store.load())
    """

    def __init__(self, config_path: Optional[str] = None):
        if config_path:
            self._config_path = Path(config_path)
        else:
            self._config_path = self._get_user_config_path()

        self._config: Dict[str, Any] = {}
        self._lock = threading.Lock()

        self._load()

    @staticmethod
    def _get_user_config_path() -> Path:
        """Get user configuration file path (platform-specific)"""
        if sys.platform == "win32":
            base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        elif sys.platform == "darwin":
            base = Path.home() / "Library" / "Application Support"
        else:
            base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
        return base / "playback-model" / "config.yaml"

    @property
    def config_path(self) -> Path:
        return self._config_path

    @property
    def settings_path(self) -> Path:
        """Where user settings (volume, mute) are persisted; defaults to beside the config file"""
        path = self.get("settings.path")
        if path:
            return Path(path).expanduser()
        return self._config_path.with_name("settings.yaml")

    def _load(self) -> None:
        """Load defaults, then merge the configuration file over them"""
        config = self._get_default_config()

        if self._config_path.exists():
            try:
                with open(self._config_path, 'r', encoding='utf-8') as f:
                    file_config = yaml.safe_load(f) or {}
                if isinstance(file_config, dict):
                    self._deep_merge(config, file_config)
                else:
                    logger.warning("Ignoring configuration that is not a mapping: %s", self._config_path)
            except (OSError, yaml.YAMLError) as e:
                logger.warning("Failed to load configuration: %s", e)

        with self._lock:
            self._config = config

    def _deep_merge(self, base: Dict, override: Dict) -> None:
        """Deep merge dictionaries, override overwrites base"""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration"""
        return {
            'player': PlayerConfig().to_dict(),
            'settings': {
                'path': None,
            },
        }

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Supports dot-separated nested keys, e.g., "player.volume".

        Args:
            key: Configuration key
            default: Default value

        Returns:
            Configuration value or the default value.
        """
        with self._lock:
            keys = key.split('.')
            value = self._config

            try:
                for k in keys:
                    value = value[k]
                return value
            except (KeyError, TypeError):
                return default

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value.

        Args:
            key: Configuration key (dot-separated)
            value: Configuration value
        """
        with self._lock:
            keys = key.split('.')
            config = self._config

            # Navigate to the parent node
            for k in keys[:-1]:
                if k not in config:
                    config[k] = {}
                config = config[k]

            config[keys[-1]] = value

    def get_all(self) -> Dict[str, Any]:
        """Get all configurations."""
        with self._lock:
            return copy.deepcopy(self._config)

    def build_player_config(
        self,
        persisted: Optional[Dict[str, Any]] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> PlayerConfig:
        """
        Build the flat player settings.

        Precedence, lowest first: defaults, configuration file, persisted
        user settings, caller overrides.

        Args:
            persisted: Values from the settings store (volume, mute)
            overrides: Caller configuration

        Returns:
            PlayerConfig
        """
        player = self.get("player", {}) or {}
        return (
            PlayerConfig.from_dict(player)
            .with_overrides(persisted)
            .with_overrides(overrides)
        )

    def save(self) -> bool:
        """
        Save configuration to the configuration file.

        Returns:
            bool: True if saving was successful.
        """
        try:
            self._config_path.parent.mkdir(parents=True, exist_ok=True)

            with self._lock:
                with open(self._config_path, 'w', encoding='utf-8') as f:
                    yaml.safe_dump(self._config, f, allow_unicode=True, default_flow_style=False)
            logger.debug("Configuration saved to: %s", self._config_path)
            return True
        except (OSError, yaml.YAMLError) as e:
            logger.error("Failed to save configuration: %s", e)
            return False

    def reload(self) -> bool:
        """
        Reload configuration

        Returns:
            bool: Whether loading was successful
        """
        try:
            self._load()
            return True
        except Exception as e:
            logger.error("Failed to reload configuration: %s", e)
            return False

    def reset(self) -> None:
        """Reset to default configuration."""
        with self._lock:
            self._config = self._get_default_config()
