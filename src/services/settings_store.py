"""
Settings Store Module

Persists the user's playback settings (volume, mute) across restarts.
"""

from typing import Any, Dict, Optional, Union
from pathlib import Path
import threading
import logging

import yaml

logger = logging.getLogger(__name__)

PERSISTED_KEYS = ("volume", "mute")


def _clean(data: Any) -> Dict[str, Any]:
    """Keep only known keys with usable values"""
    if not isinstance(data, dict):
        return {}

    settings: Dict[str, Any] = {}
    volume = data.get("volume")
    if isinstance(volume, (int, float)) and not isinstance(volume, bool):
        settings["volume"] = volume
    mute = data.get("mute")
    if isinstance(mute, bool):
        settings["mute"] = mute
    return settings


class MemorySettingsStore:
    """In-memory settings store, for tests and sessions without persistence"""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = dict(initial or {})

    def load(self) -> Dict[str, Any]:
        return _clean(self._data)

    def save(self, key: str, value: Any) -> None:
        self._data[key] = value


class YamlSettingsStore:
    """
    YAML file settings store

    Usage Example:
        store = YamlSettingsStore("~/.config/playback-model/settings.yaml")
        store.load()              # {'volume': 80, 'mute': False}
        store.save("volume", 65)
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path).expanduser()
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> Dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            with open(self._path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Failed to load settings from %s: %s", self._path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def load(self) -> Dict[str, Any]:
        """
        Load persisted settings.

        Returns:
            Dict with ``volume`` and/or ``mute``; empty when the file is
            missing or unreadable.
        """
        with self._lock:
            return _clean(self._read())

    def save(self, key: str, value: Any) -> None:
        """
        Persist one setting.

        Write failures are logged and otherwise ignored.
        """
        if key not in PERSISTED_KEYS:
            logger.debug("Ignoring unknown setting: %s", key)
            return

        with self._lock:
            data = self._read()
            data[key] = value
            try:
                self._path.parent.mkdir(parents=True, exist_ok=True)
                with open(self._path, 'w', encoding='utf-8') as f:
                    yaml.safe_dump(data, f, allow_unicode=True, default_flow_style=False)
            except OSError as e:
                logger.warning("Failed to save setting %s: %s", key, e)
                return
        logger.debug("Setting %s saved to: %s", key, self._path)
