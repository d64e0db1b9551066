# -*- coding: utf-8 -*-
"""
Settings Store Port Interface

Durable key/value persistence for user playback settings (volume, mute).
"""

from __future__ import annotations

from typing import Any, Dict, Protocol, runtime_checkable


@runtime_checkable
class ISettingsStore(Protocol):
    """Settings Store Interface

    Current implementations: YamlSettingsStore, MemorySettingsStore
    """

    def load(self) -> Dict[str, Any]:
        """Load persisted settings

        Returns:
            Mapping with any of the keys ``volume`` and ``mute``
        """
        ...

    def save(self, key: str, value: Any) -> None:
        """Persist one setting

        Args:
            key: Setting name
            value: Setting value
        """
        ...
