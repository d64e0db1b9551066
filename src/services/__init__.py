"""
Service Layer Module
"""

from .config_service import ConfigService
from .settings_store import MemorySettingsStore, YamlSettingsStore
from .qoe import QoeTracker, Timer
from .playback_model import PlaybackModel, MUTE_RESTORE_VOLUME

__all__ = [
    'ConfigService',
    'MemorySettingsStore',
    'YamlSettingsStore',
    'QoeTracker',
    'Timer',
    'PlaybackModel',
    'MUTE_RESTORE_VOLUME',
]
