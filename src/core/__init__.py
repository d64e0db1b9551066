"""
Playback Core Module
"""

from .states import PlayerState
from .event_bus import EventBus, EventType, PlayerEvent
from .provider import ProviderBase
from .provider_registry import ProviderRegistry, ProviderNotFoundError

__all__ = [
    'PlayerState',
    'EventBus',
    'EventType',
    'PlayerEvent',
    'ProviderBase',
    'ProviderRegistry',
    'ProviderNotFoundError',
]
