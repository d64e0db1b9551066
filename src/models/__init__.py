"""
Data Models Module
"""

from .playlist import PlaylistItem, Source, filter_playlist
from .player_config import PlayerConfig, serialize_value
from .model_state import ModelState

__all__ = [
    'PlaylistItem',
    'Source',
    'filter_playlist',
    'PlayerConfig',
    'serialize_value',
    'ModelState',
]
