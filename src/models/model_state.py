"""
Playback model state record
"""

from dataclasses import dataclass, field, fields
from typing import List

from core.states import PlayerState
from models.playlist import PlaylistItem


@dataclass
class ModelState:
    """Mutable state owned by the playback model"""
    state: PlayerState = PlayerState.IDLE
    playlist: List[PlaylistItem] = field(default_factory=list)
    item: int = -1
    position: float = 0
    duration: float = -1
    buffer: float = 0
    volume: int = 90
    mute: bool = False
    fullscreen: bool = False
    dragging: bool = False

    @classmethod
    def attribute_names(cls) -> frozenset:
        return frozenset(f.name for f in fields(cls))
