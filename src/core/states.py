"""
Player States

Public player states plus the two provider-internal sub-states that the
playback model folds into BUFFERING before anyone else sees them.
"""

from enum import Enum


class PlayerState(Enum):
    """Player Status"""
    IDLE = "idle"               # Idle
    BUFFERING = "buffering"     # Buffering
    PLAYING = "playing"         # Playing
    PAUSED = "paused"           # Paused
    COMPLETED = "complete"      # Playback finished
    ERROR = "error"             # Error

    # Provider-level only, never stored on the model
    LOADING = "loading"
    STALLED = "stalled"


PROVIDER_INTERNAL_STATES = frozenset({PlayerState.LOADING, PlayerState.STALLED})
