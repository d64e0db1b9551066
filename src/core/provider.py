"""
Playback Provider Module

Base class for pluggable playback engines. A provider plays one family of
sources (native media element, streaming protocol engine, ...), renders
into a container it may be handed by the playback model, and reports what
happens through its own event bus.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Optional
import logging

from core.event_bus import EventBus, EventType, GlobalListener, PlayerEvent
from core.states import PlayerState

if TYPE_CHECKING:
    from models.playlist import PlaylistItem, Source

logger = logging.getLogger(__name__)


class ProviderBase(ABC):
    """
    Abstract Base Class for Playback Providers

    Subclasses set ``name`` to a unique tag. The playback model compares
    tags by value to decide whether a new item needs a different provider.
    """

    name: str = "base"

    def __init__(self, player_id: str = ""):
        self._player_id = player_id
        self._state: PlayerState = PlayerState.IDLE
        self._volume: int = 90
        self._mute: bool = False
        self._container: Any = None
        self._events = EventBus()

    @staticmethod
    def supports(source: "Source") -> bool:
        """
        Check whether this provider can play a source

        Subclasses override this; it must not touch any playback state.
        """
        return False

    @property
    def state(self) -> PlayerState:
        """Get the current provider state"""
        return self._state

    @property
    def volume(self) -> int:
        """Get the current volume"""
        return self._volume

    @property
    def muted(self) -> bool:
        return self._mute

    def get_provider_name(self) -> str:
        """Get the provider name tag"""
        return self.name

    @abstractmethod
    def play(self) -> None:
        """Start or resume playback"""
        pass

    @abstractmethod
    def pause(self) -> None:
        """Pause playback"""
        pass

    def init(self, item: "PlaylistItem") -> None:
        """
        Prepare for an item before playback starts (e.g. preload artwork)

        Args:
            item: The playlist item that just became current
        """
        pass

    def set_volume(self, volume: int) -> None:
        """
        Set the volume

        Args:
            volume: Volume value (0 - 100)
        """
        self._volume = volume

    def set_mute(self, mute: bool) -> None:
        """Set the mute flag"""
        self._mute = bool(mute)

    # ===== Rendering container =====

    def get_container(self) -> Any:
        """Get the rendering container this provider draws into, if any"""
        return self._container

    def set_container(self, container: Any) -> None:
        """Attach the provider's output to a rendering container"""
        self._container = container

    def remove(self) -> None:
        """Detach the provider's output from its container and release it"""
        self._container = None

    def destroy(self) -> None:
        """Release everything the provider holds"""
        self.remove()
        self._events.clear()
        logger.debug("Provider %s destroyed", self.name)

    # ===== Events =====

    def add_global_listener(self, listener: GlobalListener) -> None:
        """Receive ``(event_type, event)`` for every event this provider sends"""
        self._events.add_global_listener(listener)

    def remove_global_listener(self, listener: GlobalListener) -> bool:
        return self._events.remove_global_listener(listener)

    def send_event(self, event_type: Any, event: Optional[PlayerEvent] = None) -> None:
        """Publish an event to this provider's listeners"""
        self._events.publish(event_type, event if event is not None else PlayerEvent())

    def set_state(self, newstate: PlayerState) -> None:
        """Change the provider state and report it, skipping repeats"""
        oldstate = self._state
        if newstate == oldstate:
            return
        self._state = newstate
        self.send_event(
            EventType.PLAYER_STATE,
            PlayerEvent(newstate=newstate, oldstate=oldstate),
        )
