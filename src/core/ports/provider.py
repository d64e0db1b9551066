# -*- coding: utf-8 -*-
"""
Provider Port Interface

Defines the capability set every playback provider offers to the playback
model, and the registry lookup the model uses to pick one.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional, Protocol, Type, runtime_checkable

if TYPE_CHECKING:
    from models.playlist import Source


@runtime_checkable
class IProvider(Protocol):
    """Playback Provider Interface

    ``init(item)`` is optional and therefore not part of the protocol.
    """

    name: str

    def set_volume(self, volume: int) -> None:
        """Set volume

        Args:
            volume: Volume value (0 - 100)
        """
        ...

    def set_mute(self, mute: bool) -> None:
        """Set the mute flag"""
        ...

    def play(self) -> None:
        """Start or resume playback"""
        ...

    def pause(self) -> None:
        """Pause playback"""
        ...

    def get_container(self) -> Any:
        """Get the rendering container, or None"""
        ...

    def set_container(self, container: Any) -> None:
        """Take over a rendering container"""
        ...

    def remove(self) -> None:
        """Release the rendering container"""
        ...

    def destroy(self) -> None:
        """Tear the provider down"""
        ...

    def add_global_listener(self, listener: Callable[[Any, Any], None]) -> None:
        """Receive ``(event_type, event)`` for every provider event"""
        ...

    def remove_global_listener(self, listener: Callable[[Any, Any], None]) -> Any:
        """Stop receiving provider events"""
        ...


@runtime_checkable
class IProviderRegistry(Protocol):
    """Provider Registry Interface"""

    def choose(self, source: "Source") -> Optional[Type[Any]]:
        """Pick the provider class for a source

        Args:
            source: Primary source of a playlist item

        Returns:
            A provider class, or None when nothing can play the source
        """
        ...
