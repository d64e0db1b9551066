# -*- coding: utf-8 -*-
"""
Event Bus Module - Publish-Subscribe Pattern Implementation

Provides the dispatcher composed by the playback model and by every provider.

Design Notes:
- Pure Python, synchronous: callbacks run in the publisher's thread, in
  subscription order, typed subscribers before global listeners.
- Not a singleton. Each owner creates its own instance.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Hashable, List, Optional
from enum import Enum
import threading
import uuid
import logging

from core.states import PlayerState

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Event type enumeration"""

    # Provider diagnostics (published before the coerced state change)
    PROVIDER_LOADING = "provider_loading"
    PROVIDER_STALLED = "provider_stalled"

    # Player / media events
    PLAYER_STATE = "state"
    MEDIA_MUTE = "mute"
    MEDIA_VOLUME = "volume"
    MEDIA_BUFFER = "buffer_change"
    MEDIA_TIME = "time"
    MEDIA_COMPLETE = "complete"
    MEDIA_SEEK = "seek"
    MEDIA_META = "meta"
    MEDIA_ERROR = "media_error"

    # Playlist events
    PLAYLIST_LOADED = "playlist"
    PLAYLIST_ITEM = "playlist_item"

    # View events
    FULLSCREEN = "fullscreen"

    # System events
    ERROR = "error"


@dataclass
class PlayerEvent:
    """
    Event payload shared by providers and the playback model.

    Only the fields relevant to a given event type are filled in. The
    payload is mutable: the model rewrites ``newstate`` in place when it
    coerces provider-internal states.
    """
    newstate: Optional[PlayerState] = None
    oldstate: Optional[PlayerState] = None
    mute: Optional[bool] = None
    volume: Optional[float] = None
    buffer_percent: Optional[float] = None
    position: Optional[float] = None
    duration: Optional[float] = None
    index: Optional[int] = None
    playlist: Optional[list] = None
    fullscreen: Optional[bool] = None
    message: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)


Callback = Callable[[Any], None]
GlobalListener = Callable[[Hashable, Any], None]


class EventBus:
    """
    Event Bus

    Provides a synchronous publish-subscribe event system.

    Usage example:
        event_bus = EventBus()

        # Subscribe to one event type
        def on_item(event):
            logger.info("Item: %s", event.index)

        sub_id = event_bus.subscribe(EventType.PLAYLIST_ITEM, on_item)

        # Listen to everything
        event_bus.add_global_listener(lambda event_type, event: ...)

        # Publish event
        event_bus.publish(EventType.PLAYLIST_ITEM, PlayerEvent(index=0))

        # Unsubscribe
        event_bus.unsubscribe(sub_id)
    """

    def __init__(self):
        self._subscribers: Dict[Hashable, Dict[str, Callback]] = {}
        self._global_listeners: List[GlobalListener] = []
        self._sub_lock = threading.Lock()

    def subscribe(
        self,
        event_type: Hashable,
        callback: Callback
    ) -> str:
        """
        Subscribe to event

        Args:
            event_type: Event type (an ``EventType`` or any custom hashable key)
            callback: Callback function, receiving event data as an argument

        Returns:
            str: Subscription ID, used for unsubscription
        """
        subscription_id = str(uuid.uuid4())

        with self._sub_lock:
            if event_type not in self._subscribers:
                self._subscribers[event_type] = {}
            self._subscribers[event_type][subscription_id] = callback

        return subscription_id

    def unsubscribe(self, subscription_id: str) -> bool:
        """
        Unsubscribe

        Args:
            subscription_id: The ID returned when subscribing

        Returns:
            bool: Whether the unsubscription was successful
        """
        with self._sub_lock:
            for event_type in self._subscribers:
                callbacks = self._subscribers[event_type]
                if subscription_id in callbacks:
                    del callbacks[subscription_id]
                    if not callbacks:
                        del self._subscribers[event_type]
                    return True
        return False

    def add_global_listener(self, listener: GlobalListener) -> None:
        """Register a listener that receives ``(event_type, data)`` for every event."""
        with self._sub_lock:
            self._global_listeners.append(listener)

    def remove_global_listener(self, listener: GlobalListener) -> bool:
        """
        Remove a global listener

        Returns:
            bool: False if the listener was not registered
        """
        with self._sub_lock:
            try:
                self._global_listeners.remove(listener)
            except ValueError:
                return False
        return True

    def publish(self, event_type: Hashable, data: Any = None) -> None:
        """
        Publish event synchronously

        Typed subscribers run first, then global listeners.

        Args:
            event_type: Event type
            data: Event data
        """
        with self._sub_lock:
            callbacks = list(self._subscribers.get(event_type, {}).values())
            listeners = list(self._global_listeners)

        for callback in callbacks:
            self._safe_call(callback, data)

        for listener in listeners:
            self._safe_call(listener, event_type, data)

    def _safe_call(self, callback: Callable, *args: Any) -> None:
        """Safely call a callback function"""
        try:
            callback(*args)
        except Exception as e:
            # Avoid loop: Do not use publish to report error events
            logger.error("Event callback execution error: %s", e)

    def clear(self) -> None:
        """Clear all subscriptions and global listeners"""
        with self._sub_lock:
            self._subscribers.clear()
            self._global_listeners.clear()
