"""
Playback Model Module

Central state holder of the player: playback state, playlist and current
item, volume/mute, and the active playback provider.
"""

from dataclasses import replace
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional
import logging
import math

from core.event_bus import EventBus, EventType, GlobalListener, PlayerEvent
from core.ports import IProvider, IProviderRegistry, ISettingsStore
from core.provider_registry import ProviderNotFoundError
from core.states import PROVIDER_INTERNAL_STATES, PlayerState
from models.model_state import ModelState
from models.player_config import PlayerConfig
from models.playlist import PlaylistItem, coerce_items, filter_playlist
from services.qoe import QoeTracker, Timer

logger = logging.getLogger(__name__)

# Volume applied when muting at zero, so unmuting is audible
MUTE_RESTORE_VOLUME = 20

PLAYLIST_EMPTY_MESSAGE = "Error loading playlist: No playable sources found"

_ATTRIBUTES = ModelState.attribute_names()
_BOOL_ATTRIBUTES = frozenset({"mute", "fullscreen", "dragging"})

PlaylistFilter = Callable[[List[PlaylistItem]], List[PlaylistItem]]


def _round_volume(value: Any) -> int:
    """Round half up and clamp to 0 - 100"""
    return max(0, min(100, int(math.floor(float(value) + 0.5))))


class PlaybackModel:
    """
    Playback Model

    Owns the player state and the active provider, translates provider
    events into player events, and exposes the same subscribe/publish
    contract as ``EventBus``.

    Example:
        model = PlaybackModel(config, registry, YamlSettingsStore(path))
        model.subscribe(EventType.PLAYLIST_ITEM, on_item)

        model.set_playlist(items)   # selects item 0
        model.set_item(model.get("item") + 1)
        model.set_volume(60)
    """

    def __init__(
        self,
        config: PlayerConfig,
        registry: IProviderRegistry,
        settings_store: ISettingsStore,
        playlist_filter: Optional[PlaylistFilter] = None,
    ):
        self._events = EventBus()
        self._registry = registry
        self._store = settings_store

        self.config = config

        if playlist_filter is None:
            def playlist_filter(items: List[PlaylistItem]) -> List[PlaylistItem]:
                return filter_playlist(items, registry.choose)
        self._playlist_filter = playlist_filter

        self._state = ModelState(
            volume=_round_volume(self.config.volume),
            mute=bool(self.config.mute),
            fullscreen=bool(self.config.fullscreen),
        )

        self._provider: Optional[IProvider] = None
        self._destroyed = False
        self._qoe = QoeTracker(self)

    # ===== Attribute access =====

    def get(self, attribute: str) -> Any:
        """
        Read a model attribute

        Raises:
            AttributeError: Unknown attribute name
        """
        if attribute not in _ATTRIBUTES:
            raise AttributeError(f"Unknown model attribute: {attribute}")
        return getattr(self._state, attribute)

    def set(self, attribute: str, value: Any) -> None:
        """
        Write a model attribute

        Values are normalized on the way in: volume is rounded and clamped,
        flags become booleans, and provider-internal states are stored as
        BUFFERING.

        Raises:
            AttributeError: Unknown attribute name
        """
        if attribute not in _ATTRIBUTES:
            raise AttributeError(f"Unknown model attribute: {attribute}")

        if attribute == "volume":
            value = _round_volume(value)
        elif attribute in _BOOL_ATTRIBUTES:
            value = bool(value)
        elif attribute == "state":
            value = PlayerState(value)
            if value in PROVIDER_INTERNAL_STATES:
                value = PlayerState.BUFFERING
        elif attribute == "playlist":
            value = list(value)

        setattr(self._state, attribute, value)

    @property
    def qoe_item(self) -> Optional[Timer]:
        """Timings of the current playlist item"""
        return self._qoe.item_timer

    def component_config(self, name: str) -> Optional[Dict[str, Any]]:
        return self.config.components.get(name)

    # ===== Event dispatch =====

    def subscribe(self, event_type: Hashable, callback: Callable[[Any], None]) -> str:
        return self._events.subscribe(event_type, callback)

    def unsubscribe(self, subscription_id: str) -> bool:
        return self._events.unsubscribe(subscription_id)

    def add_global_listener(self, listener: GlobalListener) -> None:
        self._events.add_global_listener(listener)

    def remove_global_listener(self, listener: GlobalListener) -> bool:
        return self._events.remove_global_listener(listener)

    def publish(self, event_type: Hashable, data: Any = None) -> None:
        self._events.publish(event_type, data)

    def _on_provider_event(self, event_type: Hashable, event: Optional[PlayerEvent]) -> None:
        """Fold a provider event into model state, then republish it"""
        if event is None:
            event = PlayerEvent()

        try:
            if event_type == EventType.PLAYER_STATE:
                self._apply_provider_state(event)
            else:
                self._apply_provider_fields(event_type, event)
        except (TypeError, ValueError) as e:
            logger.warning("Malformed %s event from provider: %s", event_type, e)

        self.publish(event_type, event)

    def _apply_provider_fields(self, event_type: Hashable, event: PlayerEvent) -> None:
        # Partial payloads only update the fields they carry
        if event_type == EventType.MEDIA_MUTE:
            fields = (("mute", event.mute),)
        elif event_type == EventType.MEDIA_VOLUME:
            fields = (("volume", event.volume),)
        elif event_type == EventType.MEDIA_BUFFER:
            fields = (("buffer", event.buffer_percent),)
        elif event_type == EventType.MEDIA_TIME:
            fields = (("position", event.position), ("duration", event.duration))
        else:
            return

        for attribute, value in fields:
            if value is not None:
                self.set(attribute, value)

    def _apply_provider_state(self, event: PlayerEvent) -> None:
        try:
            newstate = PlayerState(event.newstate)
        except ValueError:
            logger.warning("Ignoring unknown provider state: %r", event.newstate)
            return
        event.newstate = newstate

        # Observers only ever see BUFFERING; the cause goes out first
        if newstate == PlayerState.LOADING:
            self.publish(EventType.PROVIDER_LOADING, replace(event))
            event.newstate = PlayerState.BUFFERING
        elif newstate == PlayerState.STALLED:
            self.publish(EventType.PROVIDER_STALLED, replace(event))
            event.newstate = PlayerState.BUFFERING

        logger.debug("Player state: %s -> %s", self._state.state.value, event.newstate.value)
        self.set("state", event.newstate)

    # ===== Provider lifecycle =====

    def get_provider(self) -> Optional[IProvider]:
        """Get the active provider"""
        return self._provider

    def set_provider(self, provider: IProvider) -> None:
        """
        Make ``provider`` the active provider

        The rendering container moves from the old provider to the new one
        unchanged, and the model's volume and mute are applied to it.

        Raises:
            RuntimeError: The model has been destroyed
        """
        if self._destroyed:
            raise RuntimeError("Playback model has been destroyed")

        old = self._provider
        if old is not None:
            old.remove_global_listener(self._on_provider_event)
            container = old.get_container()
            if container is not None:
                old.remove()
                provider.set_container(container)
            logger.debug("Swapping provider %s -> %s", old.name, provider.name)
        else:
            logger.debug("Using provider %s", provider.name)

        self._provider = provider
        provider.set_volume(self._state.volume)
        provider.set_mute(self._state.mute)
        provider.add_global_listener(self._on_provider_event)

    def destroy(self) -> None:
        """Tear down the active provider and drop all subscribers; safe to call twice"""
        if self._destroyed:
            return
        self._destroyed = True

        provider = self._provider
        self._provider = None
        if provider is not None:
            provider.remove_global_listener(self._on_provider_event)
            provider.destroy()

        self._events.clear()
        logger.debug("Playback model destroyed")

    # ===== Playlist navigation =====

    def set_playlist(self, items: Iterable[Any]) -> None:
        """
        Replace the playlist and select its first item

        Entries may be PlaylistItem objects or dicts. An empty result after
        filtering publishes ERROR and leaves no item selected.
        """
        if self._destroyed:
            logger.warning("set_playlist ignored: playback model destroyed")
            return

        playlist = self._playlist_filter(coerce_items(items))
        self.set("playlist", playlist)

        if not playlist:
            logger.warning("Playlist has no playable sources")
            self.set("item", -1)
            self.publish(EventType.ERROR, PlayerEvent(message=PLAYLIST_EMPTY_MESSAGE))
            return

        logger.info("Playlist loaded with %d items", len(playlist))
        self.publish(EventType.PLAYLIST_LOADED, PlayerEvent(playlist=list(playlist)))
        self.set("item", -1)
        self.set_item(0)

    def set_item(self, index: int) -> None:
        """
        Make the item at ``index`` current

        ``index == len(playlist)`` or ``index < -1`` wraps to the first item
        and re-activates it even when it is already current. ``-1`` and
        indexes past the end select the last item.

        Raises:
            ProviderNotFoundError: No provider can play the item's primary source
        """
        if self._destroyed:
            logger.warning("set_item(%s) ignored: playback model destroyed", index)
            return

        playlist = self._state.playlist
        length = len(playlist)
        repeat = False

        if length == 0:
            new_item = -1
        elif index == length or index < -1:
            new_item = 0
            repeat = True
        elif index == -1 or index > length:
            new_item = length - 1
        else:
            new_item = index

        if new_item == self._state.item and not repeat:
            return

        self.set("item", new_item)
        self.publish(EventType.PLAYLIST_ITEM, PlayerEvent(index=new_item))

        item = playlist[new_item] if new_item >= 0 else None
        source = item.primary_source if item is not None else None
        if source is None:
            # Index reset on an empty playlist
            return

        provider_cls = self._registry.choose(source)
        if provider_cls is None:
            logger.error("No suitable provider found for source: %s", source.file)
            raise ProviderNotFoundError(f"No suitable provider found for {source.file!r}")

        if self._provider is None or self._provider.name != provider_cls.name:
            self.set_provider(provider_cls(self.config.id))

        init = getattr(self._provider, "init", None)
        if callable(init):
            init(item)

    def next_item(self) -> None:
        """Advance one item, wrapping to the first after the last"""
        self.set_item(self._state.item + 1)

    def previous_item(self) -> None:
        """Go back one item; from the first item this lands on the last"""
        self.set_item(self._state.item - 1)

    def current_item(self) -> Optional[PlaylistItem]:
        index = self._state.item
        if 0 <= index < len(self._state.playlist):
            return self._state.playlist[index]
        return None

    # ===== Volume / mute =====

    def set_volume(self, volume: float) -> None:
        """
        Set volume (0 - 100)

        Raising the volume while muted unmutes first. The value is only
        persisted while unmuted.
        """
        if self._state.mute and volume > 0:
            self.set_mute(False)

        self.set("volume", volume)
        if not self._state.mute:
            self._store.save("volume", self._state.volume)

        if self._provider is not None:
            self._provider.set_volume(self._state.volume)

    def set_mute(self, state: Optional[bool] = None) -> None:
        """
        Set mute; ``None`` toggles

        Muting at volume 0 sets the volume to MUTE_RESTORE_VOLUME so there is
        something to hear on unmute.
        """
        if state is None:
            state = not self._state.mute
        state = bool(state)

        self._store.save("mute", state)
        self.set("mute", state)

        if state and self._state.volume == 0:
            self.set("volume", MUTE_RESTORE_VOLUME)
            if self._provider is not None:
                self._provider.set_volume(self._state.volume)

        if self._provider is not None:
            self._provider.set_mute(state)

    # ===== Seek drag / fullscreen =====

    def seek_drag(self, active: bool) -> None:
        """Pause the provider while a seek gesture is in progress"""
        self.set("dragging", active)
        if self._provider is None:
            return
        if active:
            self._provider.pause()
        else:
            self._provider.play()

    def set_fullscreen(self, state: bool) -> None:
        """Set fullscreen; FULLSCREEN is only published when the value changes"""
        state = bool(state)
        if state == self._state.fullscreen:
            return
        self.set("fullscreen", state)
        self.publish(EventType.FULLSCREEN, PlayerEvent(fullscreen=state))
