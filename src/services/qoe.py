"""
Quality of Experience Module

Records when things happen for the current playlist item so the time from
item selection to the first rendered frame can be reported.
"""

from typing import Callable, Dict, Optional
import time
import logging

from core.event_bus import EventType, PlayerEvent

logger = logging.getLogger(__name__)


class Timer:
    """Named timestamps in milliseconds"""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._ticks: Dict[str, float] = {}

    def tick(self, name: str) -> None:
        """Record the current time under ``name``; an existing mark is overwritten"""
        self._ticks[name] = self._clock() * 1000.0

    def between(self, start: str, end: str) -> Optional[float]:
        """
        Milliseconds from ``start`` to ``end``

        Returns:
            None when either mark is missing
        """
        if start in self._ticks and end in self._ticks:
            return self._ticks[end] - self._ticks[start]
        return None

    def has(self, name: str) -> bool:
        return name in self._ticks

    def dump(self) -> Dict[str, float]:
        return dict(self._ticks)


class QoeTracker:
    """
    Subscribes to a playback model and keeps one ``Timer`` per playlist item.

    Marks: ``playlist_item`` when the item changes, the state value on each
    state change (``buffering``, ``playing``, ...), ``first_frame`` on the
    first time update with a positive position.
    """

    def __init__(self, model, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self.item_timer: Optional[Timer] = None
        model.subscribe(EventType.PLAYLIST_ITEM, self._on_item)
        model.subscribe(EventType.PLAYER_STATE, self._on_state)
        model.subscribe(EventType.MEDIA_TIME, self._on_time)

    def _on_item(self, event: PlayerEvent) -> None:
        self.item_timer = Timer(self._clock)
        self.item_timer.tick("playlist_item")

    def _on_state(self, event: PlayerEvent) -> None:
        if self.item_timer is not None and event.newstate is not None:
            self.item_timer.tick(event.newstate.value)

    def _on_time(self, event: PlayerEvent) -> None:
        timer = self.item_timer
        if timer is None or timer.has("first_frame"):
            return
        if event.position is not None and event.position > 0:
            timer.tick("first_frame")
            logger.debug(
                "Time to first frame: %.0f ms",
                timer.between("playlist_item", "first_frame"),
            )
