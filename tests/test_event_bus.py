"""
Event Bus Tests
"""

from core.event_bus import EventBus, EventType, PlayerEvent


class TestEventBus:
    """Event Bus Tests"""

    def test_instances_are_independent(self):
        """Each owner gets its own bus."""
        bus1 = EventBus()
        bus2 = EventBus()
        received = []

        bus1.subscribe(EventType.FULLSCREEN, received.append)
        bus2.publish(EventType.FULLSCREEN, PlayerEvent(fullscreen=True))

        assert received == []

    def test_subscribe_and_publish(self):
        """Test subscription and publication."""
        bus = EventBus()
        received_data = []

        bus.subscribe(EventType.PLAYLIST_ITEM, received_data.append)
        bus.publish(EventType.PLAYLIST_ITEM, PlayerEvent(index=2))

        assert len(received_data) == 1
        assert received_data[0].index == 2

    def test_unsubscribe(self):
        """Test unsubscription."""
        bus = EventBus()
        received_data = []

        sub_id = bus.subscribe(EventType.PLAYLIST_ITEM, received_data.append)
        assert bus.unsubscribe(sub_id) is True
        bus.publish(EventType.PLAYLIST_ITEM, PlayerEvent(index=0))

        assert received_data == []
        assert bus.unsubscribe(sub_id) is False

    def test_unsubscribing_last_callback_drops_event_type(self):
        """Test that churned event types do not accumulate."""
        bus = EventBus()

        first = bus.subscribe(EventType.MEDIA_TIME, lambda e: None)
        second = bus.subscribe(EventType.MEDIA_TIME, lambda e: None)

        bus.unsubscribe(first)
        assert EventType.MEDIA_TIME in bus._subscribers

        bus.unsubscribe(second)
        assert EventType.MEDIA_TIME not in bus._subscribers

    def test_global_listener_sees_every_event(self):
        """Global listeners receive the event type along with the data."""
        bus = EventBus()
        seen = []
        bus.add_global_listener(lambda event_type, data: seen.append(event_type))

        bus.publish(EventType.ERROR, PlayerEvent(message="boom"))
        bus.publish("custom_event")

        assert seen == [EventType.ERROR, "custom_event"]

    def test_typed_subscribers_run_before_global_listeners(self):
        bus = EventBus()
        order = []
        bus.add_global_listener(lambda event_type, data: order.append("global"))
        bus.subscribe(EventType.MEDIA_TIME, lambda data: order.append("typed"))

        bus.publish(EventType.MEDIA_TIME, PlayerEvent(position=1))

        assert order == ["typed", "global"]

    def test_failing_callback_does_not_stop_dispatch(self):
        """A raising subscriber is logged and the rest still run."""
        bus = EventBus()
        received = []

        def broken(data):
            raise ValueError("broken subscriber")

        bus.subscribe(EventType.ERROR, broken)
        bus.subscribe(EventType.ERROR, received.append)

        bus.publish(EventType.ERROR, PlayerEvent(message="x"))

        assert len(received) == 1

    def test_remove_global_listener(self):
        bus = EventBus()
        seen = []

        def listener(event_type, data):
            seen.append(event_type)

        bus.add_global_listener(listener)
        assert bus.remove_global_listener(listener) is True
        assert bus.remove_global_listener(listener) is False

        bus.publish(EventType.ERROR)
        assert seen == []

    def test_clear(self):
        """Clear drops subscribers and global listeners."""
        bus = EventBus()
        seen = []
        bus.subscribe(EventType.ERROR, seen.append)
        bus.add_global_listener(lambda event_type, data: seen.append(event_type))

        bus.clear()
        bus.publish(EventType.ERROR)

        assert seen == []


class TestPlayerEvent:

    def test_defaults_are_empty(self):
        event = PlayerEvent()
        assert event.newstate is None
        assert event.extra == {}

