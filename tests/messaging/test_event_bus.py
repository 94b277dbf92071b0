"""Tests for sparkle/messaging/event_bus.py"""

from unittest.mock import MagicMock

from sparkle.messaging.event_bus import EventBus
from sparkle.messaging.events import DiceDiscarded, GameReset, RuleCountsReset


class TestEventBus:

    def test_delivers_to_every_subscriber(self):
        bus = EventBus()
        a, b = MagicMock(), MagicMock()
        bus.subscribe(a)
        bus.subscribe(b)

        bus.publish(GameReset())

        a.assert_called_once_with(GameReset())
        b.assert_called_once_with(GameReset())

    def test_publish_all_keeps_order(self):
        bus = EventBus()
        received = []
        bus.subscribe(received.append)

        bus.publish_all([DiceDiscarded(2), RuleCountsReset(), GameReset()])

        assert received == [DiceDiscarded(2), RuleCountsReset(), GameReset()]

    def test_unsubscribe_twice_is_harmless(self):
        bus = EventBus()
        unsubscribe = bus.subscribe(MagicMock())
        unsubscribe()
        unsubscribe()
        assert bus.subscriber_count == 0

    def test_raising_subscriber_is_skipped(self):
        bus = EventBus()
        after = MagicMock()
        bus.subscribe(MagicMock(side_effect=ValueError("bad")))
        bus.subscribe(after)

        bus.publish(GameReset())

        after.assert_called_once()

    def test_subscribe_during_publish_applies_next_time(self):
        bus = EventBus()
        late = MagicMock()

        def add_late(event):
            bus.subscribe(late)

        bus.subscribe(add_late)
        bus.publish(GameReset())
        late.assert_not_called()

        bus.publish(GameReset())
        late.assert_called_once()

    def test_clear(self):
        bus = EventBus()
        bus.subscribe(MagicMock())
        bus.subscribe(MagicMock())
        assert bus.subscriber_count == 2

        bus.clear()
        assert bus.subscriber_count == 0
