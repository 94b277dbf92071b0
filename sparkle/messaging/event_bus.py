"""
Sparkle - Event Bus

Synchronous publish/subscribe for engine events. Each engine owns its own
bus; there is no module-level instance.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable

from sparkle.messaging.events import EventPayload

logger = logging.getLogger(__name__)

Subscriber = Callable[[EventPayload], None]
Unsubscribe = Callable[[], None]


class EventBus:
    """Delivers events to subscribers, in emission order, on the caller's thread.

    A subscriber that raises is logged and skipped; the remaining
    subscribers still receive the event. Subscribing or unsubscribing from
    inside a callback takes effect from the next event.
    """

    def __init__(self) -> None:
        self._subscribers: list[Subscriber] = []
        self._lock = threading.Lock()

    def subscribe(self, callback: Subscriber) -> Unsubscribe:
        """Register a callback and return a function that removes it again."""
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, event: EventPayload) -> None:
        with self._lock:
            subscribers = list(self._subscribers)
        for callback in subscribers:
            try:
                callback(event)
            except Exception:
                logger.exception("Subscriber %r failed on %s", callback, event.event.name)

    def publish_all(self, events: tuple[EventPayload, ...] | list[EventPayload]) -> None:
        for event in events:
            self.publish(event)

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def clear(self) -> None:
        """Drop every subscriber."""
        with self._lock:
            self._subscribers.clear()
