"""
Sparkle - Delayed Action Scheduler

Waits out DELAYED_ACTION events and submits the embedded command to the
session afterwards. The command runs against the session's state at that
moment, not the state that produced the event; handlers treat stale
follow-ups as no-ops.
"""

from __future__ import annotations

import logging
import threading

from sparkle.messaging.commands import Command
from sparkle.messaging.events import DelayedAction, EventPayload
from sparkle.realtime.session import GameSession

logger = logging.getLogger(__name__)


class DelayedActionScheduler:
    """Timer host for the engine's delayed follow-up commands.

    One daemon ``threading.Timer`` per pending action. With
    ``synchronous=True`` the delay is skipped and the command is submitted
    straight away on the publishing thread, which keeps tests deterministic.
    """

    def __init__(self, session: GameSession, *, synchronous: bool = False) -> None:
        self._session = session
        self._synchronous = synchronous
        self._timers: set[threading.Timer] = set()
        self._lock = threading.Lock()
        self._closed = False
        self._unsubscribe = session.subscribe(self._on_event)

    @property
    def pending(self) -> int:
        """Number of timers that have not fired yet."""
        with self._lock:
            return len(self._timers)

    def _on_event(self, event: EventPayload) -> None:
        if isinstance(event, DelayedAction):
            self.schedule(event.command, event.delay_ms)

    def schedule(self, command: Command, delay_ms: int) -> None:
        """Submit `command` to the session after `delay_ms` milliseconds."""
        if self._synchronous:
            self._fire(command, None)
            return

        with self._lock:
            if self._closed:
                logger.debug("Scheduler closed, dropping %s", type(command).__name__)
                return
            timer = threading.Timer(delay_ms / 1000, lambda: self._fire(command, timer))
            timer.daemon = True
            timer.name = f"delayed-{type(command).__name__}"
            self._timers.add(timer)
        logger.debug("Scheduled %s in %d ms", type(command).__name__, delay_ms)
        timer.start()

    def _fire(self, command: Command, timer: threading.Timer | None) -> None:
        if timer is not None:
            with self._lock:
                self._timers.discard(timer)
                if self._closed:
                    return
        try:
            self._session.submit(command)
        except Exception:
            logger.exception("Delayed %s failed", type(command).__name__)

    def shutdown(self) -> None:
        """Cancel every pending timer and stop listening for new actions."""
        self._unsubscribe()
        with self._lock:
            self._closed = True
            timers = list(self._timers)
            self._timers.clear()
        for timer in timers:
            timer.cancel()
        logger.info("Delayed action scheduler stopped (%d cancelled)", len(timers))
