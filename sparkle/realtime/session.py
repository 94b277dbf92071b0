"""
Sparkle - Game Session

Holds the one current GameState for a host and serializes commands against
it. Events are published after the new state is stored, so a subscriber
that submits a follow-up command always sees the latest state. Publishing
happens under the session lock, so the events of one command reach
subscribers as an unbroken run even when commands race in from timer
threads; the lock is re-entrant, so a subscriber may submit synchronously.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable

from sparkle.engine.state import GameState
from sparkle.messaging.commands import Command
from sparkle.messaging.engine import GameEngine
from sparkle.messaging.event_bus import Subscriber, Unsubscribe
from sparkle.messaging.handlers import CommandResult

logger = logging.getLogger(__name__)


class GameSession:
    """Thread-safe owner of the current game state.

    Commands may arrive from the UI thread and from delayed-action timers;
    each one is applied to whatever the state is when it gets the lock.
    """

    def __init__(self, engine: GameEngine, state: GameState | None = None) -> None:
        self.engine = engine
        self._state = state if state is not None else engine.new_game()
        self._lock = threading.RLock()
        self._listeners: list[Callable[[GameState], None]] = []

    @property
    def state(self) -> GameState:
        with self._lock:
            return self._state

    def submit(self, command: Command) -> CommandResult:
        """Apply a command to the current state and publish its events."""
        with self._lock:
            result = self.engine.apply(self._state, command)
            self._state = result.state

            for listener in list(self._listeners):
                try:
                    listener(result.state)
                except Exception:
                    logger.exception("State listener %r failed", listener)
            self.engine.publish(result)
        return result

    def replace_state(self, state: GameState) -> None:
        """Swap in a state loaded from elsewhere, e.g. a saved snapshot."""
        with self._lock:
            self._state = state
        logger.info("Session state replaced (turn %d, total %d)", state.turn_number, state.total_score)

    def subscribe(self, callback: Subscriber) -> Unsubscribe:
        return self.engine.subscribe(callback)

    def on_state_change(self, callback: Callable[[GameState], None]) -> Unsubscribe:
        """Call `callback` with every new state, before its events go out."""
        with self._lock:
            self._listeners.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._listeners:
                    self._listeners.remove(callback)

        return unsubscribe
