"""
Sparkle - Game Engine

Routes each command to exactly one handler and publishes the resulting
events. The engine holds no game state: callers pass the current state in
and keep whatever comes back.
"""

from __future__ import annotations

import logging
from typing import assert_never

from sparkle.engine.base import GameConfig
from sparkle.engine.dice import DiceFactory
from sparkle.engine.state import GameState, create_initial_state
from sparkle.messaging.commands import (
    AddExtraDie,
    Bank,
    Command,
    DiscardUnscored,
    EndTurn,
    ExecuteAutoReroll,
    ExecuteGuhkleReroll,
    ReRoll,
    ResetGame,
    ResetScoringRuleCounts,
    Roll,
    SelectAll,
    SelectUpgrade,
    ToggleDie,
    ToggleScoringRule,
)
from sparkle.messaging.event_bus import EventBus, Subscriber, Unsubscribe
from sparkle.messaging.handlers import (
    CommandResult,
    HandlerContext,
    handle_add_extra_die,
    handle_bank,
    handle_discard_unscored,
    handle_end_turn,
    handle_execute_auto_reroll,
    handle_execute_guhkle_reroll,
    handle_reroll,
    handle_reset,
    handle_reset_scoring_rule_counts,
    handle_roll,
    handle_select_all,
    handle_select_upgrade,
    handle_toggle_die,
    handle_toggle_scoring_rule,
)

logger = logging.getLogger(__name__)


class GameEngine:
    """Command dispatcher plus the event bus its subscribers listen on.

    Construct one per game host and pass it to whatever needs to submit
    commands or observe events.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        dice: DiceFactory | None = None,
        bus: EventBus | None = None
    ) -> None:
        self.config = config or GameConfig()
        self.dice = dice or DiceFactory()
        self.bus = bus or EventBus()
        self._context = HandlerContext(config=self.config, dice=self.dice)

    def new_game(self, high_score: int = 0) -> GameState:
        """Initial state for this engine's configuration."""
        return create_initial_state(self.config, self.dice, high_score=high_score)

    def subscribe(self, callback: Subscriber) -> Unsubscribe:
        return self.bus.subscribe(callback)

    def dispatch(self, state: GameState, command: Command) -> CommandResult:
        """Run the handler for `command` without publishing anything."""
        ctx = self._context
        match command:
            case ToggleDie():
                return handle_toggle_die(state, command, ctx)
            case Roll():
                return handle_roll(state, command, ctx)
            case ReRoll():
                return handle_reroll(state, command, ctx)
            case Bank():
                return handle_bank(state, command, ctx)
            case SelectAll():
                return handle_select_all(state, command, ctx)
            case EndTurn():
                return handle_end_turn(state, command, ctx)
            case ResetGame():
                return handle_reset(state, command, ctx)
            case SelectUpgrade():
                return handle_select_upgrade(state, command, ctx)
            case AddExtraDie():
                return handle_add_extra_die(state, command, ctx)
            case DiscardUnscored():
                return handle_discard_unscored(state, command, ctx)
            case ExecuteAutoReroll():
                return handle_execute_auto_reroll(state, command, ctx)
            case ExecuteGuhkleReroll():
                return handle_execute_guhkle_reroll(state, command, ctx)
            case ToggleScoringRule():
                return handle_toggle_scoring_rule(state, command, ctx)
            case ResetScoringRuleCounts():
                return handle_reset_scoring_rule_counts(state, command, ctx)
            case _:
                assert_never(command)

    def apply(self, state: GameState, command: Command) -> CommandResult:
        """Dispatch and log, leaving publication to the caller."""
        result = self.dispatch(state, command)

        if result.rejected:
            logger.debug("%s rejected: %s", type(command).__name__, result.state.message)
        else:
            logger.debug(
                "%s -> turn %d, banked %d, total %d",
                type(command).__name__,
                result.state.turn_number,
                result.state.banked_score,
                result.state.total_score,
            )

        return result

    def publish(self, result: CommandResult) -> None:
        self.bus.publish_all(result.events)

    def process_command(self, state: GameState, command: Command) -> CommandResult:
        """
        Apply a command and publish its events.

        Args:
            state: Current game state
            command: Command to apply

        Returns:
            The new state and the events that were published
        """
        result = self.apply(state, command)
        self.publish(result)
        return result
