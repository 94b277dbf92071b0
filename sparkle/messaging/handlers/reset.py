"""
Sparkle - Reset Handler
"""

from __future__ import annotations

from sparkle.engine.state import GameState, create_initial_state
from sparkle.messaging.commands import ResetGame
from sparkle.messaging.events import GameReset
from sparkle.messaging.handlers.base import CommandResult, HandlerContext


def handle_reset(state: GameState, command: ResetGame, ctx: HandlerContext) -> CommandResult:
    """Start over from scratch. Only the high score survives."""
    fresh = create_initial_state(ctx.config, ctx.dice, high_score=state.high_score)
    return CommandResult(fresh, (GameReset(),))
