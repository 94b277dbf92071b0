"""
Sparkle - Selection Handlers

TOGGLE_DIE and SELECT_ALL. Staging is tentative and never touches scores.
"""

from __future__ import annotations

from dataclasses import replace

from sparkle.engine.state import GameState
from sparkle.messaging.commands import SelectAll, ToggleDie
from sparkle.messaging.events import DieToggled
from sparkle.messaging.handlers.base import CommandResult, HandlerContext, unchanged


def handle_toggle_die(state: GameState, command: ToggleDie, ctx: HandlerContext) -> CommandResult:
    """Flip `staged` on one active die and clear the transient message."""
    die = state.find_die(command.die_id)
    if state.game_over or die is None or die.banked:
        return unchanged(state)

    toggled = replace(die, staged=not die.staged)
    dice = tuple(toggled if d.id == die.id else d for d in state.dice)
    return CommandResult(
        replace(state, dice=dice, message=""),
        (DieToggled(die.id, toggled.staged),),
    )


def handle_select_all(state: GameState, command: SelectAll, ctx: HandlerContext) -> CommandResult:
    """Stage every active die."""
    if state.game_over:
        return unchanged(state)

    events = tuple(DieToggled(d.id, True) for d in state.active_dice if not d.staged)
    dice = tuple(d if d.banked else replace(d, staged=True) for d in state.dice)
    return CommandResult(replace(state, dice=dice, message=""), events)
