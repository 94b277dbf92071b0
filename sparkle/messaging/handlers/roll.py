"""
Sparkle - Roll Handlers

ROLL, RE_ROLL and the delayed EXECUTE_AUTO_REROLL / EXECUTE_GUHKLE_REROLL.
Banked dice keep their values; only the active pool is rolled. Any roll that
leaves the whole active pool without a scoring die is a sparkle.
"""

from __future__ import annotations

from dataclasses import replace

from sparkle.engine.state import GameState, is_pool_busted
from sparkle.engine.upgrades import consume_auto_reroll, has_auto_reroll
from sparkle.messaging.commands import ExecuteAutoReroll, ExecuteGuhkleReroll, ReRoll, Roll
from sparkle.messaging.events import DelayedAction, DiceRerolled, EventPayload
from sparkle.messaging.handlers.base import (
    NO_REROLL_RESOURCE,
    NOTHING_TO_REROLL,
    CommandResult,
    HandlerContext,
    bust_follow_up,
    merge_dice,
    reject,
    resolve_roll,
    unchanged,
)

# A sparkle on exactly this many active dice grants a free extra die.
GUHKLE_POOL_SIZE = 5


def handle_roll(state: GameState, command: Roll, ctx: HandlerContext) -> CommandResult:
    """
    Roll every active die.

    Staged flags are cleared and nothing is banked; banked dice keep their
    values. A sparkle on exactly five dice grants +1 extra die, and on the
    first roll of the turn also schedules a one-off guhkle re-roll in place
    of the usual bust follow-up.
    """
    if state.game_over:
        return unchanged(state)

    active = state.active_dice
    result = resolve_roll(state, merge_dice(state.dice, ctx.dice.reroll(active)), ctx)
    state = result.state
    if not state.last_roll_sparkled or len(active) != GUHKLE_POOL_SIZE:
        return result

    state = replace(state, extra_dice_pool=state.extra_dice_pool + 1)
    if state.rolls_in_turn != 1:
        return CommandResult(replace(state, message=f"{state.message} (+1 Extra Die!)"), result.events)

    state = replace(state, is_guhkle_attempt=True, message="GUHKLE! One free re-roll coming. (+1 Extra Die!)")
    dice_rolled = result.events[0]
    return CommandResult(state, (dice_rolled, DelayedAction(ExecuteGuhkleReroll(), ctx.config.guhkle_delay_ms)))


def handle_reroll(state: GameState, command: ReRoll, ctx: HandlerContext) -> CommandResult:
    """
    Spend the extra-dice resource to re-roll unstaged active dice.

    One unit per die. With fewer units than candidates only the first dice
    in slot order are re-rolled. Staged and banked dice are left alone.
    """
    if state.game_over:
        return unchanged(state)
    if state.extra_dice_pool <= 0:
        return reject(state, NO_REROLL_RESOURCE)

    candidates = [d for d in state.active_dice if not d.staged]
    if not candidates:
        return reject(state, NOTHING_TO_REROLL)

    rolled = ctx.dice.reroll(candidates[:state.extra_dice_pool])
    state = replace(
        state,
        dice=merge_dice(state.dice, rolled),
        extra_dice_pool=state.extra_dice_pool - len(rolled),
        rolls_in_turn=max(state.rolls_in_turn, 1),
    )
    busted = is_pool_busted(state)
    state = replace(
        state,
        last_roll_sparkled=busted,
        message="SPARKLE! Nothing scores." if busted else f"Re-rolled {len(rolled)} dice.",
    )

    events: list[EventPayload] = [DiceRerolled(rolled, busted)]
    if busted:
        events.append(bust_follow_up(state, ctx.config))
    return CommandResult(state, tuple(events))


def handle_execute_auto_reroll(
    state: GameState,
    command: ExecuteAutoReroll,
    ctx: HandlerContext
) -> CommandResult:
    """Delayed sparkle rescue: spend one auto re-roll use and roll the active pool again."""
    die = state.find_die(command.die_id)
    if (
        state.game_over
        or not state.last_roll_sparkled
        or die is None
        or die.banked
        or not has_auto_reroll(die)
    ):
        return unchanged(state)

    saver = consume_auto_reroll(die)
    state = replace(
        state,
        dice=tuple(saver if d.id == die.id else d for d in state.dice),
        last_roll_sparkled=False,
    )
    rolled = ctx.dice.reroll(state.active_dice)
    return resolve_roll(state, merge_dice(state.dice, rolled), ctx)


def handle_execute_guhkle_reroll(
    state: GameState,
    command: ExecuteGuhkleReroll,
    ctx: HandlerContext
) -> CommandResult:
    """
    Delayed guhkle rescue: roll the active pool once more for free.

    Stale once the flag is gone or the sparkle was already resolved. A second
    sparkle gets the normal bust follow-up.
    """
    if state.game_over or not state.is_guhkle_attempt or not state.last_roll_sparkled:
        return unchanged(state)

    rolled = ctx.dice.reroll(state.active_dice)
    result = resolve_roll(replace(state, last_roll_sparkled=False), merge_dice(state.dice, rolled), ctx)
    message = "Guhkle failed. SPARKLE!" if result.state.last_roll_sparkled else "Guhkle saved you!"
    return CommandResult(replace(result.state, message=message), result.events)
