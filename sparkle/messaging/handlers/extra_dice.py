"""
Sparkle - Extra Dice Handlers

ADD_EXTRA_DIE spends the extra-dice resource on a new die in the first free
slot. DISCARD_UNSCORED is the sparkle escape hatch: the dead dice leave the
board and the banked dice are rolled again as the active pool.
"""

from __future__ import annotations

from dataclasses import replace

from sparkle.engine.state import GameState, is_pool_busted
from sparkle.messaging.commands import AddExtraDie, DiscardUnscored
from sparkle.messaging.events import DiceDiscarded, ExtraDieAdded
from sparkle.messaging.handlers.base import (
    BOARD_FULL,
    DISCARD_ONLY_AFTER_BUST,
    NO_REROLL_RESOURCE,
    CommandResult,
    HandlerContext,
    park_upgrades,
    reject,
    resolve_roll,
    unchanged,
)


def handle_add_extra_die(state: GameState, command: AddExtraDie, ctx: HandlerContext) -> CommandResult:
    """
    Add one die to the board.

    The new die picks up any upgrades parked on its slot. If the last roll
    sparkled, a scoring face on the new die rescues the turn.
    """
    if state.game_over:
        return unchanged(state)
    if state.extra_dice_pool <= 0:
        return reject(state, NO_REROLL_RESOURCE)
    if len(state.dice) >= ctx.config.max_dice:
        return reject(state, BOARD_FULL)

    occupied = {d.position for d in state.dice}
    position = next(p for p in range(1, ctx.config.max_dice + 1) if p not in occupied)
    vacant = dict(state.vacant_slot_upgrades)
    die = ctx.dice.create_die(
        position,
        is_spark_die=ctx.config.spark_die and position == 1,
        upgrades=vacant.pop(position, ()),
    )

    state = replace(
        state,
        dice=tuple(sorted((*state.dice, die), key=lambda d: d.position)),
        extra_dice_pool=state.extra_dice_pool - 1,
        vacant_slot_upgrades=vacant,
    )
    busted = state.last_roll_sparkled and is_pool_busted(state)
    state = replace(
        state,
        last_roll_sparkled=busted,
        message="Still nothing scores." if busted else f"Added a die in slot {position}.",
    )
    return CommandResult(state, (ExtraDieAdded(die, busted),))


def handle_discard_unscored(state: GameState, command: DiscardUnscored, ctx: HandlerContext) -> CommandResult:
    """
    Throw away the non-scoring dice after a sparkle and roll the banked ones.

    Banked points are kept. With nothing banked the new pool is empty,
    which is itself a sparkle.
    """
    if state.game_over:
        return unchanged(state)
    if not state.last_roll_sparkled:
        return reject(state, DISCARD_ONLY_AFTER_BUST)

    discarded = state.active_dice
    state = replace(
        state,
        dice=state.banked_dice,
        vacant_slot_upgrades=park_upgrades(state.vacant_slot_upgrades, discarded),
    )
    return resolve_roll(
        state,
        ctx.dice.reroll(state.dice),
        ctx,
        (DiceDiscarded(len(discarded)),),
    )
