"""
Sparkle - Bank Handler

Commits the staged selection: rule activations are counted, limited-use
upgrades on the committed dice spend a use, and the dice become banked.
Banking every active die is "hot dice" and rolls a brand new pool.
"""

from __future__ import annotations

from dataclasses import replace

from sparkle.engine.scoring import record_activations
from sparkle.engine.state import GameState, all_staged_dice_score, staged_result, staged_score
from sparkle.engine.upgrades import consume_upgrade_uses
from sparkle.messaging.commands import Bank
from sparkle.messaging.events import DiceBanked
from sparkle.messaging.handlers.base import (
    NOTHING_SELECTED,
    ROLL_FIRST,
    SELECTION_DOESNT_SCORE,
    CommandResult,
    HandlerContext,
    reject,
    resolve_roll,
    unchanged,
)


def handle_bank(state: GameState, command: Bank, ctx: HandlerContext) -> CommandResult:
    """Bank a staged selection that scores with every die."""
    if state.game_over:
        return unchanged(state)
    if state.rolls_in_turn == 0:
        return reject(state, ROLL_FIRST)
    if not state.staged_dice:
        return reject(state, NOTHING_SELECTED)
    if staged_score(state) <= 0 or not all_staged_dice_score(state):
        return reject(state, SELECTION_DOESNT_SCORE)

    points = staged_score(state)
    fired = staged_result(state).fired_rule_ids
    committed = {die.id for die in state.staged_dice}

    dice = tuple(
        replace(consume_upgrade_uses(die), staged=False, banked=True) if die.id in committed else die
        for die in state.dice
    )
    state = replace(
        state,
        dice=dice,
        banked_score=state.banked_score + points,
        scoring_rules=record_activations(state.scoring_rules, fired),
        message=f"Banked {points} points.",
    )

    if state.active_dice:
        return CommandResult(state, (DiceBanked(points, hot_dice=False),))

    hot_dice_count = state.hot_dice_count + 1
    multiplier = state.permanent_multiplier
    if hot_dice_count % ctx.config.hot_dice_per_multiplier == 0:
        multiplier += 1
    state = replace(state, hot_dice_count=hot_dice_count, permanent_multiplier=multiplier)

    return resolve_roll(
        state,
        ctx.dice.reroll(state.dice),
        ctx,
        (DiceBanked(points, hot_dice=True),),
    )
