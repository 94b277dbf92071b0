"""
Sparkle - End Turn Handler

Closes the turn: banked points roll into the total (nothing on a sparkle),
the turn advances, the threshold is recomputed and a fresh pool is rolled.
A sparkle that leaves the total short of the threshold ends the game.
"""

from __future__ import annotations

from dataclasses import replace

from sparkle.engine.state import (
    GameState,
    all_staged_dice_score,
    calculate_threshold,
    staged_score,
)
from sparkle.engine.upgrades import offerable_upgrades
from sparkle.messaging.commands import EndTurn
from sparkle.messaging.events import EventPayload, TurnEnded, UpgradeOffered
from sparkle.messaging.handlers.base import (
    MUST_BANK_FIRST,
    NOT_YET_BANKED,
    SELECTION_DOESNT_SCORE,
    THRESHOLD_NOT_MET,
    CommandResult,
    HandlerContext,
    park_upgrades,
    reject,
    unchanged,
    unpark_upgrades,
)


def handle_end_turn(state: GameState, command: EndTurn, ctx: HandlerContext) -> CommandResult:
    if state.game_over:
        return unchanged(state)
    # A bust follow-up that arrives after the sparkle was already resolved.
    if command.busted and not state.last_roll_sparkled:
        return unchanged(state)

    busted = state.last_roll_sparkled
    if not busted:
        if not all_staged_dice_score(state):
            return reject(state, SELECTION_DOESNT_SCORE)
        pending = staged_score(state)
        if state.banked_score == 0 and pending == 0:
            return reject(state, MUST_BANK_FIRST)
        if pending > 0:
            return reject(state, NOT_YET_BANKED)
        projected = state.total_score + state.banked_score
        if projected < state.threshold:
            return reject(
                state,
                THRESHOLD_NOT_MET,
                f"need {state.threshold}, you have {projected}",
            )

    gained = 0 if busted else state.banked_score
    total = state.total_score + gained
    game_over = busted and total < state.threshold
    turn_number = state.turn_number + 1

    if game_over:
        message = f"SPARKLE! Game over. Final score: {total}"
        dice = state.dice
    else:
        if busted:
            message = f"SPARKLE! Turn points lost. Total: {total}"
        else:
            message = f"Turn over! You scored {gained} points."
        leaving = tuple(d for d in state.dice if d.position > ctx.config.starting_dice)
        vacant = park_upgrades(state.vacant_slot_upgrades, leaving)
        dice = ctx.dice.fresh_pool(
            ctx.config.starting_dice,
            state.dice,
            spark_die=ctx.config.spark_die,
            vacant_upgrades=vacant,
        )
        state = replace(state, vacant_slot_upgrades=unpark_upgrades(vacant, dice))

    state = replace(
        state,
        dice=dice,
        banked_score=0,
        total_score=total,
        threshold=calculate_threshold(turn_number, ctx.config),
        turn_number=turn_number,
        game_over=game_over,
        message=message,
        last_roll_sparkled=False,
        rolls_in_turn=0,
        is_guhkle_attempt=False,
        high_score=max(state.high_score, total),
    )

    events: list[EventPayload] = [TurnEnded(total, game_over, busted)]
    completed = turn_number - 1
    if not game_over and completed % ctx.config.upgrade_offer_interval == 0:
        state, offered = offer_upgrade(state, ctx)
        events.append(offered)
    return CommandResult(state, tuple(events))


def offer_upgrade(state: GameState, ctx: HandlerContext) -> tuple[GameState, UpgradeOffered]:
    """Pick a random slot and a handful of distinct upgrade types to offer for it."""
    position = ctx.dice.rng.choice([die.position for die in state.dice])
    pool = list(offerable_upgrades())
    options = tuple(ctx.dice.rng.sample(pool, min(ctx.config.upgrade_options_count, len(pool))))
    state = replace(
        state,
        upgrade_options=options,
        potential_upgrade_position=position,
        message=f"{state.message} Choose an upgrade for die {position}!",
    )
    return state, UpgradeOffered(position, options)
