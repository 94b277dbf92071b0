"""
Sparkle - Handler Plumbing

Shared types and helpers for command handlers. A handler is a plain function
`(state, command, ctx) -> CommandResult` that runs to completion without
side effects beyond the dice factory's randomness.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from sparkle.engine.base import Die, GameConfig, Upgrade
from sparkle.engine.dice import DiceFactory
from sparkle.engine.state import GameState, is_pool_busted
from sparkle.engine.upgrades import has_auto_reroll
from sparkle.messaging.commands import EndTurn, ExecuteAutoReroll
from sparkle.messaging.events import DelayedAction, DiceRolled, ErrorEvent, EventPayload

# Rejection reasons. Surfaced verbatim in ErrorEvent.message.
NOTHING_SELECTED = "nothing selected"
SELECTION_DOESNT_SCORE = "selection doesn't score"
MUST_BANK_FIRST = "must bank before ending turn"
NOT_YET_BANKED = "selected dice not yet banked"
THRESHOLD_NOT_MET = "threshold not met"
NO_REROLL_RESOURCE = "no reroll resource"
BOARD_FULL = "board full"
DISCARD_ONLY_AFTER_BUST = "can only discard after a bust"
ROLL_FIRST = "roll the dice first"
NOTHING_TO_REROLL = "nothing to re-roll"
UPGRADE_NOT_OFFERED = "upgrade not offered"


@dataclass(frozen=True)
class HandlerContext:
    """Collaborators a handler may use: the game config and the dice source."""
    config: GameConfig
    dice: DiceFactory


@dataclass(frozen=True)
class CommandResult:
    """New state plus the events the transition produced, in emission order."""
    state: GameState
    events: tuple[EventPayload, ...] = field(default_factory=tuple)

    @property
    def rejected(self) -> bool:
        return any(isinstance(event, ErrorEvent) for event in self.events)


def unchanged(state: GameState) -> CommandResult:
    """No-op result for stale or irrelevant commands."""
    return CommandResult(state)


def reject(state: GameState, reason: str, detail: str | None = None) -> CommandResult:
    """
    Refuse a command.

    Scores and dice stay untouched; only `message` changes. The ErrorEvent
    carries the bare reason so callers can match on it.
    """
    message = f"{reason}: {detail}" if detail else reason
    return CommandResult(replace(state, message=message), (ErrorEvent(reason),))


def bust_follow_up(state: GameState, config: GameConfig) -> DelayedAction:
    """
    Delayed command that resolves a sparkle.

    An active die with auto re-roll uses left gets another chance first;
    otherwise the turn ends as a bust.
    """
    saver = next((die for die in state.active_dice if has_auto_reroll(die)), None)
    if saver is not None:
        return DelayedAction(ExecuteAutoReroll(saver.id), config.auto_reroll_delay_ms)
    return DelayedAction(EndTurn(busted=True), config.bust_delay_ms)


def resolve_roll(
    state: GameState,
    dice: tuple[Die, ...],
    ctx: HandlerContext,
    events: tuple[EventPayload, ...] = ()
) -> CommandResult:
    """
    Install freshly rolled dice and evaluate the bust.

    Counts as a roll of the turn and ends any pending guhkle attempt. On a
    sparkle the sticky flag is set and the bust follow-up is appended after
    DICE_ROLLED.
    """
    state = replace(state, dice=dice, rolls_in_turn=state.rolls_in_turn + 1, is_guhkle_attempt=False)
    busted = is_pool_busted(state)
    state = replace(
        state,
        last_roll_sparkled=busted,
        message="SPARKLE! Nothing scores." if busted else "Select scoring dice.",
    )
    rolled = tuple(d for d in dice if not d.banked)
    out: list[EventPayload] = [*events, DiceRolled(rolled, busted)]
    if busted:
        out.append(bust_follow_up(state, ctx.config))
    return CommandResult(state, tuple(out))


def merge_dice(current: tuple[Die, ...], updated: tuple[Die, ...]) -> tuple[Die, ...]:
    """Replace dice in `current` by slot with those in `updated`, keeping order."""
    by_position = {die.position: die for die in updated}
    return tuple(by_position.get(die.position, die) for die in current)


def park_upgrades(
    vacant: dict[int, tuple[Upgrade, ...]],
    dice: tuple[Die, ...]
) -> dict[int, tuple[Upgrade, ...]]:
    """Remember the upgrades of dice leaving the board so their slots keep them."""
    parked = dict(vacant)
    for die in dice:
        if die.upgrades:
            parked[die.position] = die.upgrades
    return parked


def unpark_upgrades(
    vacant: dict[int, tuple[Upgrade, ...]],
    dice: tuple[Die, ...]
) -> dict[int, tuple[Upgrade, ...]]:
    """Drop parked upgrades for slots that hold a die again."""
    occupied = {die.position for die in dice}
    return {position: ups for position, ups in vacant.items() if position not in occupied}
