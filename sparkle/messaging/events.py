"""
Sparkle - Event Definitions

Event types and payloads emitted by command handlers. Every payload class
carries its `GameEvent` tag so subscribers can switch on `payload.event`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import ClassVar, Union, get_args

from sparkle.engine.base import Die, RuleId, UpgradeType
from sparkle.messaging.commands import Command


class GameEvent(Enum):
    """Events that can occur during a game."""

    DIE_TOGGLED = auto()
    DICE_ROLLED = auto()
    DICE_REROLLED = auto()
    DICE_BANKED = auto()
    TURN_ENDED = auto()
    GAME_RESET = auto()
    ERROR = auto()
    DELAYED_ACTION = auto()
    UPGRADE_OFFERED = auto()
    UPGRADE_APPLIED = auto()
    EXTRA_DIE_ADDED = auto()
    DICE_DISCARDED = auto()
    SCORING_RULE_TOGGLED = auto()
    RULE_COUNTS_RESET = auto()


@dataclass(frozen=True)
class DieToggled:
    event: ClassVar[GameEvent] = GameEvent.DIE_TOGGLED
    die_id: int
    staged: bool


@dataclass(frozen=True)
class DiceRolled:
    """Dice rolled by ROLL, auto re-roll, hot dice or a discard."""
    event: ClassVar[GameEvent] = GameEvent.DICE_ROLLED
    dice: tuple[Die, ...]
    busted: bool


@dataclass(frozen=True)
class DiceRerolled:
    event: ClassVar[GameEvent] = GameEvent.DICE_REROLLED
    dice: tuple[Die, ...]
    busted: bool


@dataclass(frozen=True)
class DiceBanked:
    event: ClassVar[GameEvent] = GameEvent.DICE_BANKED
    score: int
    hot_dice: bool


@dataclass(frozen=True)
class TurnEnded:
    event: ClassVar[GameEvent] = GameEvent.TURN_ENDED
    total_score: int
    game_over: bool
    busted: bool


@dataclass(frozen=True)
class GameReset:
    event: ClassVar[GameEvent] = GameEvent.GAME_RESET


@dataclass(frozen=True)
class ErrorEvent:
    """A command was refused; state is unchanged apart from `message`."""
    event: ClassVar[GameEvent] = GameEvent.ERROR
    message: str


@dataclass(frozen=True)
class DelayedAction:
    """
    Ask the host to submit `command` after `delay_ms`.

    The engine never waits itself. The host re-submits against whatever the
    current state is when the delay runs out.
    """
    event: ClassVar[GameEvent] = GameEvent.DELAYED_ACTION
    command: Command
    delay_ms: int


@dataclass(frozen=True)
class UpgradeOffered:
    event: ClassVar[GameEvent] = GameEvent.UPGRADE_OFFERED
    position: int
    options: tuple[UpgradeType, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class UpgradeApplied:
    """An offered upgrade was taken; `position` is None for resource grants."""
    event: ClassVar[GameEvent] = GameEvent.UPGRADE_APPLIED
    upgrade_type: UpgradeType
    position: int | None


@dataclass(frozen=True)
class ExtraDieAdded:
    event: ClassVar[GameEvent] = GameEvent.EXTRA_DIE_ADDED
    die: Die
    busted: bool


@dataclass(frozen=True)
class DiceDiscarded:
    event: ClassVar[GameEvent] = GameEvent.DICE_DISCARDED
    count: int


@dataclass(frozen=True)
class ScoringRuleToggled:
    event: ClassVar[GameEvent] = GameEvent.SCORING_RULE_TOGGLED
    rule_id: RuleId
    enabled: bool


@dataclass(frozen=True)
class RuleCountsReset:
    event: ClassVar[GameEvent] = GameEvent.RULE_COUNTS_RESET


EventPayload = Union[
    DieToggled,
    DiceRolled,
    DiceRerolled,
    DiceBanked,
    TurnEnded,
    GameReset,
    ErrorEvent,
    DelayedAction,
    UpgradeOffered,
    UpgradeApplied,
    ExtraDieAdded,
    DiceDiscarded,
    ScoringRuleToggled,
    RuleCountsReset,
]

EVENT_TYPES: tuple[type, ...] = get_args(EventPayload)
