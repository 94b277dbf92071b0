"""
Sparkle - Command Definitions

The closed set of commands the engine accepts. Each command is a frozen
dataclass carrying only its own payload; the dispatcher matches on type.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union, get_args

from sparkle.engine.base import RuleId, UpgradeType


@dataclass(frozen=True)
class ToggleDie:
    die_id: int


@dataclass(frozen=True)
class Roll:
    pass


@dataclass(frozen=True)
class ReRoll:
    pass


@dataclass(frozen=True)
class Bank:
    pass


@dataclass(frozen=True)
class SelectAll:
    pass


@dataclass(frozen=True)
class EndTurn:
    """End the turn; `busted` marks the follow-up scheduled after a sparkle."""
    busted: bool = False


@dataclass(frozen=True)
class ResetGame:
    pass


@dataclass(frozen=True)
class SelectUpgrade:
    upgrade_type: UpgradeType


@dataclass(frozen=True)
class AddExtraDie:
    pass


@dataclass(frozen=True)
class DiscardUnscored:
    pass


@dataclass(frozen=True)
class ExecuteAutoReroll:
    die_id: int


@dataclass(frozen=True)
class ExecuteGuhkleReroll:
    pass


@dataclass(frozen=True)
class ToggleScoringRule:
    rule_id: RuleId


@dataclass(frozen=True)
class ResetScoringRuleCounts:
    pass


Command = Union[
    ToggleDie,
    Roll,
    ReRoll,
    Bank,
    SelectAll,
    EndTurn,
    ResetGame,
    SelectUpgrade,
    AddExtraDie,
    DiscardUnscored,
    ExecuteAutoReroll,
    ExecuteGuhkleReroll,
    ToggleScoringRule,
    ResetScoringRuleCounts,
]

COMMAND_TYPES: tuple[type, ...] = get_args(Command)
