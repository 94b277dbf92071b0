"""
Sparkle Messaging Layer.

Commands in, events out. The engine dispatches each command to a pure
handler and publishes the resulting events on its own bus.
"""

from sparkle.messaging.commands import (
    COMMAND_TYPES,
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
from sparkle.messaging.engine import GameEngine
from sparkle.messaging.event_bus import EventBus
from sparkle.messaging.events import (
    EVENT_TYPES,
    DelayedAction,
    DiceBanked,
    DiceDiscarded,
    DiceRerolled,
    DiceRolled,
    DieToggled,
    ErrorEvent,
    EventPayload,
    ExtraDieAdded,
    GameEvent,
    GameReset,
    RuleCountsReset,
    ScoringRuleToggled,
    TurnEnded,
    UpgradeApplied,
    UpgradeOffered,
)
from sparkle.messaging.handlers import CommandResult, HandlerContext

__all__ = [
    # Engine
    "GameEngine",
    "EventBus",
    "CommandResult",
    "HandlerContext",
    # Commands
    "Command",
    "COMMAND_TYPES",
    "AddExtraDie",
    "Bank",
    "DiscardUnscored",
    "EndTurn",
    "ExecuteAutoReroll",
    "ExecuteGuhkleReroll",
    "ReRoll",
    "ResetGame",
    "ResetScoringRuleCounts",
    "Roll",
    "SelectAll",
    "SelectUpgrade",
    "ToggleDie",
    "ToggleScoringRule",
    # Events
    "EventPayload",
    "EVENT_TYPES",
    "GameEvent",
    "DelayedAction",
    "DiceBanked",
    "DiceDiscarded",
    "DiceRerolled",
    "DiceRolled",
    "DieToggled",
    "ErrorEvent",
    "ExtraDieAdded",
    "GameReset",
    "RuleCountsReset",
    "ScoringRuleToggled",
    "TurnEnded",
    "UpgradeApplied",
    "UpgradeOffered",
]
