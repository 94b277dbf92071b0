"""
Sparkle Command Handlers.

One pure function per command. Each returns a new GameState and the events
the transition produced; none of them block or call each other.
"""

from sparkle.messaging.handlers.bank import handle_bank
from sparkle.messaging.handlers.base import CommandResult, HandlerContext
from sparkle.messaging.handlers.end_turn import handle_end_turn
from sparkle.messaging.handlers.extra_dice import handle_add_extra_die, handle_discard_unscored
from sparkle.messaging.handlers.reset import handle_reset
from sparkle.messaging.handlers.roll import (
    handle_execute_auto_reroll,
    handle_execute_guhkle_reroll,
    handle_reroll,
    handle_roll,
)
from sparkle.messaging.handlers.scoring_rules import (
    handle_reset_scoring_rule_counts,
    handle_toggle_scoring_rule,
)
from sparkle.messaging.handlers.toggle import handle_select_all, handle_toggle_die
from sparkle.messaging.handlers.upgrade import handle_select_upgrade

__all__ = [
    "CommandResult",
    "HandlerContext",
    "handle_add_extra_die",
    "handle_bank",
    "handle_discard_unscored",
    "handle_end_turn",
    "handle_execute_auto_reroll",
    "handle_execute_guhkle_reroll",
    "handle_reroll",
    "handle_reset",
    "handle_reset_scoring_rule_counts",
    "handle_roll",
    "handle_select_all",
    "handle_select_upgrade",
    "handle_toggle_die",
    "handle_toggle_scoring_rule",
]
