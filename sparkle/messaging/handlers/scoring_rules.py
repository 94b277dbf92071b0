"""
Sparkle - Scoring Rule Handlers

Rule table maintenance. Allowed at any time, including after game over.
"""

from __future__ import annotations

from dataclasses import replace

from sparkle.engine.scoring import reset_rule_counts, toggle_rule
from sparkle.engine.state import GameState
from sparkle.messaging.commands import ResetScoringRuleCounts, ToggleScoringRule
from sparkle.messaging.events import RuleCountsReset, ScoringRuleToggled
from sparkle.messaging.handlers.base import CommandResult, HandlerContext


def handle_toggle_scoring_rule(
    state: GameState,
    command: ToggleScoringRule,
    ctx: HandlerContext
) -> CommandResult:
    rules = toggle_rule(state.scoring_rules, command.rule_id)
    state = replace(state, scoring_rules=rules)
    return CommandResult(state, (ScoringRuleToggled(command.rule_id, state.rule(command.rule_id).enabled),))


def handle_reset_scoring_rule_counts(
    state: GameState,
    command: ResetScoringRuleCounts,
    ctx: HandlerContext
) -> CommandResult:
    state = replace(state, scoring_rules=reset_rule_counts(state.scoring_rules))
    return CommandResult(state, (RuleCountsReset(),))
