"""
Sparkle - Upgrade Selection Handler

Takes one of the upgrades offered at the end of a turn. Die upgrades bind
to the offered slot and survive re-rolls; resource grants go straight into
the extra-dice pool.
"""

from __future__ import annotations

from dataclasses import replace

from sparkle.engine.state import GameState
from sparkle.engine.upgrades import get_upgrade_config, make_upgrade
from sparkle.messaging.commands import SelectUpgrade
from sparkle.messaging.events import UpgradeApplied
from sparkle.messaging.handlers.base import (
    UPGRADE_NOT_OFFERED,
    CommandResult,
    HandlerContext,
    reject,
    unchanged,
)


def handle_select_upgrade(
    state: GameState,
    command: SelectUpgrade,
    ctx: HandlerContext
) -> CommandResult:
    if not state.upgrade_offer_pending:
        return unchanged(state)
    if command.upgrade_type not in state.upgrade_options:
        return reject(state, UPGRADE_NOT_OFFERED)

    config = get_upgrade_config(command.upgrade_type)
    position = state.potential_upgrade_position

    if not config.attaches_to_die:
        state = replace(
            state,
            extra_dice_pool=state.extra_dice_pool + ctx.config.extra_die_grant,
            message=f"Gained {ctx.config.extra_die_grant} extra dice!",
        )
        applied = UpgradeApplied(command.upgrade_type, None)
    else:
        upgrade = make_upgrade(command.upgrade_type)
        dice = tuple(
            replace(d, upgrades=(*d.upgrades, upgrade)) if d.position == position else d
            for d in state.dice
        )
        vacant = dict(state.vacant_slot_upgrades)
        if not any(d.position == position for d in state.dice):
            vacant[position] = (*vacant.get(position, ()), upgrade)
        state = replace(
            state,
            dice=dice,
            vacant_slot_upgrades=vacant,
            message=f"{config.label} added to die {position}.",
        )
        applied = UpgradeApplied(command.upgrade_type, position)

    state = replace(state, upgrade_options=(), potential_upgrade_position=None)
    return CommandResult(state, (applied,))
