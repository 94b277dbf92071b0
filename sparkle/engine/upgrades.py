"""
Sparkle - Die Upgrade Model

Upgrade definitions and the modifier pass applied on top of raw scoring.

Application order (see `apply_upgrades`):
    1. Raw score of each scoring group
    2. Flat bonuses from dice in the group (SCORE_BONUS)
    3. Group multipliers (SCORE_MULTIPLIER), limited-use ones only while uses remain
    4. Set bonus: multi-die groups × n³ for n carriers of SET_BONUS
    5. Sum of groups, plus bank-requiring bonuses, times bank-requiring
       multipliers, times the permanent multiplier
"""

from dataclasses import dataclass, replace
from typing import Iterable, Sequence

from sparkle.engine.base import Die, ScoringGroup, Upgrade, UpgradeType


@dataclass(frozen=True)
class UpgradeConfig:
    """
    Static definition of an upgrade type.

    Attributes:
        type: Upgrade type this config describes
        label: Short label for the UI
        description: Human-readable effect
        bonus: Flat points added when the upgrade applies
        multiplier: Factor applied when the upgrade applies
        uses: Default number of uses (None = unlimited)
        requires_banked: Applies to the turn total once the die is banked
        attaches_to_die: False for grants that add a global resource instead
    """
    type: UpgradeType
    label: str
    description: str
    bonus: int = 0
    multiplier: int = 1
    uses: int | None = None
    requires_banked: bool = False
    attaches_to_die: bool = True

    @property
    def affects_score(self) -> bool:
        return self.bonus != 0 or self.multiplier != 1


UPGRADE_CONFIGS: dict[UpgradeType, UpgradeConfig] = {
    UpgradeType.SCORE_BONUS: UpgradeConfig(
        type=UpgradeType.SCORE_BONUS,
        label="+100",
        description="+100 points when this die scores",
        bonus=100,
    ),
    UpgradeType.SCORE_MULTIPLIER: UpgradeConfig(
        type=UpgradeType.SCORE_MULTIPLIER,
        label="2×",
        description="Doubles the combination this die scores in",
        multiplier=2,
    ),
    UpgradeType.BANKED_SCORE_BONUS: UpgradeConfig(
        type=UpgradeType.BANKED_SCORE_BONUS,
        label="+500 banked",
        description="+500 to every bank while this die is banked",
        bonus=500,
        requires_banked=True,
    ),
    UpgradeType.BANKED_SCORE_MULTIPLIER: UpgradeConfig(
        type=UpgradeType.BANKED_SCORE_MULTIPLIER,
        label="2× banked",
        description="Doubles every bank while this die is banked",
        multiplier=2,
        requires_banked=True,
    ),
    UpgradeType.TEN_X_MULTIPLIER: UpgradeConfig(
        type=UpgradeType.TEN_X_MULTIPLIER,
        label="10×",
        description="Multiplies a bank by 10 (1 use)",
        multiplier=10,
        uses=1,
        requires_banked=True,
    ),
    UpgradeType.AUTO_REROLL: UpgradeConfig(
        type=UpgradeType.AUTO_REROLL,
        label="Auto re-roll",
        description="Automatically re-rolls after a sparkle (3 uses)",
        uses=3,
    ),
    UpgradeType.SET_BONUS: UpgradeConfig(
        type=UpgradeType.SET_BONUS,
        label="Set bonus",
        description="Sets score × n³ for n dice carrying this upgrade",
    ),
    UpgradeType.EXTRA_DIE: UpgradeConfig(
        type=UpgradeType.EXTRA_DIE,
        label="Extra dice",
        description="Immediately gain extra dice",
        attaches_to_die=False,
    ),
}


def get_upgrade_config(upgrade_type: UpgradeType) -> UpgradeConfig:
    return UPGRADE_CONFIGS[upgrade_type]


def make_upgrade(upgrade_type: UpgradeType) -> Upgrade:
    """Create a fresh upgrade carrying its default number of uses."""
    return Upgrade(type=upgrade_type, remaining_uses=UPGRADE_CONFIGS[upgrade_type].uses)


def offerable_upgrades() -> tuple[UpgradeType, ...]:
    """Upgrade types that may appear in a periodic offer."""
    return tuple(UPGRADE_CONFIGS)


def _applicable(upgrade: Upgrade, *, banked: bool) -> UpgradeConfig | None:
    """Return the config if this upgrade changes score in the given phase."""
    config = UPGRADE_CONFIGS[upgrade.type]
    if config.requires_banked != banked or not config.affects_score:
        return None
    if config.uses is not None and not upgrade.is_active:
        return None
    return config


def group_score(group: ScoringGroup) -> int:
    """Score a single group with its dice's non-banked upgrades applied."""
    points = group.score

    for die in group.dice:
        for upgrade in die.upgrades:
            config = _applicable(upgrade, banked=False)
            if config is not None:
                points += config.bonus

    for die in group.dice:
        for upgrade in die.upgrades:
            config = _applicable(upgrade, banked=False)
            if config is not None:
                points *= config.multiplier

    if group.is_multi_die:
        carriers = sum(1 for die in group.dice if die.has_upgrade(UpgradeType.SET_BONUS))
        if carriers:
            points *= carriers ** 3

    return points


def apply_upgrades(
    groups: Sequence[ScoringGroup],
    banked_dice: Iterable[Die] = (),
    permanent_multiplier: int = 1
) -> int:
    """
    Final score for a set of scoring groups.

    Pure preview: safe to call repeatedly, never touches use counts. The
    bank-requiring upgrades of dice inside the groups are counted as well as
    those of already-banked dice, since the groups are what the next bank
    would commit.

    Args:
        groups: Scoring groups from the evaluator
        banked_dice: Dice already banked this turn
        permanent_multiplier: Global multiplier earned from hot dice

    Returns:
        Final points (0 when there are no groups)
    """
    if not groups:
        return 0

    total = sum(group_score(group) for group in groups)

    pending = [die for group in groups for die in group.dice]
    turn_upgrades: list[UpgradeConfig] = []
    for die in [*banked_dice, *pending]:
        for upgrade in die.upgrades:
            config = _applicable(upgrade, banked=True)
            if config is not None:
                turn_upgrades.append(config)

    total += sum(config.bonus for config in turn_upgrades)
    for config in turn_upgrades:
        total *= config.multiplier

    return total * permanent_multiplier


def consume_upgrade_uses(die: Die) -> Die:
    """Spend one use of every limited-use score modifier on a die that scored."""
    upgrades = tuple(
        upgrade.consume() if UPGRADE_CONFIGS[upgrade.type].affects_score else upgrade
        for upgrade in die.upgrades
    )
    return replace(die, upgrades=upgrades)


def consume_auto_reroll(die: Die) -> Die:
    """Spend one use of the first auto re-roll upgrade that still has uses."""
    upgrades = list(die.upgrades)
    for i, upgrade in enumerate(upgrades):
        if upgrade.type == UpgradeType.AUTO_REROLL and upgrade.is_active:
            upgrades[i] = upgrade.consume()
            break
    return replace(die, upgrades=tuple(upgrades))


def has_auto_reroll(die: Die) -> bool:
    return any(u.type == UpgradeType.AUTO_REROLL and u.is_active for u in die.upgrades)
