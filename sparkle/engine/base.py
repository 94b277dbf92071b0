"""
Sparkle - Game Engine Base Classes

This module defines the foundational data structures and enums used throughout
the game engine. All classes are immutable (frozen dataclasses); handlers build
new values with ``dataclasses.replace`` instead of mutating in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

# Wildcard face shown by the spark die. Resolved by the scoring evaluator,
# never stored as a concrete pip value.
SPARK = "spark"

PIP_FACES: tuple[int, ...] = (1, 2, 3, 4, 5, 6)
SPARK_DIE_FACES: tuple[int | str, ...] = (1, 2, SPARK, 4, 5, 6)

DieValue = Union[int, str]


class RuleId(Enum):
    """Named scoring rules, in no particular priority."""
    SINGLE_ONE = "single_one"
    SINGLE_FIVE = "single_five"
    THREE_OF_KIND = "three_of_kind"
    FOUR_OF_KIND = "four_of_kind"
    FIVE_OF_KIND = "five_of_kind"
    SIX_OF_KIND = "six_of_kind"
    STRAIGHT = "straight"
    THREE_PAIRS = "three_pairs"


class UpgradeType(Enum):
    """Modifiers that can be bound to a die slot (or granted as a resource)."""
    SCORE_BONUS = "score_bonus"
    SCORE_MULTIPLIER = "score_multiplier"
    BANKED_SCORE_BONUS = "banked_score_bonus"
    BANKED_SCORE_MULTIPLIER = "banked_score_multiplier"
    TEN_X_MULTIPLIER = "ten_x_multiplier"
    AUTO_REROLL = "auto_reroll"
    SET_BONUS = "set_bonus"
    EXTRA_DIE = "extra_die"


@dataclass(frozen=True)
class Upgrade:
    """
    A modifier attached to a die slot.

    Attributes:
        type: Which modifier this is
        remaining_uses: Uses left, or None for unlimited. An upgrade at zero
            uses stays attached so it can still be displayed.
    """
    type: UpgradeType
    remaining_uses: int | None = None

    @property
    def is_active(self) -> bool:
        """True while the upgrade still has an effect."""
        return self.remaining_uses is None or self.remaining_uses > 0

    def consume(self) -> "Upgrade":
        """Return a copy with one use spent. Unlimited upgrades are unchanged."""
        if self.remaining_uses is None or self.remaining_uses <= 0:
            return self
        return Upgrade(type=self.type, remaining_uses=self.remaining_uses - 1)


@dataclass(frozen=True)
class Die:
    """
    One physical die slot.

    Attributes:
        id: Process-unique identity, assigned by the dice factory
        value: Face value (1-6) or SPARK
        position: Stable slot index (1..N) that upgrades are bound to
        staged: Tentatively selected this roll
        banked: Locked in for the rest of the turn
        upgrades: Modifiers attached to this slot, in attachment order
        is_spark_die: Whether this die rolls on the spark face set
    """
    id: int
    value: DieValue
    position: int
    staged: bool = False
    banked: bool = False
    upgrades: tuple[Upgrade, ...] = field(default_factory=tuple)
    is_spark_die: bool = False

    def __post_init__(self) -> None:
        """Validate face value and the staged/banked exclusivity."""
        if self.value != SPARK and self.value not in PIP_FACES:
            raise ValueError(
                f"Invalid die value {self.value!r}. Must be 1-6 or {SPARK!r}."
            )
        if self.staged and self.banked:
            raise ValueError(f"Die {self.id} cannot be both staged and banked.")

    @property
    def is_spark(self) -> bool:
        return self.value == SPARK

    def has_upgrade(self, upgrade_type: UpgradeType) -> bool:
        return any(u.type == upgrade_type for u in self.upgrades)


@dataclass(frozen=True)
class ScoringRule:
    """
    A named, toggleable scoring rule.

    Attributes:
        id: Rule identifier
        description: Human-readable description of the combination
        score: Fixed points or a formula label ("value x 100")
        enabled: Disabled rules never fire
        activation_count: Number of bank events this rule contributed to
    """
    id: RuleId
    description: str
    score: int | str
    enabled: bool = True
    activation_count: int = 0


@dataclass(frozen=True)
class ScoringGroup:
    """
    One scoring combination found by the evaluator.

    Attributes:
        rule_id: The rule that matched
        score: Raw points, before upgrades
        dice: Dice consumed by this combination
        value: Face the combination counted as (None for full-set specials)
    """
    rule_id: RuleId
    score: int
    dice: tuple[Die, ...]
    value: int | None = None

    @property
    def is_multi_die(self) -> bool:
        return len(self.dice) > 1


@dataclass(frozen=True)
class ScoringResult:
    """
    Complete scoring result for a set of dice.

    Attributes:
        score: Total raw points
        scored_dice: Dice that participate in some group, in input order
        fired_rule_ids: Rules that matched, each listed once, in firing order
        groups: Individual scoring combinations
    """
    score: int
    scored_dice: tuple[Die, ...] = field(default_factory=tuple)
    fired_rule_ids: tuple[RuleId, ...] = field(default_factory=tuple)
    groups: tuple[ScoringGroup, ...] = field(default_factory=tuple)

    @property
    def is_bust(self) -> bool:
        """A result is a bust exactly when nothing scored."""
        return self.score == 0

    def __str__(self) -> str:
        if self.is_bust:
            return "SPARKLE! No scoring dice."
        lines = [f"Total: {self.score} points"]
        for group in self.groups:
            lines.append(f"  - {group.rule_id.value}: {group.score}")
        return "\n".join(lines)


@dataclass(frozen=True)
class GameConfig:
    """
    Tunable parameters for a game session.

    Attributes:
        starting_dice: Pool size at game and turn start
        max_dice: Largest pool ADD_EXTRA_DIE may grow to
        starting_extra_dice: Initial extra-dice (re-roll) resource
        threshold_base: Turn 1 threshold
        threshold_growth: Geometric growth factor per turn
        bust_delay_ms: Delay attached to the bust END_TURN follow-up
        auto_reroll_delay_ms: Delay attached to the auto re-roll follow-up
        guhkle_delay_ms: Delay attached to the guhkle re-roll follow-up
        upgrade_offer_interval: Offer an upgrade after every Nth turn
        upgrade_options_count: Number of upgrade types offered at once
        hot_dice_per_multiplier: Hot dice events per +1 permanent multiplier
        extra_die_grant: Extra dice granted by the EXTRA_DIE upgrade
        spark_die: Whether slot 1 holds the wildcard spark die
    """
    starting_dice: int = 6
    max_dice: int = 6
    starting_extra_dice: int = 5
    threshold_base: int = 100
    threshold_growth: int = 2
    bust_delay_ms: int = 1000
    auto_reroll_delay_ms: int = 600
    guhkle_delay_ms: int = 1000
    upgrade_offer_interval: int = 3
    upgrade_options_count: int = 3
    hot_dice_per_multiplier: int = 3
    extra_die_grant: int = 6
    spark_die: bool = False

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not 1 <= self.starting_dice <= self.max_dice:
            raise ValueError(
                f"Starting dice must be between 1 and max_dice ({self.max_dice}), "
                f"got {self.starting_dice}."
            )
        if self.threshold_base <= 0:
            raise ValueError("Threshold base must be positive.")
        if self.threshold_growth < 1:
            raise ValueError("Threshold growth must be at least 1.")
        for name in ("starting_extra_dice", "bust_delay_ms", "auto_reroll_delay_ms", "guhkle_delay_ms",
                     "extra_die_grant"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} cannot be negative.")
        for name in ("upgrade_offer_interval", "upgrade_options_count", "hot_dice_per_multiplier"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be at least 1.")
