"""
Sparkle - Game State & Selectors

The canonical game snapshot plus pure derived queries. A GameState is only
ever replaced wholesale by a command handler; nothing mutates it in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from sparkle.engine.base import (
    Die,
    GameConfig,
    RuleId,
    ScoringResult,
    ScoringRule,
    Upgrade,
    UpgradeType,
)
from sparkle.engine.dice import DiceFactory
from sparkle.engine.scoring import ScoringEvaluator, default_rules, find_rule
from sparkle.engine.upgrades import apply_upgrades
from sparkle.engine.validators import validate_score

INITIAL_MESSAGE = "Roll the dice to start your turn!"


@dataclass(frozen=True)
class GameState:
    """
    Authoritative snapshot of a single-player Sparkle game.

    Attributes:
        dice: Current pool, in slot order
        banked_score: Points locked in this turn (lost on a sparkle)
        total_score: Cumulative score over completed turns
        threshold: Total score needed to end the current turn
        turn_number: 1-based turn counter
        game_over: Terminal flag
        message: Last human-readable status line
        scoring_rules: Rule table with activation counts
        extra_dice_pool: Consumable resource for re-rolls and extra dice
        last_roll_sparkled: Sticky bust flag set by the most recent roll
        rolls_in_turn: Rolls taken this turn (0 = turn-start pool not yet rolled)
        is_guhkle_attempt: A free guhkle re-roll is pending for the current sparkle
        hot_dice_count: Hot dice events this game
        permanent_multiplier: Global multiplier earned from hot dice
        high_score: Best total seen, kept across resets
        upgrade_options: Upgrade types currently on offer
        potential_upgrade_position: Slot an offered upgrade would attach to
        vacant_slot_upgrades: Upgrades of slots that currently hold no die
    """
    dice: tuple[Die, ...] = field(default_factory=tuple)
    banked_score: int = 0
    total_score: int = 0
    threshold: int = 100
    turn_number: int = 1
    game_over: bool = False
    message: str = INITIAL_MESSAGE
    scoring_rules: tuple[ScoringRule, ...] = field(default_factory=default_rules)
    extra_dice_pool: int = 0
    last_roll_sparkled: bool = False
    rolls_in_turn: int = 0
    is_guhkle_attempt: bool = False
    hot_dice_count: int = 0
    permanent_multiplier: int = 1
    high_score: int = 0
    upgrade_options: tuple[UpgradeType, ...] = field(default_factory=tuple)
    potential_upgrade_position: int | None = None
    vacant_slot_upgrades: dict[int, tuple[Upgrade, ...]] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        """Validate scores and counters."""
        for name in ("banked_score", "total_score", "high_score", "extra_dice_pool", "rolls_in_turn"):
            validate_score(getattr(self, name))
        if self.turn_number < 1:
            raise ValueError(f"Turn number must be at least 1, got {self.turn_number}.")
        if self.permanent_multiplier < 1:
            raise ValueError("Permanent multiplier must be at least 1.")

    @property
    def active_dice(self) -> tuple[Die, ...]:
        """Dice that are not banked."""
        return tuple(d for d in self.dice if not d.banked)

    @property
    def banked_dice(self) -> tuple[Die, ...]:
        return tuple(d for d in self.dice if d.banked)

    @property
    def staged_dice(self) -> tuple[Die, ...]:
        """Dice selected this roll and not yet banked."""
        return tuple(d for d in self.dice if d.staged and not d.banked)

    @property
    def upgrade_offer_pending(self) -> bool:
        return bool(self.upgrade_options)

    def find_die(self, die_id: int) -> Die | None:
        return next((d for d in self.dice if d.id == die_id), None)

    def rule(self, rule_id: RuleId) -> ScoringRule:
        return find_rule(self.scoring_rules, rule_id)


# -- Threshold -----------------------------------------------------------


def round_to_sig_figs(value: int, sig_figs: int = 2) -> int:
    """Round a non-negative integer half-up to `sig_figs` significant figures."""
    digits = len(str(value))
    if digits <= sig_figs:
        return value
    factor = 10 ** (digits - sig_figs)
    return (value + factor // 2) // factor * factor


def calculate_threshold(turn_number: int, config: GameConfig | None = None) -> int:
    """
    Total score needed to end a turn.

    Turn 1 (and anything below) is clamped to the base. After that the base
    grows geometrically: base × growth^(turn - 1), rounded to two significant
    figures. Non-decreasing in turn_number.
    """
    config = config or GameConfig()
    if turn_number <= 1:
        return config.threshold_base
    raw = config.threshold_base * config.threshold_growth ** (turn_number - 1)
    return round_to_sig_figs(raw)


def next_threshold_info(turn_number: int, config: GameConfig | None = None) -> tuple[int, int]:
    """(next turn, its threshold)."""
    return turn_number + 1, calculate_threshold(turn_number + 1, config)


# -- Construction --------------------------------------------------------


def create_initial_state(
    config: GameConfig,
    dice: DiceFactory,
    high_score: int = 0
) -> GameState:
    """Fresh game: new pool, zero scores, turn 1, default rules, full resources."""
    return GameState(
        dice=dice.create_pool(config.starting_dice, spark_die=config.spark_die),
        threshold=calculate_threshold(1, config),
        scoring_rules=default_rules(),
        extra_dice_pool=config.starting_extra_dice,
        high_score=high_score,
    )


# -- Selectors -----------------------------------------------------------


def staged_result(state: GameState) -> ScoringResult:
    """Raw evaluator result for the staged dice."""
    return ScoringEvaluator.calculate_score(state.staged_dice, state.scoring_rules)


def staged_score(state: GameState) -> int:
    """
    What banking the staged dice now would add to the turn.

    Includes upgrades on the staged dice and the bank-requiring upgrades of
    dice already banked this turn, times the permanent multiplier.
    """
    result = staged_result(state)
    if result.is_bust:
        return 0
    return apply_upgrades(result.groups, state.banked_dice, state.permanent_multiplier)


def all_staged_dice_score(state: GameState) -> bool:
    """True iff every staged die takes part in a scoring group."""
    staged = state.staged_dice
    if not staged:
        return True
    return len(staged_result(state).scored_dice) == len(staged)


def is_pool_busted(state: GameState) -> bool:
    """True iff nothing in the active pool scores."""
    return ScoringEvaluator.is_bust(state.active_dice, state.scoring_rules)


def can_roll(state: GameState) -> bool:
    """
    Whether a host should offer ROLL.

    The handler itself only refuses once the game is over. The turn-start
    pool can always be rolled; after that the player needs a fully scoring
    staged selection or banked points to build on.
    """
    if state.game_over or state.last_roll_sparkled or not state.active_dice:
        return False
    if state.rolls_in_turn == 0:
        return True
    if state.staged_dice:
        return staged_score(state) > 0 and all_staged_dice_score(state)
    return state.banked_score > 0


def can_reroll(state: GameState) -> bool:
    if state.game_over or state.extra_dice_pool <= 0:
        return False
    return any(not d.staged for d in state.active_dice)


def can_bank(state: GameState) -> bool:
    return (
        not state.game_over
        and state.rolls_in_turn > 0
        and len(state.staged_dice) > 0
        and staged_score(state) > 0
        and all_staged_dice_score(state)
    )


def can_end_turn(state: GameState) -> bool:
    """
    Whether ending the turn is legal (staged points count as projected).

    A sparkled roll can always be ended, which resolves the bust.
    """
    if state.game_over:
        return False
    if state.last_roll_sparkled:
        return True

    pending = staged_score(state)
    projected = state.total_score + state.banked_score + pending
    return (
        (state.banked_score > 0 or pending > 0)
        and all_staged_dice_score(state)
        and projected >= state.threshold
    )
