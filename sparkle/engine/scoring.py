"""
Sparkle - Scoring Evaluator

Pure scoring for a pool of dice. All methods are stateless class methods that
operate on immutable inputs.

Scoring Rules (priority order, each die is consumed by at most one rule):
    - Straight 1-2-3-4-5-6 (six dice): 1,500 points
    - Three pairs (six dice): 1,500 points
    - Three 1s: 1,000 points
    - Three of X (2-6): X × 100 points
    - Four+ of a kind: Previous tier × 2
    - Single 1: 100 points
    - Single 5: 50 points

A spark (wildcard) face can complete a set that is one die short, fill the
missing face of a straight or pair, and otherwise counts as a single 1.
"""

from collections import Counter
from dataclasses import replace
from typing import Iterable, Sequence

from sparkle.engine.base import (
    SPARK,
    Die,
    DieValue,
    RuleId,
    ScoringGroup,
    ScoringResult,
    ScoringRule,
)
from sparkle.engine.validators import validate_dice_values


DEFAULT_RULES: tuple[ScoringRule, ...] = (
    ScoringRule(RuleId.SINGLE_ONE, "Single 1", 100),
    ScoringRule(RuleId.SINGLE_FIVE, "Single 5", 50),
    ScoringRule(RuleId.THREE_OF_KIND, "Three of a kind (or 2 + Spark)", "1000 for 1s, value × 100"),
    ScoringRule(RuleId.FOUR_OF_KIND, "Four of a kind", "three of a kind × 2"),
    ScoringRule(RuleId.FIVE_OF_KIND, "Five of a kind", "three of a kind × 4"),
    ScoringRule(RuleId.SIX_OF_KIND, "Six of a kind", "three of a kind × 8"),
    ScoringRule(RuleId.STRAIGHT, "1-2-3-4-5-6", 1500),
    ScoringRule(RuleId.THREE_PAIRS, "Three pairs", 1500),
)

_SET_RULES: dict[int, RuleId] = {
    3: RuleId.THREE_OF_KIND,
    4: RuleId.FOUR_OF_KIND,
    5: RuleId.FIVE_OF_KIND,
    6: RuleId.SIX_OF_KIND,
}


class ScoringEvaluator:
    """
    Stateless scoring for Sparkle dice.

    All methods are class methods operating on immutable data.
    """

    # Scoring values
    SINGLE_ONE_POINTS = 100
    SINGLE_FIVE_POINTS = 50
    THREE_ONES_POINTS = 1000
    STRAIGHT_POINTS = 1500
    THREE_PAIRS_POINTS = 1500
    FULL_SET_SIZE = 6

    @classmethod
    def calculate_score(
        cls,
        dice: Sequence[Die] | Sequence[DieValue],
        rules: Iterable[ScoringRule] | None = None
    ) -> ScoringResult:
        """
        Calculate the score for a collection of dice.

        Full-set specials are checked first and consume the whole set. Sets
        are pulled out greedily, largest first, then leftover 1s and 5s.

        Args:
            dice: Dice (or bare face values) to score
            rules: Rule table; disabled rules are skipped (default: all enabled)

        Returns:
            ScoringResult with total points, scored dice and fired rule ids
        """
        pool = cls._as_dice(dice)
        enabled = cls._enabled_rules(rules)

        if not pool:
            return ScoringResult(score=0)

        groups: list[ScoringGroup] = []
        remaining = list(pool)

        full_set = cls._check_full_set(remaining, enabled)
        if full_set is not None:
            groups.append(full_set)
        else:
            groups.extend(cls._check_sets(remaining, enabled))
            groups.extend(cls._check_singles(remaining, enabled))

        scored_ids = {die.id for group in groups for die in group.dice}
        fired: list[RuleId] = []
        for group in groups:
            if group.rule_id not in fired:
                fired.append(group.rule_id)

        return ScoringResult(
            score=sum(group.score for group in groups),
            scored_dice=tuple(die for die in pool if die.id in scored_ids),
            fired_rule_ids=tuple(fired),
            groups=tuple(groups),
        )

    @classmethod
    def set_points(cls, face: int, size: int) -> int:
        """Points for `size` dice of `face`: three of a kind doubled per extra die."""
        base = cls.THREE_ONES_POINTS if face == 1 else face * 100
        return base * 2 ** (size - 3)

    @classmethod
    def _as_dice(cls, dice: Sequence[Die] | Sequence[DieValue]) -> tuple[Die, ...]:
        """Wrap bare face values in throwaway dice so results can name them."""
        items = tuple(dice)
        if all(isinstance(item, Die) for item in items):
            return items  # type: ignore[return-value]
        values = validate_dice_values(items)  # type: ignore[arg-type]
        return tuple(
            Die(id=i, value=value, position=i + 1, is_spark_die=value == SPARK)
            for i, value in enumerate(values)
        )

    @classmethod
    def _enabled_rules(cls, rules: Iterable[ScoringRule] | None) -> frozenset[RuleId]:
        if rules is None:
            rules = DEFAULT_RULES
        return frozenset(rule.id for rule in rules if rule.enabled)

    @classmethod
    def _check_full_set(
        cls,
        remaining: list[Die],
        enabled: frozenset[RuleId]
    ) -> ScoringGroup | None:
        """
        Check for a straight or three pairs across exactly six dice.

        Returns:
            The matching group, or None if the dice are not a full-set special
        """
        if len(remaining) != cls.FULL_SET_SIZE:
            return None

        sparks = sum(1 for d in remaining if d.is_spark)
        counts = Counter(d.value for d in remaining if not d.is_spark)

        if RuleId.STRAIGHT in enabled:
            if all(c == 1 for c in counts.values()) and len(counts) + sparks == cls.FULL_SET_SIZE:
                return ScoringGroup(RuleId.STRAIGHT, cls.STRAIGHT_POINTS, tuple(remaining))

        if RuleId.THREE_PAIRS in enabled and all(c <= 2 for c in counts.values()):
            # Sparks first complete lone faces, any left over pair with each other
            spare = sparks - sum(2 - c for c in counts.values())
            if spare >= 0 and spare % 2 == 0 and len(counts) + spare // 2 == 3:
                return ScoringGroup(RuleId.THREE_PAIRS, cls.THREE_PAIRS_POINTS, tuple(remaining))

        return None

    @classmethod
    def _check_sets(
        cls,
        remaining: list[Die],
        enabled: frozenset[RuleId]
    ) -> list[ScoringGroup]:
        """
        Pull out three or more of a kind, largest (then highest scoring) first.

        A spark may complete a set only when at least two literal dice match,
        and each set absorbs at most one spark. Consumed dice are removed
        from `remaining`.
        """
        groups: list[ScoringGroup] = []

        while True:
            spark = next((d for d in remaining if d.is_spark), None)
            counts = Counter(d.value for d in remaining if not d.is_spark)

            best: tuple[int, int, int, bool] | None = None
            for face, count in counts.items():
                largest = count + 1 if spark is not None and count >= 2 else count
                for size in range(min(largest, 6), 2, -1):
                    if _SET_RULES[size] not in enabled:
                        continue
                    candidate = (size, cls.set_points(face, size), face, size > count)
                    if best is None or candidate[:2] > best[:2]:
                        best = candidate
                    break

            if best is None:
                return groups

            size, points, face, uses_spark = best
            taken = [d for d in remaining if d.value == face][:size - uses_spark]
            if uses_spark:
                taken.append(spark)
            for die in taken:
                remaining.remove(die)

            groups.append(ScoringGroup(_SET_RULES[size], points, tuple(taken), value=face))

    @classmethod
    def _check_singles(
        cls,
        remaining: list[Die],
        enabled: frozenset[RuleId]
    ) -> list[ScoringGroup]:
        """
        Score leftover 1s, 5s and sparks one die at a time.

        A leftover spark takes the higher single value that is enabled.
        """
        groups: list[ScoringGroup] = []

        for die in list(remaining):
            if die.is_spark:
                if RuleId.SINGLE_ONE in enabled:
                    group = ScoringGroup(RuleId.SINGLE_ONE, cls.SINGLE_ONE_POINTS, (die,), value=1)
                elif RuleId.SINGLE_FIVE in enabled:
                    group = ScoringGroup(RuleId.SINGLE_FIVE, cls.SINGLE_FIVE_POINTS, (die,), value=5)
                else:
                    continue
            elif die.value == 1 and RuleId.SINGLE_ONE in enabled:
                group = ScoringGroup(RuleId.SINGLE_ONE, cls.SINGLE_ONE_POINTS, (die,), value=1)
            elif die.value == 5 and RuleId.SINGLE_FIVE in enabled:
                group = ScoringGroup(RuleId.SINGLE_FIVE, cls.SINGLE_FIVE_POINTS, (die,), value=5)
            else:
                continue

            remaining.remove(die)
            groups.append(group)

        return groups

    @classmethod
    def is_bust(
        cls,
        dice: Sequence[Die] | Sequence[DieValue],
        rules: Iterable[ScoringRule] | None = None
    ) -> bool:
        """
        Check if dice are a bust (a "sparkle": nothing scores).

        Empty input is a bust.
        """
        return cls.calculate_score(dice, rules).is_bust

    @classmethod
    def is_hot_dice(
        cls,
        dice: Sequence[Die] | Sequence[DieValue],
        rules: Iterable[ScoringRule] | None = None
    ) -> bool:
        """Check if every die in a non-empty pool scores."""
        pool = cls._as_dice(dice)
        if not pool:
            return False
        return len(cls.calculate_score(pool, rules).scored_dice) == len(pool)


def score(
    dice: Sequence[Die] | Sequence[DieValue],
    rules: Iterable[ScoringRule] | None = None
) -> ScoringResult:
    """Shorthand for ScoringEvaluator.calculate_score."""
    return ScoringEvaluator.calculate_score(dice, rules)


def default_rules() -> tuple[ScoringRule, ...]:
    """Fresh rule table with every rule enabled and zero activations."""
    return DEFAULT_RULES


def find_rule(rules: Iterable[ScoringRule], rule_id: RuleId) -> ScoringRule:
    """Look up a rule by id, raising ValueError if it is missing."""
    for rule in rules:
        if rule.id == rule_id:
            return rule
    raise ValueError(f"Unknown scoring rule {rule_id!r}.")


def record_activations(
    rules: Iterable[ScoringRule],
    fired_rule_ids: Iterable[RuleId]
) -> tuple[ScoringRule, ...]:
    """Increment each fired rule's activation count by exactly one."""
    fired = set(fired_rule_ids)
    return tuple(
        replace(rule, activation_count=rule.activation_count + 1) if rule.id in fired else rule
        for rule in rules
    )


def reset_rule_counts(rules: Iterable[ScoringRule]) -> tuple[ScoringRule, ...]:
    """Zero every activation count, keeping enabled flags."""
    return tuple(replace(rule, activation_count=0) for rule in rules)


def toggle_rule(rules: Iterable[ScoringRule], rule_id: RuleId) -> tuple[ScoringRule, ...]:
    """Flip the enabled flag of one rule."""
    rules = tuple(rules)
    find_rule(rules, rule_id)
    return tuple(
        replace(rule, enabled=not rule.enabled) if rule.id == rule_id else rule
        for rule in rules
    )
