"""
Sparkle - Base Classes Tests

Tests for dataclasses, enums, and validation utilities.
"""

import pytest

from sparkle.engine.base import (
    SPARK,
    Die,
    GameConfig,
    RuleId,
    ScoringGroup,
    ScoringResult,
    Upgrade,
    UpgradeType,
)
from sparkle.engine.validators import validate_dice_values, validate_score


class TestEnums:

    def test_rule_ids(self):
        assert RuleId.SINGLE_ONE.value == "single_one"
        assert RuleId.THREE_PAIRS.value == "three_pairs"
        assert len(RuleId) == 8

    def test_upgrade_types(self):
        assert UpgradeType.TEN_X_MULTIPLIER.value == "ten_x_multiplier"
        assert len(UpgradeType) == 8


class TestUpgrade:
    """Tests for Upgrade dataclass."""

    def test_unlimited_is_always_active(self):
        upgrade = Upgrade(UpgradeType.SCORE_BONUS)
        assert upgrade.is_active
        assert upgrade.consume() == upgrade

    def test_consume_decrements(self):
        upgrade = Upgrade(UpgradeType.AUTO_REROLL, remaining_uses=3)
        assert upgrade.consume().remaining_uses == 2

    def test_exhausted_stays_at_zero(self):
        upgrade = Upgrade(UpgradeType.TEN_X_MULTIPLIER, remaining_uses=1).consume()
        assert upgrade.remaining_uses == 0
        assert not upgrade.is_active
        assert upgrade.consume().remaining_uses == 0

    def test_immutable(self):
        upgrade = Upgrade(UpgradeType.SCORE_BONUS)
        with pytest.raises(AttributeError):
            upgrade.remaining_uses = 3  # type: ignore[misc]


class TestDie:
    """Tests for Die dataclass."""

    def test_create_valid_die(self):
        die = Die(id=1, value=4, position=2)
        assert not die.staged
        assert not die.banked
        assert die.upgrades == ()

    def test_spark_face(self):
        die = Die(id=1, value=SPARK, position=1, is_spark_die=True)
        assert die.is_spark

    @pytest.mark.parametrize("value", [0, 7, "x"])
    def test_invalid_value_raises(self, value):
        with pytest.raises(ValueError, match="Invalid die value"):
            Die(id=1, value=value, position=1)

    def test_staged_and_banked_raises(self):
        with pytest.raises(ValueError, match="both staged and banked"):
            Die(id=1, value=1, position=1, staged=True, banked=True)

    def test_has_upgrade(self):
        die = Die(id=1, value=1, position=1, upgrades=(Upgrade(UpgradeType.SET_BONUS),))
        assert die.has_upgrade(UpgradeType.SET_BONUS)
        assert not die.has_upgrade(UpgradeType.SCORE_BONUS)


class TestScoringResult:

    def test_zero_score_is_bust(self):
        assert ScoringResult(score=0).is_bust

    def test_group_multi_die(self):
        dice = (Die(1, 2, 1), Die(2, 2, 2), Die(3, 2, 3))
        assert ScoringGroup(RuleId.THREE_OF_KIND, 200, dice, 2).is_multi_die
        assert not ScoringGroup(RuleId.SINGLE_ONE, 100, dice[:1], 1).is_multi_die


class TestGameConfig:
    """Tests for GameConfig dataclass."""

    def test_defaults(self):
        config = GameConfig()
        assert config.starting_dice == 6
        assert config.threshold_base == 100
        assert config.upgrade_offer_interval == 3

    def test_starting_dice_above_max_raises(self):
        with pytest.raises(ValueError, match="Starting dice"):
            GameConfig(starting_dice=7, max_dice=6)

    def test_zero_starting_dice_raises(self):
        with pytest.raises(ValueError):
            GameConfig(starting_dice=0)

    @pytest.mark.parametrize("field,value", [
        ("threshold_base", 0),
        ("threshold_growth", 0),
        ("starting_extra_dice", -1),
        ("bust_delay_ms", -5),
        ("upgrade_offer_interval", 0),
        ("hot_dice_per_multiplier", 0),
    ])
    def test_invalid_values_raise(self, field: str, value: int):
        with pytest.raises(ValueError):
            GameConfig(**{field: value})


class TestValidateDiceValues:
    """Tests for validate_dice_values function."""

    def test_valid_values(self):
        assert validate_dice_values([1, 2, SPARK]) == (1, 2, SPARK)

    def test_spark_not_allowed(self):
        with pytest.raises(ValueError, match="spark"):
            validate_dice_values([SPARK], allow_spark=False)

    def test_out_of_range(self):
        with pytest.raises(ValueError, match="between 1 and 6"):
            validate_dice_values([9])

    def test_min_count(self):
        with pytest.raises(ValueError, match="At least"):
            validate_dice_values([1], min_count=2)

    def test_max_count(self):
        with pytest.raises(ValueError, match="At most"):
            validate_dice_values([1, 1, 1], max_count=2)


class TestValidateScore:

    def test_valid(self):
        assert validate_score(0) == 0

    def test_negative_raises(self):
        with pytest.raises(ValueError):
            validate_score(-1)

    def test_negative_allowed(self):
        assert validate_score(-1, allow_negative=True) == -1

    def test_non_int_raises(self):
        with pytest.raises(ValueError):
            validate_score(1.5)  # type: ignore[arg-type]
