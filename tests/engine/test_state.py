"""
Sparkle - Game State & Selector Tests
"""

from dataclasses import replace

import pytest

from sparkle.engine.base import GameConfig, RuleId, Upgrade, UpgradeType
from sparkle.engine.state import (
    GameState,
    all_staged_dice_score,
    calculate_threshold,
    can_bank,
    can_end_turn,
    can_reroll,
    can_roll,
    create_initial_state,
    is_pool_busted,
    next_threshold_info,
    round_to_sig_figs,
    staged_score,
)


class TestThreshold:
    """Tests for the per-turn threshold formula."""

    @pytest.mark.parametrize("turn,expected", [
        (0, 100),
        (1, 100),
        (2, 200),
        (3, 400),
        (5, 1600),
        (7, 6400),
        (8, 13000),
        (9, 26000),
    ])
    def test_doubling(self, turn: int, expected: int):
        assert calculate_threshold(turn) == expected

    def test_custom_growth(self):
        config = GameConfig(threshold_base=100, threshold_growth=3)
        assert calculate_threshold(3, config) == 900
        assert calculate_threshold(4, config) == 2700

    def test_monotonic(self):
        values = [calculate_threshold(turn) for turn in range(1, 30)]
        assert values == sorted(values)

    @pytest.mark.parametrize("value,expected", [
        (99, 99),
        (1250, 1300),
        (1249, 1200),
        (12800, 13000),
    ])
    def test_round_to_sig_figs(self, value: int, expected: int):
        assert round_to_sig_figs(value) == expected

    def test_next_threshold_info(self):
        assert next_threshold_info(1) == (2, 200)


class TestInitialState:

    def test_fresh_game(self, config, dice):
        state = create_initial_state(config, dice, high_score=500)
        assert len(state.dice) == config.starting_dice
        assert [d.position for d in state.dice] == [1, 2, 3, 4, 5, 6]
        assert state.total_score == 0
        assert state.banked_score == 0
        assert state.turn_number == 1
        assert state.threshold == 100
        assert state.extra_dice_pool == config.starting_extra_dice
        assert state.high_score == 500
        assert state.rolls_in_turn == 0
        assert all(r.activation_count == 0 and r.enabled for r in state.scoring_rules)

    def test_spark_die_in_slot_one(self, dice):
        state = create_initial_state(GameConfig(spark_die=True), dice)
        assert state.dice[0].is_spark_die
        assert not any(d.is_spark_die for d in state.dice[1:])

    def test_negative_score_rejected(self):
        with pytest.raises(ValueError):
            GameState(total_score=-1)

    def test_turn_zero_rejected(self):
        with pytest.raises(ValueError):
            GameState(turn_number=0)


class TestValueSemantics:

    def test_hashable_with_vacant_slot_upgrades(self, rolled_state):
        state = rolled_state(1, 5, vacant_slot_upgrades={3: (Upgrade(UpgradeType.SCORE_BONUS),)})
        assert hash(state) == hash(replace(state, vacant_slot_upgrades={}))
        assert len({state, state}) == 1

    def test_vacant_slot_upgrades_still_compared(self, rolled_state):
        parked = rolled_state(1, 5, vacant_slot_upgrades={3: (Upgrade(UpgradeType.SCORE_BONUS),)})
        assert parked != replace(parked, vacant_slot_upgrades={})


class TestDiceViews:

    def test_partitions(self, rolled_state):
        state = rolled_state(1, 5, 2, 3, staged=(2,), banked=(1,))
        assert [d.position for d in state.active_dice] == [2, 3, 4]
        assert [d.position for d in state.banked_dice] == [1]
        assert [d.position for d in state.staged_dice] == [2]

    def test_find_die(self, rolled_state):
        state = rolled_state(1, 5)
        assert state.find_die(state.dice[1].id) is state.dice[1]
        assert state.find_die(-1) is None

    def test_rule_lookup(self):
        assert GameState().rule(RuleId.STRAIGHT).score == 1500


class TestStagedScore:

    def test_nothing_staged(self, rolled_state):
        assert staged_score(rolled_state(1, 5)) == 0

    def test_staged_single(self, rolled_state):
        assert staged_score(rolled_state(1, 2, 3, staged=(1,))) == 100

    def test_includes_banked_upgrades(self, rolled_state):
        state = rolled_state(
            2, 1, 3,
            staged=(2,),
            banked=(1,),
            upgrades={1: (Upgrade(UpgradeType.BANKED_SCORE_MULTIPLIER),)},
        )
        assert staged_score(state) == 200

    def test_permanent_multiplier(self, rolled_state):
        state = rolled_state(5, 2, staged=(1,), permanent_multiplier=2)
        assert staged_score(state) == 100

    def test_dead_weight_detected(self, rolled_state):
        state = rolled_state(1, 2, staged=(1, 2))
        assert staged_score(state) == 100
        assert not all_staged_dice_score(state)

    def test_empty_selection_scores(self, rolled_state):
        assert all_staged_dice_score(rolled_state(2, 3))


class TestSelectors:
    """Tests for can_roll / can_reroll / can_bank / can_end_turn."""

    def test_can_roll_at_turn_start(self, rolled_state):
        assert can_roll(rolled_state(2, 3, rolls_in_turn=0))

    def test_cannot_roll_without_selection_or_bank(self, rolled_state):
        assert not can_roll(rolled_state(1, 3))

    def test_can_roll_with_scoring_selection(self, rolled_state):
        assert can_roll(rolled_state(1, 3, staged=(1,)))

    def test_cannot_roll_with_dead_weight(self, rolled_state):
        assert not can_roll(rolled_state(1, 3, staged=(1, 2)))

    def test_can_roll_with_banked_score(self, rolled_state):
        assert can_roll(rolled_state(1, 3, 4, banked=(1,), banked_score=100))

    def test_cannot_roll_after_sparkle(self, rolled_state):
        assert not can_roll(rolled_state(2, 3, last_roll_sparkled=True))

    def test_cannot_roll_when_game_over(self, rolled_state):
        assert not can_roll(rolled_state(2, 3, rolls_in_turn=0, game_over=True))

    def test_can_reroll(self, rolled_state):
        assert can_reroll(rolled_state(2, 3))

    def test_cannot_reroll_without_resource(self, rolled_state):
        assert not can_reroll(rolled_state(2, 3, extra_dice_pool=0))

    def test_cannot_reroll_when_everything_staged(self, rolled_state):
        assert not can_reroll(rolled_state(1, 5, staged=(1, 2)))

    def test_can_bank(self, rolled_state):
        assert can_bank(rolled_state(1, 3, staged=(1,)))

    def test_cannot_bank_before_first_roll(self, rolled_state):
        assert not can_bank(rolled_state(1, 3, staged=(1,), rolls_in_turn=0))

    def test_cannot_bank_non_scoring(self, rolled_state):
        assert not can_bank(rolled_state(2, 3, staged=(1,)))

    def test_can_end_turn_after_sparkle(self, rolled_state):
        assert can_end_turn(rolled_state(2, 3, last_roll_sparkled=True))

    def test_can_end_turn_with_banked_score_over_threshold(self, rolled_state):
        assert can_end_turn(rolled_state(1, 3, banked=(1,), banked_score=100))

    def test_staged_points_count_toward_threshold(self, rolled_state):
        assert can_end_turn(rolled_state(1, 3, staged=(1,)))

    def test_cannot_end_turn_below_threshold(self, rolled_state):
        assert not can_end_turn(rolled_state(5, 3, staged=(1,)))

    def test_cannot_end_turn_with_nothing(self, rolled_state):
        assert not can_end_turn(rolled_state(1, 3))

    def test_pool_busted(self, rolled_state):
        assert is_pool_busted(rolled_state(2, 3, 4, 6))
        assert not is_pool_busted(rolled_state(2, 3, 4, 5))
