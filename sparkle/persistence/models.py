"""
Sparkle - Snapshot Models

Pydantic models that mirror GameState field for field, so a game can be
written to any JSON store after each command and rehydrated later with rule
counts and slot upgrades intact.
"""

from typing import Literal

from pydantic import BaseModel, Field

from sparkle.engine.base import (
    Die,
    RuleId,
    ScoringRule,
    Upgrade,
    UpgradeType,
)
from sparkle.engine.state import GameState

SNAPSHOT_VERSION = 1


class UpgradeModel(BaseModel):
    """Mirrors `Upgrade`."""

    type: UpgradeType
    remaining_uses: int | None = Field(default=None, ge=0)

    model_config = {"from_attributes": True}

    def to_upgrade(self) -> Upgrade:
        return Upgrade(type=self.type, remaining_uses=self.remaining_uses)


class DieModel(BaseModel):
    """Mirrors `Die`."""

    id: int
    value: int | Literal["spark"]
    position: int = Field(ge=1)
    staged: bool = False
    banked: bool = False
    upgrades: list[UpgradeModel] = Field(default_factory=list)
    is_spark_die: bool = False

    model_config = {"from_attributes": True}

    def to_die(self) -> Die:
        return Die(
            id=self.id,
            value=self.value,
            position=self.position,
            staged=self.staged,
            banked=self.banked,
            upgrades=tuple(u.to_upgrade() for u in self.upgrades),
            is_spark_die=self.is_spark_die,
        )


class ScoringRuleModel(BaseModel):
    """Mirrors `ScoringRule`."""

    id: RuleId
    description: str
    score: int | str
    enabled: bool = True
    activation_count: int = Field(default=0, ge=0)

    model_config = {"from_attributes": True}

    def to_rule(self) -> ScoringRule:
        return ScoringRule(
            id=self.id,
            description=self.description,
            score=self.score,
            enabled=self.enabled,
            activation_count=self.activation_count,
        )


class GameSnapshot(BaseModel):
    """Mirrors `GameState`, plus a format version."""

    version: int = SNAPSHOT_VERSION
    dice: list[DieModel] = Field(default_factory=list)
    banked_score: int = 0
    total_score: int = 0
    threshold: int = 100
    turn_number: int = Field(default=1, ge=1)
    game_over: bool = False
    message: str = ""
    scoring_rules: list[ScoringRuleModel] = Field(default_factory=list)
    extra_dice_pool: int = 0
    last_roll_sparkled: bool = False
    rolls_in_turn: int = 0
    is_guhkle_attempt: bool = False
    hot_dice_count: int = 0
    permanent_multiplier: int = 1
    high_score: int = 0
    upgrade_options: list[UpgradeType] = Field(default_factory=list)
    potential_upgrade_position: int | None = None
    vacant_slot_upgrades: dict[int, list[UpgradeModel]] = Field(default_factory=dict)

    @classmethod
    def from_state(cls, state: GameState) -> "GameSnapshot":
        return cls(
            dice=[DieModel.model_validate(d) for d in state.dice],
            banked_score=state.banked_score,
            total_score=state.total_score,
            threshold=state.threshold,
            turn_number=state.turn_number,
            game_over=state.game_over,
            message=state.message,
            scoring_rules=[ScoringRuleModel.model_validate(r) for r in state.scoring_rules],
            extra_dice_pool=state.extra_dice_pool,
            last_roll_sparkled=state.last_roll_sparkled,
            rolls_in_turn=state.rolls_in_turn,
            is_guhkle_attempt=state.is_guhkle_attempt,
            hot_dice_count=state.hot_dice_count,
            permanent_multiplier=state.permanent_multiplier,
            high_score=state.high_score,
            upgrade_options=list(state.upgrade_options),
            potential_upgrade_position=state.potential_upgrade_position,
            vacant_slot_upgrades={
                position: [UpgradeModel.model_validate(u) for u in upgrades]
                for position, upgrades in state.vacant_slot_upgrades.items()
            },
        )

    def to_state(self) -> GameState:
        """Rebuild the engine state. Raises ValueError on an unsupported version."""
        if self.version != SNAPSHOT_VERSION:
            raise ValueError(f"Unsupported snapshot version {self.version}.")
        return GameState(
            dice=tuple(d.to_die() for d in self.dice),
            banked_score=self.banked_score,
            total_score=self.total_score,
            threshold=self.threshold,
            turn_number=self.turn_number,
            game_over=self.game_over,
            message=self.message,
            scoring_rules=tuple(r.to_rule() for r in self.scoring_rules),
            extra_dice_pool=self.extra_dice_pool,
            last_roll_sparkled=self.last_roll_sparkled,
            rolls_in_turn=self.rolls_in_turn,
            is_guhkle_attempt=self.is_guhkle_attempt,
            hot_dice_count=self.hot_dice_count,
            permanent_multiplier=self.permanent_multiplier,
            high_score=self.high_score,
            upgrade_options=tuple(self.upgrade_options),
            potential_upgrade_position=self.potential_upgrade_position,
            vacant_slot_upgrades={
                position: tuple(u.to_upgrade() for u in upgrades)
                for position, upgrades in self.vacant_slot_upgrades.items()
            },
        )


def dump_state(state: GameState) -> str:
    """Serialize a GameState to JSON."""
    return GameSnapshot.from_state(state).model_dump_json()


def load_state(data: str | bytes) -> GameState:
    """Rehydrate a GameState from `dump_state` output."""
    return GameSnapshot.model_validate_json(data).to_state()
