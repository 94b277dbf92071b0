"""
Sparkle - Test Configuration and Fixtures

Common fixtures for all test modules. Dice randomness is injected through a
scripted factory: queued faces come out first, then a seeded RNG takes over.
"""

import random
from collections import deque
from typing import Any, Callable

import pytest

from sparkle.engine.base import Die, DieValue, GameConfig, Upgrade
from sparkle.engine.dice import DiceFactory, next_die_id
from sparkle.engine.state import GameState
from sparkle.messaging.commands import Command
from sparkle.messaging.engine import GameEngine
from sparkle.realtime.session import GameSession


class ScriptedDiceFactory(DiceFactory):
    """DiceFactory whose next faces can be queued up front."""

    def __init__(self, seed: int = 0) -> None:
        super().__init__(random.Random(seed))
        self.faces: deque[DieValue] = deque()

    def queue(self, *faces: DieValue) -> None:
        self.faces.extend(faces)

    def roll_face(self, is_spark_die: bool = False) -> DieValue:
        if self.faces:
            return self.faces.popleft()
        return super().roll_face(is_spark_die)


# =============================================================================
# ENGINE FIXTURES
# =============================================================================

@pytest.fixture
def config() -> GameConfig:
    """Default game configuration."""
    return GameConfig()


@pytest.fixture
def dice() -> ScriptedDiceFactory:
    return ScriptedDiceFactory()


@pytest.fixture
def engine(config: GameConfig, dice: ScriptedDiceFactory) -> GameEngine:
    return GameEngine(config, dice)


@pytest.fixture
def new_game(engine: GameEngine) -> GameState:
    """Fresh game straight from the engine."""
    return engine.new_game()


# =============================================================================
# STATE BUILDERS
# =============================================================================

@pytest.fixture
def make_dice() -> Callable[..., tuple[Die, ...]]:
    """
    Build a pool from face values, in slots 1..N.

    Keyword args `staged` and `banked` are collections of slot numbers;
    `upgrades` maps slot number to a tuple of Upgrade.
    """
    def _make(
        *values: DieValue,
        staged: tuple[int, ...] = (),
        banked: tuple[int, ...] = (),
        upgrades: dict[int, tuple[Upgrade, ...]] | None = None,
    ) -> tuple[Die, ...]:
        upgrades = upgrades or {}
        return tuple(
            Die(
                id=next_die_id(),
                value=value,
                position=position,
                staged=position in staged,
                banked=position in banked,
                upgrades=upgrades.get(position, ()),
            )
            for position, value in enumerate(values, start=1)
        )

    return _make


@pytest.fixture
def rolled_state(make_dice) -> Callable[..., GameState]:
    """
    Build a mid-turn state (one roll taken) from face values.

    Extra keyword args are passed to GameState.
    """
    def _make(
        *values: DieValue,
        staged: tuple[int, ...] = (),
        banked: tuple[int, ...] = (),
        upgrades: dict[int, tuple[Upgrade, ...]] | None = None,
        **fields: Any,
    ) -> GameState:
        fields.setdefault("rolls_in_turn", 1)
        fields.setdefault("extra_dice_pool", 5)
        return GameState(
            dice=make_dice(*values, staged=staged, banked=banked, upgrades=upgrades),
            **fields,
        )

    return _make


@pytest.fixture
def run(engine: GameEngine) -> Callable[..., tuple[GameState, list]]:
    """Dispatch commands in order; return the final state and every event."""
    def _run(state: GameState, *commands: Command) -> tuple[GameState, list]:
        events: list = []
        for command in commands:
            result = engine.dispatch(state, command)
            state = result.state
            events.extend(result.events)
        return state, events

    return _run


@pytest.fixture
def session(engine: GameEngine) -> GameSession:
    """Session holding a fresh game."""
    return GameSession(engine)
