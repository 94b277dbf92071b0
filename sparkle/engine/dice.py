"""
Sparkle - Dice Factory

Creates and re-rolls dice. Die ids come from a process-wide counter so they
stay unique across every factory and every game, not just within a batch.
"""

import itertools
import random
from dataclasses import replace
from typing import Mapping, Sequence

from sparkle.engine.base import PIP_FACES, SPARK_DIE_FACES, Die, DieValue, Upgrade

_die_ids = itertools.count(1)


def next_die_id() -> int:
    """Next process-unique die id."""
    return next(_die_ids)


class DiceFactory:
    """
    Source of fresh dice.

    Randomness goes through `roll_face`; tests substitute a scripted factory
    or a seeded `random.Random`.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    def roll_face(self, is_spark_die: bool = False) -> DieValue:
        """Roll one face for a regular or spark die."""
        faces = SPARK_DIE_FACES if is_spark_die else PIP_FACES
        return self.rng.choice(faces)

    def create_die(
        self,
        position: int,
        is_spark_die: bool = False,
        upgrades: tuple[Upgrade, ...] = ()
    ) -> Die:
        """Roll a brand new die for an empty slot."""
        return Die(
            id=next_die_id(),
            value=self.roll_face(is_spark_die),
            position=position,
            upgrades=upgrades,
            is_spark_die=is_spark_die,
        )

    def create_pool(self, count: int, spark_die: bool = False) -> tuple[Die, ...]:
        """
        Roll `count` new dice in slots 1..count.

        Args:
            count: Number of dice
            spark_die: Put the wildcard spark die in slot 1
        """
        return tuple(
            self.create_die(position, is_spark_die=spark_die and position == 1)
            for position in range(1, count + 1)
        )

    def reroll(self, dice: Sequence[Die]) -> tuple[Die, ...]:
        """
        Re-roll dice in place.

        Each die gets a new id and value and is neither staged nor banked;
        slot and upgrades are preserved.
        """
        return tuple(
            replace(
                die,
                id=next_die_id(),
                value=self.roll_face(die.is_spark_die),
                staged=False,
                banked=False,
            )
            for die in dice
        )

    def fresh_pool(
        self,
        count: int,
        existing: Sequence[Die] = (),
        spark_die: bool = False,
        vacant_upgrades: Mapping[int, tuple[Upgrade, ...]] | None = None
    ) -> tuple[Die, ...]:
        """
        Roll a full turn-start pool of `count` dice in slots 1..count.

        Occupied slots are re-rolled with their upgrades. Empty slots get a
        new die carrying any upgrades parked for that slot.
        """
        vacant_upgrades = vacant_upgrades or {}
        by_position = {die.position: die for die in existing}
        pool: list[Die] = []
        for position in range(1, count + 1):
            current = by_position.get(position)
            if current is not None:
                pool.extend(self.reroll([current]))
            else:
                pool.append(self.create_die(
                    position,
                    is_spark_die=spark_die and position == 1,
                    upgrades=vacant_upgrades.get(position, ()),
                ))
        return tuple(pool)
