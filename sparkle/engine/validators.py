"""
Sparkle - Input Validation Utilities

Provides validation functions for game engine inputs. All validators
either return validated data or raise descriptive ValueError exceptions.
"""

from typing import Sequence

from sparkle.engine.base import PIP_FACES, SPARK, DieValue


def validate_dice_values(
    values: Sequence[DieValue],
    allow_spark: bool = True,
    min_count: int = 0,
    max_count: int | None = None
) -> tuple[DieValue, ...]:
    """
    Validate and normalize dice values.

    Args:
        values: Sequence of face values to validate
        allow_spark: Whether the wildcard face is accepted
        min_count: Minimum number of dice required
        max_count: Maximum number of dice allowed (None = no limit)

    Returns:
        Validated values as a tuple

    Raises:
        ValueError: If validation fails
    """
    values_tuple = tuple(values)
    count = len(values_tuple)

    if count < min_count:
        raise ValueError(f"At least {min_count} dice required, got {count}.")

    if max_count is not None and count > max_count:
        raise ValueError(f"At most {max_count} dice allowed, got {count}.")

    for i, value in enumerate(values_tuple):
        if value == SPARK:
            if not allow_spark:
                raise ValueError(f"Die value at index {i} is a spark, which is not allowed here.")
            continue
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"Die value at index {i} must be an integer, got {type(value).__name__}.")
        if value not in PIP_FACES:
            raise ValueError(f"Die value at index {i} is {value}, must be between 1 and 6.")

    return values_tuple


def validate_score(score: int, allow_negative: bool = False) -> int:
    """
    Validate a score value.

    Raises:
        ValueError: If score is invalid
    """
    if isinstance(score, bool) or not isinstance(score, int):
        raise ValueError(f"Score must be an integer, got {type(score).__name__}.")

    if not allow_negative and score < 0:
        raise ValueError(f"Score cannot be negative, got {score}.")

    return score
