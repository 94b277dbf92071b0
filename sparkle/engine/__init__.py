"""
Sparkle Game Engine.

Pure Python game logic with zero UI/storage dependencies.
Handles scoring, die upgrades, the game state snapshot and its selectors.
"""

from sparkle.engine.base import (
    SPARK,
    Die,
    GameConfig,
    RuleId,
    ScoringGroup,
    ScoringResult,
    ScoringRule,
    Upgrade,
    UpgradeType,
)
from sparkle.engine.dice import DiceFactory
from sparkle.engine.scoring import DEFAULT_RULES, ScoringEvaluator, score
from sparkle.engine.state import (
    GameState,
    calculate_threshold,
    can_bank,
    can_end_turn,
    can_reroll,
    can_roll,
    create_initial_state,
    staged_score,
)
from sparkle.engine.upgrades import UPGRADE_CONFIGS, apply_upgrades

__all__ = [
    # Data Classes
    "Die",
    "GameConfig",
    "GameState",
    "ScoringGroup",
    "ScoringResult",
    "ScoringRule",
    "Upgrade",
    # Enums and constants
    "RuleId",
    "UpgradeType",
    "SPARK",
    "DEFAULT_RULES",
    "UPGRADE_CONFIGS",
    # Scoring and dice
    "DiceFactory",
    "ScoringEvaluator",
    "apply_upgrades",
    "score",
    # State and selectors
    "calculate_threshold",
    "can_bank",
    "can_end_turn",
    "can_reroll",
    "can_roll",
    "create_initial_state",
    "staged_score",
]
