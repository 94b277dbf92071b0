"""
Sparkle - Application Settings

Loads configuration from SPARKLE_* environment variables (or a .env file)
using Pydantic Settings. The engine itself only ever sees a GameConfig.
"""

import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from sparkle.engine.base import GameConfig


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Dice
    starting_dice: int = Field(default=6, ge=1)
    max_dice: int = Field(default=6, ge=1)
    starting_extra_dice: int = Field(default=5, ge=0)
    extra_die_grant: int = Field(default=6, ge=0)
    spark_die: bool = False

    # Progression
    threshold_base: int = Field(default=100, gt=0)
    threshold_growth: int = Field(default=2, ge=1)
    upgrade_offer_interval: int = Field(default=3, ge=1)
    upgrade_options_count: int = Field(default=3, ge=1)
    hot_dice_per_multiplier: int = Field(default=3, ge=1)

    # Delayed actions
    bust_delay_ms: int = Field(default=1000, ge=0)
    auto_reroll_delay_ms: int = Field(default=600, ge=0)
    guhkle_delay_ms: int = Field(default=1000, ge=0)

    # Application
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="SPARKLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def to_game_config(self) -> GameConfig:
        """Build the engine config. Raises ValueError on inconsistent values."""
        return GameConfig(
            starting_dice=self.starting_dice,
            max_dice=self.max_dice,
            starting_extra_dice=self.starting_extra_dice,
            threshold_base=self.threshold_base,
            threshold_growth=self.threshold_growth,
            bust_delay_ms=self.bust_delay_ms,
            auto_reroll_delay_ms=self.auto_reroll_delay_ms,
            guhkle_delay_ms=self.guhkle_delay_ms,
            upgrade_offer_interval=self.upgrade_offer_interval,
            upgrade_options_count=self.upgrade_options_count,
            hot_dice_per_multiplier=self.hot_dice_per_multiplier,
            extra_die_grant=self.extra_die_grant,
            spark_die=self.spark_die,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached singleton settings instance."""
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Apply the configured log level to the sparkle loggers."""
    settings = settings or get_settings()
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level {settings.log_level!r}.")
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger("sparkle").setLevel(level)
