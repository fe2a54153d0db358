"""
FitCoach application settings.

Extends the base settings with generation and reward configuration.
"""

from functools import lru_cache

from common.config import BaseAppSettings


class Settings(BaseAppSettings):
    """FitCoach-specific settings."""

    # ==========================================================================
    # Batch Generation
    # ==========================================================================
    # Upper bound on remote calls per batch
    MAX_GENERATION_CHUNKS: int = 3

    # Fallbacks for fields the agent leaves out
    DEFAULT_ARTIFACT_FOCUS: str = "General"
    DEFAULT_ARTIFACT_DIFFICULTY: int = 3

    # ==========================================================================
    # Rewards
    # ==========================================================================
    WORKOUT_XP_REWARD: int = 50
    WORKOUT_COIN_REWARD: int = 10
    BMI_XP_REWARD: int = 10
    PLAN_COIN_REWARD: int = 10


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
