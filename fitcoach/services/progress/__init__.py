"""
Progress services - Streaks, experience, coins and achievements.
"""

from fitcoach.services.progress.achievements import ACHIEVEMENTS, ACHIEVEMENTS_BY_ID, Achievement
from fitcoach.services.progress.progression_engine import (
    level_for_experience,
    experience_for_level,
    update_streak,
    add_experience_points,
    award_coins,
    check_achievements,
    unlock_achievements,
)
from fitcoach.services.progress.health_metrics import calculate_bmi, bmi_category
from fitcoach.services.progress.profile_repository import ProfileRepository
from fitcoach.services.progress.progress_service import ProgressService

__all__ = [
    # Catalog
    "ACHIEVEMENTS",
    "ACHIEVEMENTS_BY_ID",
    "Achievement",
    # Transitions
    "level_for_experience",
    "experience_for_level",
    "update_streak",
    "add_experience_points",
    "award_coins",
    "check_achievements",
    "unlock_achievements",
    # Health metrics
    "calculate_bmi",
    "bmi_category",
    # Persistence and orchestration
    "ProfileRepository",
    "ProgressService",
]
