"""
Progression engine.

Pure transition functions over the user profile. Each takes a profile
value and returns a new one; nothing here touches storage or the clock.

After a tracked action the transitions run in a fixed order:
update_streak, add_experience_points, award_coins, then
check_achievements / unlock_achievements, so that streak-based
achievements see the streak that includes today.

Precondition: ``lastWorkoutDate`` is a date or empty. Profiles are
validated when loaded, so an unparseable date never reaches here.
"""

import logging
import math
from datetime import date
from typing import Iterable, List, Sequence

from fitcoach.schemas.profile import ProgressStats, UserProfile
from fitcoach.services.progress.achievements import ACHIEVEMENTS, Achievement

logger = logging.getLogger(__name__)

XP_PER_LEVEL_UNIT = 100


def level_for_experience(experience_points: int) -> int:
    """
    Level derived from experience: floor(sqrt(xp / 100)) + 1.

    Computed with integer square root so large totals stay exact.
    """
    if experience_points <= 0:
        return 1
    return math.isqrt(experience_points // XP_PER_LEVEL_UNIT) + 1


def experience_for_level(level: int) -> int:
    """Minimum experience needed to reach ``level``."""
    if level <= 1:
        return 0
    return XP_PER_LEVEL_UNIT * (level - 1) ** 2


def update_streak(profile: UserProfile, today: date) -> UserProfile:
    """
    Record a workout on ``today`` against the streak counters.

    One day after the last workout extends the streak, a longer gap (or no
    previous workout) restarts it at 1, and a second workout on the same
    day changes nothing.
    """
    last = profile.lastWorkoutDate
    current = profile.currentStreak

    if last is None:
        current = 1
    else:
        diff_days = (today - last).days
        if diff_days == 1:
            current += 1
        elif diff_days > 1:
            current = 1
        elif diff_days < 0:
            # Clock moved backwards: keep the later date and counters
            logger.warning(f"Workout date {today} precedes last workout {last}; streak unchanged")
            return profile
        # diff_days == 0: already counted today

    return profile.model_copy(update={
        "currentStreak": current,
        "longestStreak": max(profile.longestStreak, current),
        "lastWorkoutDate": today,
    })


def add_experience_points(profile: UserProfile, delta: int) -> UserProfile:
    """Add experience (total floored at 0) and re-derive the level."""
    experience = max(0, profile.experiencePoints + delta)
    level = level_for_experience(experience)

    if level > profile.level:
        logger.info(f"{profile.name} reached level {level}")

    return profile.model_copy(update={
        "experiencePoints": experience,
        "level": level,
    })


def award_coins(profile: UserProfile, amount: int) -> UserProfile:
    """Add coins (total floored at 0)."""
    return profile.model_copy(update={"coins": max(0, profile.coins + amount)})


def check_achievements(
    profile: UserProfile,
    stats: ProgressStats,
    catalog: Sequence[Achievement] = ACHIEVEMENTS,
) -> List[str]:
    """
    Ids of achievements whose condition now holds and that are not yet unlocked.

    Returned in catalog order. Ids already in ``unlockedAchievements`` are
    never returned again.
    """
    return [
        achievement.id
        for achievement in catalog
        if achievement.id not in profile.unlockedAchievements
        and achievement.is_met(profile, stats)
    ]


def unlock_achievements(profile: UserProfile, achievement_ids: Iterable[str]) -> UserProfile:
    """Add ids to ``unlockedAchievements``; the set only ever grows."""
    new_ids = frozenset(achievement_ids) - profile.unlockedAchievements
    if not new_ids:
        return profile

    for achievement_id in sorted(new_ids):
        logger.info(f"{profile.name} unlocked achievement {achievement_id}")

    return profile.model_copy(update={
        "unlockedAchievements": profile.unlockedAchievements | new_ids,
    })
