"""
Achievement catalog.

Static configuration, not engine state: which achievements exist, what
unlocks them and the coin bonus paid once on unlock.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Tuple

from fitcoach.schemas.profile import ProgressStats, UserProfile


@dataclass(frozen=True)
class Achievement:
    """One catalog entry."""
    id: str
    name: str
    description: str
    unlockCondition: Callable[[UserProfile, ProgressStats], bool]
    coinReward: int = 0

    def is_met(self, profile: UserProfile, stats: ProgressStats) -> bool:
        return bool(self.unlockCondition(profile, stats))


ACHIEVEMENTS: Tuple[Achievement, ...] = (
    Achievement(
        id="first_workout",
        name="First Workout",
        description="Complete your first workout",
        unlockCondition=lambda profile, stats: stats.totalWorkouts >= 1,
        coinReward=10,
    ),
    Achievement(
        id="week_warrior",
        name="Week Warrior",
        description="Work out seven days in a row",
        unlockCondition=lambda profile, stats: profile.currentStreak >= 7,
        coinReward=50,
    ),
    Achievement(
        id="ten_strong",
        name="Ten Strong",
        description="Complete ten workouts",
        unlockCondition=lambda profile, stats: stats.totalWorkouts >= 10,
        coinReward=25,
    ),
    Achievement(
        id="consistency_king",
        name="Consistency King",
        description="Work out thirty days in a row",
        unlockCondition=lambda profile, stats: profile.currentStreak >= 30,
        coinReward=200,
    ),
    Achievement(
        id="century_club",
        name="Century Club",
        description="Complete one hundred workouts",
        unlockCondition=lambda profile, stats: stats.totalWorkouts >= 100,
        coinReward=250,
    ),
    Achievement(
        id="level_five",
        name="Rising Star",
        description="Reach level 5",
        unlockCondition=lambda profile, stats: profile.level >= 5,
        coinReward=100,
    ),
    Achievement(
        id="health_check",
        name="Health Check",
        description="Record your BMI",
        unlockCondition=lambda profile, stats: stats.bmiEntries >= 1,
        coinReward=5,
    ),
)

ACHIEVEMENTS_BY_ID: Dict[str, Achievement] = {a.id: a for a in ACHIEVEMENTS}
