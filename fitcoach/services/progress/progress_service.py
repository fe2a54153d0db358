"""
Progress service.

Applies tracked user actions to the persisted profile. Every action is a
complete read-modify-write cycle under the profile's lock: load, run the
progression transitions in order, then save the whole profile record
in one write. Achievements are checked only for
the actions that can earn them (workout completion and BMI recording).
"""

import logging
from datetime import date, datetime, timezone
from typing import List, Optional, Sequence

from common.utils.exceptions import ProfileNotFoundError
from fitcoach.schemas.profile import (
    BmiEntry,
    BmiUpdate,
    ProfileRecord,
    ProgressStats,
    ProgressUpdate,
    UserProfile,
)
from fitcoach.services.progress.achievements import ACHIEVEMENTS, Achievement
from fitcoach.services.progress.health_metrics import bmi_category, calculate_bmi
from fitcoach.services.progress.profile_repository import ProfileRepository
from fitcoach.services.progress.progression_engine import (
    add_experience_points,
    award_coins,
    check_achievements,
    unlock_achievements,
    update_streak,
)

logger = logging.getLogger(__name__)

# Progression fields reset on creation and never taken from profile edits
PROGRESSION_FIELDS = (
    "level",
    "experiencePoints",
    "currentStreak",
    "longestStreak",
    "lastWorkoutDate",
    "coins",
    "unlockedAchievements",
)


class ProgressService:
    """
    Orchestrates progression transitions and persistence.
    """

    def __init__(
        self,
        repository: ProfileRepository,
        workout_xp: int = 50,
        workout_coins: int = 10,
        bmi_xp: int = 10,
        plan_coins: int = 10,
        catalog: Sequence[Achievement] = ACHIEVEMENTS,
    ):
        """
        Initialize ProgressService.

        Args:
            repository: Profile persistence
            workout_xp: Experience per completed workout
            workout_coins: Coins per completed workout
            bmi_xp: Experience per BMI measurement
            plan_coins: Coins per generated plan
            catalog: Achievements that can be unlocked
        """
        self._repository = repository
        self._workout_xp = workout_xp
        self._workout_coins = workout_coins
        self._bmi_xp = bmi_xp
        self._plan_coins = plan_coins
        self._catalog = tuple(catalog)
        self._rewards = {a.id: a.coinReward for a in self._catalog}

    async def save_profile(self, profile_id: str, details: UserProfile) -> UserProfile:
        """
        Create a profile or update its personal details.

        Progression fields in ``details`` are ignored: a new profile starts
        at level 1 with zeroed counters, an existing one keeps its own.
        """
        async with self._repository.lock(profile_id):
            record = await self._repository.load_record(profile_id)
            personal = details.model_dump(exclude=set(PROGRESSION_FIELDS))

            if record is None:
                record = ProfileRecord(profile=UserProfile(**personal))
                logger.info(f"Created profile {profile_id}")
            else:
                record = record.model_copy(update={
                    "profile": record.profile.model_copy(update=personal),
                })

            await self._repository.save_record(profile_id, record)
            return record.profile

    async def get_profile(self, profile_id: str) -> UserProfile:
        """Read-only snapshot of a stored profile."""
        return (await self._load(profile_id)).profile

    async def get_stats(self, profile_id: str) -> ProgressStats:
        return await self._repository.load_stats(profile_id)

    async def get_bmi_history(self, profile_id: str) -> List[BmiEntry]:
        return await self._repository.load_bmi_history(profile_id)

    async def complete_workout(
        self,
        profile_id: str,
        today: Optional[date] = None,
    ) -> ProgressUpdate:
        """
        Apply a workout completion.

        Streak, then experience, then coins, then the achievement check on
        the updated profile. Achievement coin bonuses are paid on unlock.
        """
        today = today or date.today()

        async with self._repository.lock(profile_id):
            record = await self._load(profile_id)
            profile = record.profile
            start_level = profile.level
            start_coins = profile.coins

            profile = update_streak(profile, today)
            profile = add_experience_points(profile, self._workout_xp)
            profile = award_coins(profile, self._workout_coins)

            stats = record.stats.model_copy(update={"totalWorkouts": record.stats.totalWorkouts + 1})
            profile, unlocked = self._unlock(profile, stats)

            await self._repository.save_record(
                profile_id,
                record.model_copy(update={"profile": profile, "stats": stats}),
            )

        return ProgressUpdate(
            profile=profile,
            stats=stats,
            newAchievements=unlocked,
            experienceGained=self._workout_xp,
            coinsGained=profile.coins - start_coins,
            leveledUp=profile.level > start_level,
        )

    async def record_bmi(
        self,
        profile_id: str,
        weight_lbs: float,
        now: Optional[datetime] = None,
    ) -> BmiUpdate:
        """
        Record a BMI measurement from a new body weight.

        Raises:
            ProfileNotFoundError: If the profile does not exist
            ValueError: If the profile has no height or the weight is not positive
        """
        now = now or datetime.now(timezone.utc)

        async with self._repository.lock(profile_id):
            record = await self._load(profile_id)
            profile = record.profile
            if profile.feet is None:
                raise ValueError("Profile height is required to calculate BMI")

            bmi = calculate_bmi(weight_lbs, profile.feet, profile.inches or 0)
            entry = BmiEntry(date=now, bmi=bmi)
            stats = record.stats.model_copy(update={"bmiEntries": record.stats.bmiEntries + 1})

            profile = profile.model_copy(update={"weight": weight_lbs})
            profile = add_experience_points(profile, self._bmi_xp)
            profile, unlocked = self._unlock(profile, stats)

            await self._repository.save_record(
                profile_id,
                record.model_copy(update={
                    "profile": profile,
                    "stats": stats,
                    "bmiHistory": [*record.bmiHistory, entry],
                }),
            )

        logger.info(f"Recorded BMI {bmi} for {profile_id}")
        return BmiUpdate(
            entry=entry,
            category=bmi_category(bmi),
            profile=profile,
            newAchievements=unlocked,
        )

    async def record_plan_generated(self, profile_id: str) -> UserProfile:
        """Count a generated plan and pay its coin reward."""
        async with self._repository.lock(profile_id):
            record = await self._load(profile_id)

            profile = award_coins(record.profile, self._plan_coins)
            stats = record.stats.model_copy(update={"plansGenerated": record.stats.plansGenerated + 1})

            await self._repository.save_record(
                profile_id,
                record.model_copy(update={"profile": profile, "stats": stats}),
            )
            return profile

    async def _load(self, profile_id: str) -> ProfileRecord:
        record = await self._repository.load_record(profile_id)
        if record is None:
            raise ProfileNotFoundError(profile_id)
        return record

    def _unlock(self, profile: UserProfile, stats: ProgressStats):
        """Check, unlock and pay bonuses; returns (profile, newly unlocked ids)."""
        unlocked = check_achievements(profile, stats, self._catalog)
        if not unlocked:
            return profile, []

        profile = unlock_achievements(profile, unlocked)
        bonus = sum(self._rewards.get(achievement_id, 0) for achievement_id in unlocked)
        if bonus:
            profile = award_coins(profile, bonus)
        return profile, unlocked
