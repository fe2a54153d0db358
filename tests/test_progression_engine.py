"""Unit tests for the progression engine transitions."""

import pytest
from datetime import date, timedelta

from fitcoach.schemas.profile import ProgressStats, UserProfile
from fitcoach.services.progress import (
    ACHIEVEMENTS,
    add_experience_points,
    award_coins,
    check_achievements,
    experience_for_level,
    level_for_experience,
    unlock_achievements,
    update_streak,
)


def _profile(**overrides):
    return UserProfile(name="Sam", **overrides)


# ─────────────────────────────────────────────────────────────────
# Levels and experience
# ─────────────────────────────────────────────────────────────────


class TestExperience:
    @pytest.mark.parametrize(
        "experience, level",
        [(0, 1), (50, 1), (99, 1), (100, 2), (399, 2), (400, 3), (900, 4), (10_000, 11)],
    )
    def test_level_for_experience(self, experience, level):
        assert level_for_experience(experience) == level

    def test_experience_for_level_is_the_threshold(self):
        for level in range(1, 20):
            threshold = experience_for_level(level)
            assert level_for_experience(threshold) == level
            if threshold:
                assert level_for_experience(threshold - 1) == level - 1

    def test_fifty_points_stay_at_level_one(self):
        profile = add_experience_points(_profile(), 50)

        assert profile.experiencePoints == 50
        assert profile.level == 1

    def test_hundred_points_reach_level_two(self):
        profile = add_experience_points(_profile(), 100)

        assert profile.level == 2

    def test_zero_delta_is_a_no_op(self):
        profile = _profile(experiencePoints=250, level=2)

        assert add_experience_points(profile, 0) == profile

    def test_cumulative_equals_single_delta(self):
        stepwise = add_experience_points(add_experience_points(_profile(), 70), 60)
        at_once = add_experience_points(_profile(), 130)

        assert stepwise == at_once

    def test_total_floored_at_zero(self):
        profile = add_experience_points(_profile(experiencePoints=30), -100)

        assert profile.experiencePoints == 0
        assert profile.level == 1

    def test_input_profile_unchanged(self):
        profile = _profile()

        add_experience_points(profile, 500)

        assert profile.experiencePoints == 0


class TestCoins:
    def test_award(self):
        assert award_coins(_profile(coins=5), 10).coins == 15

    def test_floored_at_zero(self):
        assert award_coins(_profile(coins=5), -10).coins == 0


# ─────────────────────────────────────────────────────────────────
# Streaks
# ─────────────────────────────────────────────────────────────────


class TestStreak:
    def test_first_workout_starts_streak(self, today):
        profile = update_streak(_profile(), today)

        assert profile.currentStreak == 1
        assert profile.longestStreak == 1
        assert profile.lastWorkoutDate == today

    def test_consecutive_day_extends(self, today):
        profile = _profile(currentStreak=3, longestStreak=3, lastWorkoutDate=today - timedelta(days=1))

        profile = update_streak(profile, today)

        assert profile.currentStreak == 4
        assert profile.longestStreak == 4

    def test_same_day_is_idempotent(self, today):
        once = update_streak(_profile(), today)
        twice = update_streak(once, today)

        assert twice == once

    def test_gap_restarts_streak(self, today):
        profile = _profile(currentStreak=5, longestStreak=8, lastWorkoutDate=today - timedelta(days=3))

        profile = update_streak(profile, today)

        assert profile.currentStreak == 1
        assert profile.longestStreak == 8
        assert profile.lastWorkoutDate == today

    def test_date_before_last_workout_leaves_profile_unchanged(self, today):
        profile = _profile(currentStreak=2, longestStreak=2, lastWorkoutDate=today)

        assert update_streak(profile, today - timedelta(days=2)) == profile

    def test_longest_never_below_current(self, today):
        profile = _profile()
        day = today
        for offset in [0, 1, 2, 5, 6, 6, 7, 20]:
            day = today + timedelta(days=offset)
            profile = update_streak(profile, day)
            assert profile.longestStreak >= profile.currentStreak

        assert profile.longestStreak == 3

    def test_empty_stored_date_restarts_streak(self, today):
        profile = UserProfile.model_validate({
            "name": "Sam",
            "currentStreak": 4,
            "longestStreak": 4,
            "lastWorkoutDate": "",
        })

        assert update_streak(profile, today).currentStreak == 1


# ─────────────────────────────────────────────────────────────────
# Achievements
# ─────────────────────────────────────────────────────────────────


class TestAchievements:
    def test_week_warrior_unlocks_once(self, today):
        # A six-day streak has already earned first_workout, so only the
        # streak achievement is new
        profile = _profile(
            currentStreak=6,
            longestStreak=6,
            lastWorkoutDate=today - timedelta(days=1),
            unlockedAchievements=frozenset({"first_workout"}),
        )
        stats = ProgressStats(totalWorkouts=7)

        profile = update_streak(profile, today)
        new_ids = check_achievements(profile, stats)
        assert new_ids == ["week_warrior"]

        profile = unlock_achievements(profile, new_ids)
        assert check_achievements(profile, stats) == []

    def test_ids_in_catalog_order(self):
        profile = _profile(currentStreak=30, longestStreak=30, level=5, experiencePoints=1600)
        stats = ProgressStats(totalWorkouts=100, bmiEntries=1)

        new_ids = check_achievements(profile, stats)

        catalog_ids = [a.id for a in ACHIEVEMENTS]
        assert new_ids == catalog_ids

    def test_nothing_met(self):
        assert check_achievements(_profile(), ProgressStats()) == []

    def test_unlock_is_monotonic(self):
        profile = unlock_achievements(_profile(), ["first_workout"])
        profile = unlock_achievements(profile, ["health_check"])

        assert profile.unlockedAchievements == {"first_workout", "health_check"}

    def test_unlock_known_ids_returns_same_profile(self):
        profile = _profile(unlockedAchievements=frozenset({"first_workout"}))

        assert unlock_achievements(profile, ["first_workout"]) is profile

    def test_catalog_ids_are_unique(self):
        ids = [a.id for a in ACHIEVEMENTS]
        assert len(ids) == len(set(ids))
