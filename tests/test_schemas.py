"""Tests for profile models and body metrics."""

import pytest
from datetime import date
from pydantic import ValidationError

from fitcoach.schemas.profile import UserProfile
from fitcoach.schemas.workout import ExerciseSpec
from fitcoach.services.progress import bmi_category, calculate_bmi


# ─────────────────────────────────────────────────────────────────
# UserProfile
# ─────────────────────────────────────────────────────────────────


class TestUserProfile:
    def test_json_round_trip(self, sample_profile):
        profile = sample_profile.model_copy(update={
            "experiencePoints": 420,
            "level": 3,
            "currentStreak": 2,
            "longestStreak": 9,
            "lastWorkoutDate": date(2026, 3, 9),
            "coins": 75,
            "unlockedAchievements": frozenset({"week_warrior", "first_workout"}),
        })

        restored = UserProfile.model_validate_json(profile.model_dump_json())

        assert restored == profile

    def test_empty_date_is_persisted_as_blank(self, sample_profile):
        dumped = sample_profile.model_dump(mode="json")

        assert dumped["lastWorkoutDate"] == ""
        assert UserProfile.model_validate(dumped).lastWorkoutDate is None

    def test_achievements_serialized_sorted(self, sample_profile):
        profile = sample_profile.model_copy(update={"unlockedAchievements": frozenset({"b", "a"})})

        assert profile.model_dump(mode="json")["unlockedAchievements"] == ["a", "b"]

    def test_unparseable_date_rejected(self):
        with pytest.raises(ValidationError):
            UserProfile(name="Sam", lastWorkoutDate="last tuesday")

    def test_longest_streak_below_current_rejected(self):
        with pytest.raises(ValidationError):
            UserProfile(name="Sam", currentStreak=5, longestStreak=3)

    def test_blank_form_inputs(self):
        profile = UserProfile(name="Sam", age="", feet=" ", weight="")

        assert profile.age is None
        assert profile.feet is None
        assert profile.weight is None

    def test_profile_is_immutable(self, sample_profile):
        with pytest.raises(ValidationError):
            sample_profile.coins = 100


class TestExerciseSpec:
    def test_text_becomes_note(self):
        spec = ExerciseSpec.model_validate({"name": "Squat", "sets": 3, "reps": 10, "rest": 60, "text": "Slow"})

        assert spec.note == "Slow"
        assert spec.reps == "10"
        assert spec.rest == "60"

    def test_negative_sets_rejected(self):
        with pytest.raises(ValidationError):
            ExerciseSpec(name="Squat", sets=-1, reps="10", rest="60 seconds")


# ─────────────────────────────────────────────────────────────────
# BMI
# ─────────────────────────────────────────────────────────────────


class TestBmi:
    def test_calculate(self):
        assert calculate_bmi(150, 5, 6) == 24.21

    def test_feet_only(self):
        assert calculate_bmi(180, 6) == 24.41

    @pytest.mark.parametrize("weight, feet, inches", [(0, 5, 6), (150, 0, 0), (-10, 5, 0)])
    def test_rejects_non_positive(self, weight, feet, inches):
        with pytest.raises(ValueError):
            calculate_bmi(weight, feet, inches)

    @pytest.mark.parametrize(
        "bmi, category",
        [(17.0, "Underweight"), (18.5, "Normal weight"), (24.99, "Normal weight"), (25.0, "Overweight"), (31.2, "Obese")],
    )
    def test_category(self, bmi, category):
        assert bmi_category(bmi) == category
