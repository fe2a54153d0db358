"""Shared test fixtures for FitCoach tests."""

import pytest
from datetime import date
from unittest.mock import AsyncMock, MagicMock

from common.ai.base import AIProvider
from common.storage import InMemoryStateStore
from fitcoach.schemas.profile import UserProfile
from fitcoach.schemas.workout import WorkoutPreferences
from fitcoach.services.progress import ProfileRepository, ProgressService


@pytest.fixture
def store():
    return InMemoryStateStore()


@pytest.fixture
def mock_agent():
    agent = MagicMock(spec=AIProvider)
    agent.chat = AsyncMock()
    agent.record_message = AsyncMock(return_value=None)
    agent.describe = MagicMock(return_value={"provider": "mock"})
    return agent


@pytest.fixture
def sample_profile():
    return UserProfile(
        name="Sam",
        age=29,
        gender="female",
        feet=5,
        inches=6,
        weight=140,
        goal="build strength",
        fitnessLevel="intermediate",
        daysPerWeek=4,
    )


@pytest.fixture
def preferences():
    return WorkoutPreferences(
        goal="build strength",
        fitnessLevel="intermediate",
        daysPerWeek=4,
        workoutPath="strength",
        equipment=["barbell", "dumbbells"],
    )


@pytest.fixture
def repository(store):
    return ProfileRepository(store)


@pytest.fixture
def progress_service(repository):
    return ProgressService(repository, workout_xp=50, workout_coins=10, bmi_xp=10, plan_coins=10)


@pytest.fixture
def today():
    return date(2026, 3, 10)
