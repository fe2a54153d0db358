"""Tests for the workout pipeline."""

import pytest

from common.utils.exceptions import GenerationChunkError, ProfileNotFoundError
from fitcoach.pipelines import complete_workout, generate_workouts, load_workouts
from fitcoach.services.generation import BatchPlanGenerator

from tests.factories import workouts_reply


PROFILE_ID = "sam"


@pytest.fixture
def generator(mock_agent):
    return BatchPlanGenerator(mock_agent)


class TestGenerateWorkouts:
    @pytest.mark.asyncio
    async def test_stores_batch_and_pays_reward(
        self, generator, mock_agent, progress_service, store, sample_profile, preferences
    ):
        await progress_service.save_profile(PROFILE_ID, sample_profile)
        mock_agent.chat.side_effect = [workouts_reply("Leg Day"), workouts_reply("Pull Day")]

        workouts = await generate_workouts(generator, progress_service, store, PROFILE_ID, preferences, count=2)

        assert [w.name for w in workouts] == ["Leg Day", "Pull Day"]
        assert await load_workouts(store, PROFILE_ID) == workouts
        assert (await progress_service.get_profile(PROFILE_ID)).coins == 10
        assert (await progress_service.get_stats(PROFILE_ID)).plansGenerated == 1

    @pytest.mark.asyncio
    async def test_failed_batch_changes_nothing(
        self, generator, mock_agent, progress_service, store, sample_profile, preferences
    ):
        await progress_service.save_profile(PROFILE_ID, sample_profile)
        mock_agent.chat.return_value = "no workouts today"

        with pytest.raises(GenerationChunkError):
            await generate_workouts(generator, progress_service, store, PROFILE_ID, preferences, count=2)

        assert await load_workouts(store, PROFILE_ID) == []
        assert (await progress_service.get_profile(PROFILE_ID)).coins == 0

    @pytest.mark.asyncio
    async def test_unknown_profile(self, generator, mock_agent, progress_service, store, preferences):
        with pytest.raises(ProfileNotFoundError):
            await generate_workouts(generator, progress_service, store, "nobody", preferences, count=1)

        mock_agent.chat.assert_not_awaited()


class TestCompleteWorkout:
    @pytest.mark.asyncio
    async def test_completes_generated_workout(
        self, generator, mock_agent, progress_service, store, sample_profile, preferences, today
    ):
        await progress_service.save_profile(PROFILE_ID, sample_profile)
        mock_agent.chat.return_value = workouts_reply("Leg Day")
        await generate_workouts(generator, progress_service, store, PROFILE_ID, preferences, count=1)

        update = await complete_workout(progress_service, store, PROFILE_ID, "Leg Day", today=today)

        assert update.newAchievements == ["first_workout"]
        assert update.profile.currentStreak == 1

    @pytest.mark.asyncio
    async def test_unknown_workout(self, progress_service, store, sample_profile, today):
        await progress_service.save_profile(PROFILE_ID, sample_profile)

        with pytest.raises(KeyError):
            await complete_workout(progress_service, store, PROFILE_ID, "Leg Day", today=today)

        assert (await progress_service.get_stats(PROFILE_ID)).totalWorkouts == 0
