"""
Workout pipeline.

Stateless orchestration between generation, progression and storage.
Collaborators are passed in, so the same functions run against real
services or test doubles.
"""

import json
import logging
from datetime import date
from typing import List, Optional

from pydantic import TypeAdapter

from common.storage.base import StateStore
from fitcoach.schemas.profile import ProgressUpdate
from fitcoach.schemas.workout import GeneratedArtifact, WorkoutPreferences
from fitcoach.services.generation import BatchPlanGenerator
from fitcoach.services.progress import ProgressService

logger = logging.getLogger(__name__)

_WORKOUT_LIST = TypeAdapter(List[GeneratedArtifact])


def workouts_key(profile_id: str) -> str:
    return f"workouts:{profile_id}"


async def generate_workouts(
    generator: BatchPlanGenerator,
    progress_service: ProgressService,
    store: StateStore,
    profile_id: str,
    preferences: WorkoutPreferences,
    count: int,
    focus_hint: Optional[str] = None,
) -> List[GeneratedArtifact]:
    """
    Generate a batch of workouts for a stored profile and keep it.

    The generator works from a snapshot; the profile is only touched
    afterwards, to pay the plan reward. A failed batch stores nothing and
    pays nothing.

    Args:
        generator: Batch plan generator
        progress_service: Progress service (profile snapshot and reward)
        store: State store for the generated batch
        profile_id: Profile the workouts are for
        preferences: Workout preferences
        count: Number of workouts wanted
        focus_hint: Optional emphasis

    Returns:
        The generated workouts
    """
    snapshot = await progress_service.get_profile(profile_id)

    workouts = await generator.generate(preferences, snapshot, count, focus_hint)

    payload = [workout.model_dump(mode="json") for workout in workouts]
    await store.set(workouts_key(profile_id), json.dumps(payload))
    await progress_service.record_plan_generated(profile_id)

    logger.info(f"Generated {len(workouts)}/{count} workouts for {profile_id}")
    return workouts


async def load_workouts(store: StateStore, profile_id: str) -> List[GeneratedArtifact]:
    """The last generated batch for a profile, or an empty list."""
    raw = await store.get(workouts_key(profile_id))
    if raw is None:
        return []
    return _WORKOUT_LIST.validate_json(raw)


async def complete_workout(
    progress_service: ProgressService,
    store: StateStore,
    profile_id: str,
    workout_name: str,
    today: Optional[date] = None,
) -> ProgressUpdate:
    """
    Mark a generated workout as done and apply the progression.

    Raises:
        KeyError: If ``workout_name`` is not in the profile's last batch
    """
    workouts = await load_workouts(store, profile_id)
    if not any(workout.name == workout_name for workout in workouts):
        raise KeyError(f"Unknown workout '{workout_name}' for {profile_id}")

    update = await progress_service.complete_workout(profile_id, today=today)

    if update.newAchievements:
        logger.info(f"{profile_id} unlocked {', '.join(update.newAchievements)}")
    return update
