"""
Pipelines - Stateless orchestration of generation, progression and storage.
"""

from fitcoach.pipelines.workouts import (
    generate_workouts,
    load_workouts,
    complete_workout,
    workouts_key,
)

__all__ = [
    "generate_workouts",
    "load_workouts",
    "complete_workout",
    "workouts_key",
]
