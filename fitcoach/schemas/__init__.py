"""
Schemas module - Pydantic models for profiles, workouts and coaching documents.
"""

from fitcoach.schemas.profile import (
    UserProfile,
    ProgressStats,
    BmiEntry,
    ProfileRecord,
    ProgressUpdate,
    BmiUpdate,
)
from fitcoach.schemas.workout import (
    ExerciseSpec,
    GeneratedArtifact,
    WorkoutPreferences,
    DayPlan,
    WorkoutPlan,
    WorkoutPlanResponse,
    WorkoutFeedback,
    CompletionAnalysis,
)
from fitcoach.schemas.plans import Challenge, Supplement, MealPlan, CustomExercise

__all__ = [
    # Profile
    "UserProfile",
    "ProgressStats",
    "BmiEntry",
    "ProfileRecord",
    "ProgressUpdate",
    "BmiUpdate",
    # Workouts
    "ExerciseSpec",
    "GeneratedArtifact",
    "WorkoutPreferences",
    "DayPlan",
    "WorkoutPlan",
    "WorkoutPlanResponse",
    "WorkoutFeedback",
    "CompletionAnalysis",
    # Plans
    "Challenge",
    "Supplement",
    "MealPlan",
    "CustomExercise",
]
