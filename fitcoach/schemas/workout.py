"""
Pydantic models for generated workouts.

Agent replies are loose: numbers arrive as strings, strings as numbers,
and the per-exercise note sometimes comes back as ``text``. The
validators below accept those variants without inventing values.
"""

from typing import Optional, List, Literal

from pydantic import BaseModel, Field, field_validator, model_validator


class ExerciseSpec(BaseModel):
    """One exercise prescription."""
    name: str = Field(..., min_length=1)
    sets: int = Field(..., ge=0)
    reps: str = Field(..., description="Count or range, e.g. '10-12'")
    rest: str = Field(..., description="Duration, e.g. '60 seconds'")
    note: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _text_as_note(cls, data):
        if isinstance(data, dict) and "note" not in data and "text" in data:
            data = dict(data)
            data["note"] = data.pop("text")
        return data

    @field_validator("reps", "rest", mode="before")
    @classmethod
    def _number_as_text(cls, value):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class GeneratedArtifact(BaseModel):
    """A named workout produced by batch generation. Identity is the name."""
    name: str = Field(..., min_length=1)
    difficulty: int = Field(..., ge=1, le=5)
    focus: str
    items: List[ExerciseSpec] = []


class WorkoutPreferences(BaseModel):
    """What the user wants out of a batch of workouts."""
    goal: str = ""
    fitnessLevel: str = ""
    daysPerWeek: Optional[int] = None
    workoutPath: str = ""
    equipment: List[str] = []
    sessionMinutes: Optional[int] = None


class DayPlan(BaseModel):
    """One day of a weekly plan."""
    day: str
    exercises: List[ExerciseSpec] = []


class WorkoutPlan(BaseModel):
    """Weekly workout plan with nutrition advice."""
    weeklyPlan: List[DayPlan]
    nutritionAdvice: str = ""

    def exercise_names(self) -> List[str]:
        """Every exercise name in plan order."""
        return [exercise.name for day in self.weeklyPlan for exercise in day.exercises]


class WorkoutPlanResponse(BaseModel):
    """A generated plan together with the conversation it was logged in."""
    conversationName: str
    workoutPlan: WorkoutPlan
    completed: bool = False


class WorkoutFeedback(BaseModel):
    """User feedback after a workout."""
    workoutId: str
    difficulty: Literal["easy", "just right", "hard"]
    completedExercises: List[str] = []


class CompletionAnalysis(BaseModel):
    """Agent commentary on a completed workout."""
    analysis: str
    recommendations: str = ""
