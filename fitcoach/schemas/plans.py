"""
Pydantic models for the single-shot coaching documents.
"""

from typing import List

from pydantic import BaseModel, field_validator


class Challenge(BaseModel):
    """A fitness challenge."""
    id: int
    name: str
    description: str
    duration: str
    difficulty: str
    completed: bool = False

    @field_validator("duration", "difficulty", mode="before")
    @classmethod
    def _number_as_text(cls, value):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class Supplement(BaseModel):
    """A supplement recommendation."""
    id: int
    name: str
    dosage: str
    benefit: str


class MealPlan(BaseModel):
    """One day of meals."""
    breakfast: str
    lunch: str
    dinner: str
    snacks: List[str] = []


class CustomExercise(BaseModel):
    """A user-defined exercise."""
    id: int
    name: str
    description: str
