"""
Pydantic models for the user profile aggregate and progress results.

Field names are the persisted document names; a profile serialized with
``model_dump_json()`` loads back to an equal value.
"""

from datetime import date, datetime
from typing import Optional, List, FrozenSet

from pydantic import BaseModel, ConfigDict, Field, field_validator, field_serializer


class UserProfile(BaseModel):
    """
    Persisted user profile: identity, body data and progression state.

    Immutable; progression transitions return updated copies.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    age: Optional[int] = None
    gender: str = ""
    feet: Optional[int] = None
    inches: Optional[int] = None
    weight: Optional[float] = Field(None, description="Body weight in lbs")
    goal: str = ""
    fitnessLevel: str = ""
    daysPerWeek: Optional[int] = None
    bio: str = ""
    interests: str = ""

    level: int = Field(1, ge=1)
    experiencePoints: int = Field(0, ge=0)
    currentStreak: int = Field(0, ge=0)
    longestStreak: int = Field(0, ge=0)
    lastWorkoutDate: Optional[date] = None
    coins: int = Field(0, ge=0)
    unlockedAchievements: FrozenSet[str] = frozenset()

    @field_validator("age", "feet", "inches", "weight", "daysPerWeek", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        # Onboarding forms submit untouched inputs as ""
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("lastWorkoutDate", mode="before")
    @classmethod
    def _empty_date(cls, value):
        if value == "":
            return None
        return value

    @field_validator("longestStreak")
    @classmethod
    def _longest_covers_current(cls, value, info):
        current = info.data.get("currentStreak", 0)
        if value < current:
            raise ValueError("longestStreak must be >= currentStreak")
        return value

    @field_serializer("lastWorkoutDate")
    def _serialize_date(self, value: Optional[date]) -> str:
        return value.isoformat() if value else ""

    @field_serializer("unlockedAchievements")
    def _serialize_achievements(self, value: FrozenSet[str]) -> List[str]:
        return sorted(value)


class ProgressStats(BaseModel):
    """Lifetime activity counters fed to achievement checks."""
    totalWorkouts: int = Field(0, ge=0)
    bmiEntries: int = Field(0, ge=0)
    plansGenerated: int = Field(0, ge=0)


class BmiEntry(BaseModel):
    """One BMI measurement."""
    date: datetime
    bmi: float


class ProfileRecord(BaseModel):
    """
    Everything persisted for one profile.

    Stored as a single document so one action lands with a single write.
    """
    profile: UserProfile
    stats: ProgressStats = Field(default_factory=ProgressStats)
    bmiHistory: List[BmiEntry] = []


class ProgressUpdate(BaseModel):
    """Outcome of a tracked workout completion."""
    profile: UserProfile
    stats: ProgressStats
    newAchievements: List[str] = []
    experienceGained: int = 0
    coinsGained: int = 0
    leveledUp: bool = False


class BmiUpdate(BaseModel):
    """Outcome of recording a BMI measurement."""
    entry: BmiEntry
    category: str
    profile: UserProfile
    newAchievements: List[str] = []
