"""
FitCoach core.

Structured extraction from workout-agent replies, batch plan generation,
and the progression engine that turns workouts into levels, streaks,
coins and achievements.
"""

__version__ = "1.0.0"
