"""
Prompt templates for the workout agent.

Every prompt ends with an example of the JSON document expected back.
The agent does not always honor it, which is why replies go through the
extractor.
"""

import json
from typing import Any, Dict, Iterable, Optional

from fitcoach.schemas.profile import UserProfile
from fitcoach.schemas.workout import WorkoutPlan, WorkoutPreferences, WorkoutFeedback


SYSTEM_PROMPT = (
    "You are an experienced strength and conditioning coach. "
    "Answer only with the JSON document requested, no commentary."
)

EXERCISE_EXAMPLE: Dict[str, Any] = {
    "name": "Exercise Name",
    "sets": 3,
    "reps": "10-12",
    "rest": "60 seconds",
    "text": "Additional details about the exercise",
}

WORKOUT_BATCH_SCHEMA: Dict[str, Any] = {
    "workouts": [
        {
            "name": "Unique Workout Name",
            "difficulty": 3,
            "focus": "Upper Body",
            "exercises": [EXERCISE_EXAMPLE],
        }
    ]
}

WEEKLY_PLAN_SCHEMA: Dict[str, Any] = {
    "weeklyPlan": [{"day": "Day 1", "exercises": [EXERCISE_EXAMPLE]}],
    "nutritionAdvice": "Detailed nutrition advice here",
}

CHALLENGES_SCHEMA: Dict[str, Any] = {
    "challenges": [
        {
            "id": 1,
            "name": "Challenge Name",
            "description": "Detailed description of the challenge",
            "duration": "Duration of the challenge",
            "difficulty": "Difficulty level",
            "completed": False,
        }
    ]
}

SUPPLEMENTS_SCHEMA: Dict[str, Any] = {
    "supplements": [
        {
            "id": 1,
            "name": "Supplement Name",
            "dosage": "Dosage information",
            "benefit": "Health benefit of the supplement",
        }
    ]
}

MEAL_PLAN_SCHEMA: Dict[str, Any] = {
    "breakfast": "Detailed breakfast plan",
    "lunch": "Detailed lunch plan",
    "dinner": "Detailed dinner plan",
    "snacks": ["List of snacks"],
}

CUSTOM_EXERCISES_SCHEMA: Dict[str, Any] = {
    "customExercises": [
        {"id": 1, "name": "Exercise Name", "description": "Detailed description of the exercise"}
    ]
}

COMPLETION_SCHEMA: Dict[str, Any] = {
    "analysis": "Brief analysis of the workout completion",
    "recommendations": "Recommendations for future workouts",
}

QUOTE_SCHEMA: Dict[str, Any] = {"quote": "Motivational quote here"}
PROGRESS_REPORT_SCHEMA: Dict[str, Any] = {"progressReport": "Detailed progress report here"}
WARMUP_SCHEMA: Dict[str, Any] = {"warmupRoutine": "Step by step warm-up routine"}
RECOVERY_SCHEMA: Dict[str, Any] = {"recoveryTips": "Recovery tips here"}


def format_schema(schema: Dict[str, Any]) -> str:
    """Closing instruction with the example document."""
    return (
        "Please format the response as a JSON object with the following structure:\n"
        + json.dumps(schema, indent=2)
    )


def describe_athlete(profile: UserProfile) -> str:
    """One-paragraph description of the user for prompt context."""
    parts = []
    if profile.gender or profile.age:
        parts.append(f"a {profile.gender or 'person'} aged {profile.age or 'unknown'}")
    else:
        parts.append("a person")
    if profile.feet is not None:
        parts.append(f"height {profile.feet}'{profile.inches or 0}\"")
    if profile.weight is not None:
        parts.append(f"weight {profile.weight:g} lbs")
    if profile.goal:
        parts.append(f"with a fitness goal of {profile.goal}")
    if profile.fitnessLevel:
        parts.append(f"current fitness level {profile.fitnessLevel}")
    if profile.daysPerWeek:
        parts.append(f"able to train {profile.daysPerWeek} days per week")
    return ", ".join(parts)


def workout_batch_prompt(
    preferences: WorkoutPreferences,
    athlete: str,
    count: int,
    focus_hint: Optional[str] = None,
) -> str:
    """Ask for ``count`` distinct named workouts."""
    lines = [
        f"Create {count} distinct workouts for {athlete}.",
    ]
    if preferences.goal:
        lines.append(f"The training goal is {preferences.goal}.")
    if preferences.fitnessLevel:
        lines.append(f"Pitch them at a {preferences.fitnessLevel} level.")
    if preferences.workoutPath:
        lines.append(f"Follow the {preferences.workoutPath} workout path.")
    if preferences.equipment:
        lines.append(f"Available equipment: {', '.join(preferences.equipment)}.")
    if preferences.sessionMinutes:
        lines.append(f"Each session should take about {preferences.sessionMinutes} minutes.")
    if focus_hint:
        lines.append(f"Emphasize {focus_hint}.")
    lines.append(
        "Give every workout a unique name, a difficulty from 1 to 5, a focus, "
        "and a list of exercises with sets, reps and rest periods."
    )
    lines.append(format_schema(WORKOUT_BATCH_SCHEMA))
    return "\n".join(lines)


def workout_plan_prompt(profile: UserProfile, workout_path: str) -> str:
    return "\n".join([
        f"Create a comprehensive workout plan for {describe_athlete(profile)}, "
        f"following the {workout_path or 'general fitness'} workout path.",
        "Include specific exercises, sets, reps, and rest periods for each day. "
        "Also, provide nutrition advice tailored to their goal.",
        format_schema(WEEKLY_PLAN_SCHEMA),
    ])


def adjust_plan_prompt(profile: UserProfile, feedback: WorkoutFeedback) -> str:
    return "\n".join([
        f"Adjust the workout plan for {describe_athlete(profile)}.",
        f"Consider the following feedback: {feedback.model_dump_json()}.",
        format_schema(WEEKLY_PLAN_SCHEMA),
    ])


def completion_prompt(
    profile: UserProfile,
    plan: WorkoutPlan,
    feedback: WorkoutFeedback,
) -> str:
    return "\n".join([
        f"Log the completion of a workout for {describe_athlete(profile)}.",
        f"The workout plan was: {plan.model_dump_json()}.",
        f"The user's feedback is: {feedback.model_dump_json()}.",
        "Please provide a brief analysis of the workout completion and any "
        "recommendations for future workouts.",
        format_schema(COMPLETION_SCHEMA),
    ])


def challenges_prompt(profile: UserProfile) -> str:
    return "\n".join([
        f"Generate a series of fitness challenges for {describe_athlete(profile)}.",
        "Each challenge should have an id, name, description, duration, "
        "difficulty level, and a completion status.",
        format_schema(CHALLENGES_SCHEMA),
    ])


def supplements_prompt(profile: UserProfile) -> str:
    return "\n".join([
        f"Recommend dietary supplements for {describe_athlete(profile)}.",
        "Each supplement should have an id, name, dosage, and benefit.",
        format_schema(SUPPLEMENTS_SCHEMA),
    ])


def meal_plan_prompt(profile: UserProfile) -> str:
    return "\n".join([
        f"Generate a detailed meal plan for {describe_athlete(profile)}.",
        format_schema(MEAL_PLAN_SCHEMA),
    ])


def custom_exercise_prompt(
    profile: UserProfile,
    name: str,
    description: str,
    existing: Iterable[str] = (),
) -> str:
    lines = [
        f"Add a custom exercise for {describe_athlete(profile)}.",
        f'The exercise name is "{name}" and the description is "{description}".',
    ]
    existing = list(existing)
    if existing:
        lines.append(f"Previously added exercises: {', '.join(existing)}.")
    lines.append(
        "Please generate a list of custom exercises including this new one "
        "and any previously added exercises."
    )
    lines.append(format_schema(CUSTOM_EXERCISES_SCHEMA))
    return "\n".join(lines)


def quote_prompt() -> str:
    return "\n".join([
        "Provide a motivational quote for fitness enthusiasts.",
        format_schema(QUOTE_SCHEMA),
    ])


def progress_report_prompt(profile: UserProfile) -> str:
    return "\n".join([
        f"Generate a progress report for {profile.name}.",
        f"Consider their fitness goal of {profile.goal or 'general fitness'} and current "
        f"fitness level of {profile.fitnessLevel or 'unknown'}.",
        f"They are level {profile.level} with {profile.experiencePoints} experience points, "
        f"a current streak of {profile.currentStreak} days and a best streak of "
        f"{profile.longestStreak} days.",
        format_schema(PROGRESS_REPORT_SCHEMA),
    ])


def warmup_prompt(profile: UserProfile) -> str:
    return "\n".join([
        f"Suggest a warm-up routine for {describe_athlete(profile)}.",
        format_schema(WARMUP_SCHEMA),
    ])


def recovery_prompt(profile: UserProfile) -> str:
    return "\n".join([
        f"Give post-workout recovery tips for {describe_athlete(profile)}.",
        format_schema(RECOVERY_SCHEMA),
    ])
