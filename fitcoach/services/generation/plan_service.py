"""
Coaching plan service.

Single-shot generations: weekly plans, plan adjustments, challenges,
supplements, meal plans, custom exercises, completion analysis, quotes,
progress reports, warm-ups and recovery tips. Each call prompts the agent
in its own named conversation, extracts and validates the reply, logs the
result back into the conversation and caches the validated document under
the profile id.
"""

import json
import logging
import time
from typing import Any, List, Optional, Tuple

from common.ai.base import AIProvider
from common.storage.base import StateStore
from common.utils.exceptions import SchemaMismatchError
from fitcoach.schemas.plans import Challenge, CustomExercise, MealPlan, Supplement
from fitcoach.schemas.profile import UserProfile
from fitcoach.schemas.workout import (
    CompletionAnalysis,
    WorkoutFeedback,
    WorkoutPlan,
    WorkoutPlanResponse,
)
from fitcoach.services.extraction import (
    ExtractedDocument,
    StructuredResponseExtractor,
    validate_document,
    validate_items,
)
from fitcoach.services.generation import prompts

logger = logging.getLogger(__name__)

# Owner of documents that are not tied to one profile
SHARED_OWNER = "all"


def document_cache_key(kind: str, owner: str) -> str:
    """State store key for the last validated document of a kind."""
    return f"documents:{kind}:{owner}"


class CoachPlanService:
    """
    Generates coaching documents for a user profile.

    ``profile_id`` keys the document cache; the profile itself only feeds
    the prompt and the conversation name. A reply that fails validation
    is never cached.
    """

    def __init__(
        self,
        agent: AIProvider,
        store: StateStore,
        extractor: Optional[StructuredResponseExtractor] = None,
        max_tokens: int = 4000,
        temperature: float = 0.7,
    ):
        """
        Initialize CoachPlanService.

        Args:
            agent: Remote agent answering the prompts
            store: State store for the document cache
            extractor: Reply parser (a default one is created if omitted)
            max_tokens: Token limit passed to the agent
            temperature: Sampling temperature passed to the agent
        """
        self._agent = agent
        self._store = store
        self._extractor = extractor or StructuredResponseExtractor()
        self._max_tokens = max_tokens
        self._temperature = temperature

    # ─────────────────────────────────────────────────────────────────
    # Workout plans
    # ─────────────────────────────────────────────────────────────────

    async def create_workout_plan(
        self,
        profile_id: str,
        profile: UserProfile,
        workout_path: str,
    ) -> WorkoutPlanResponse:
        """Generate a weekly workout plan with nutrition advice."""
        conversation_name, document, raw = await self._generate(
            prefix="Workout",
            profile=profile,
            prompt=prompts.workout_plan_prompt(profile, workout_path),
        )
        plan = validate_document(document, WorkoutPlan, raw_response=raw)
        await self._finish("workoutPlan", profile_id, conversation_name, document, plan.model_dump(mode="json"))

        return WorkoutPlanResponse(
            conversationName=conversation_name,
            workoutPlan=plan,
            completed=False,
        )

    async def adjust_workout_plan(
        self,
        profile_id: str,
        profile: UserProfile,
        feedback: WorkoutFeedback,
    ) -> WorkoutPlan:
        """Regenerate the weekly plan taking workout feedback into account."""
        conversation_name, document, raw = await self._generate(
            prefix="AdjustWorkout",
            profile=profile,
            prompt=prompts.adjust_plan_prompt(profile, feedback),
        )
        plan = validate_document(document, WorkoutPlan, raw_response=raw)
        await self._finish("workoutPlan", profile_id, conversation_name, document, plan.model_dump(mode="json"))
        return plan

    async def log_workout_completion(
        self,
        profile_id: str,
        profile: UserProfile,
        plan: WorkoutPlan,
        feedback: WorkoutFeedback,
    ) -> CompletionAnalysis:
        """Ask the agent to analyse a completed workout."""
        conversation_name, document, raw = await self._generate(
            prefix="WorkoutCompletion",
            profile=profile,
            prompt=prompts.completion_prompt(profile, plan, feedback),
        )
        analysis = validate_document(document, CompletionAnalysis, raw_response=raw)
        await self._finish("completion", profile_id, conversation_name, document, analysis.model_dump(mode="json"))
        logger.info(f"Workout completion logged and analysed for {profile_id}")
        return analysis

    # ─────────────────────────────────────────────────────────────────
    # Lists
    # ─────────────────────────────────────────────────────────────────

    async def get_challenges(self, profile_id: str, profile: UserProfile) -> List[Challenge]:
        conversation_name, document, raw = await self._generate(
            prefix="Challenges",
            profile=profile,
            prompt=prompts.challenges_prompt(profile),
        )
        challenges = validate_items(document, Challenge, "challenges", raw_response=raw)
        await self._finish(
            "challenges", profile_id, conversation_name, document,
            [c.model_dump(mode="json") for c in challenges],
        )
        return challenges

    async def get_supplements(self, profile_id: str, profile: UserProfile) -> List[Supplement]:
        conversation_name, document, raw = await self._generate(
            prefix="Supplements",
            profile=profile,
            prompt=prompts.supplements_prompt(profile),
        )
        supplements = validate_items(document, Supplement, "supplements", raw_response=raw)
        await self._finish(
            "supplements", profile_id, conversation_name, document,
            [s.model_dump(mode="json") for s in supplements],
        )
        return supplements

    async def add_custom_exercise(
        self,
        profile_id: str,
        profile: UserProfile,
        name: str,
        description: str,
    ) -> List[CustomExercise]:
        """
        Add a custom exercise to the user's list.

        Previously cached custom exercises are named in the prompt so the
        agent returns the full list.
        """
        existing = await self.get_custom_exercises(profile_id)

        conversation_name, document, raw = await self._generate(
            prefix="CustomExercise",
            profile=profile,
            prompt=prompts.custom_exercise_prompt(
                profile, name, description, [e.name for e in existing]
            ),
        )
        exercises = validate_items(document, CustomExercise, "customExercises", raw_response=raw)
        await self._finish(
            "customExercises", profile_id, conversation_name, document,
            [e.model_dump(mode="json") for e in exercises],
        )
        return exercises

    async def get_custom_exercises(self, profile_id: str) -> List[CustomExercise]:
        """Cached custom exercises; empty if none, or if the cache is unreadable."""
        cached = await self.get_cached_document("customExercises", profile_id)
        if cached is None:
            return []
        try:
            return validate_items(cached, CustomExercise, "customExercises")
        except SchemaMismatchError:
            logger.warning(f"Ignoring unreadable custom exercise cache for {profile_id}")
            return []

    # ─────────────────────────────────────────────────────────────────
    # Single documents
    # ─────────────────────────────────────────────────────────────────

    async def get_meal_plan(self, profile_id: str, profile: UserProfile) -> MealPlan:
        conversation_name, document, raw = await self._generate(
            prefix="MealPlan",
            profile=profile,
            prompt=prompts.meal_plan_prompt(profile),
        )
        meal_plan = validate_document(document, MealPlan, raw_response=raw)
        await self._finish("mealPlan", profile_id, conversation_name, document, meal_plan.model_dump(mode="json"))
        return meal_plan

    async def get_motivational_quote(self) -> str:
        return await self._get_text(
            kind="quote",
            prefix="MotivationalQuote",
            owner=SHARED_OWNER,
            conversation_owner=SHARED_OWNER,
            prompt=prompts.quote_prompt(),
        )

    async def get_progress_report(self, profile_id: str, profile: UserProfile) -> str:
        return await self._get_text(
            kind="progressReport",
            prefix="ProgressReport",
            owner=profile_id,
            conversation_owner=profile.name,
            prompt=prompts.progress_report_prompt(profile),
        )

    async def get_warmup_routine(self, profile_id: str, profile: UserProfile) -> str:
        return await self._get_text(
            kind="warmupRoutine",
            prefix="WarmupRoutine",
            owner=profile_id,
            conversation_owner=profile.name,
            prompt=prompts.warmup_prompt(profile),
        )

    async def get_recovery_tips(self, profile_id: str, profile: UserProfile) -> str:
        return await self._get_text(
            kind="recoveryTips",
            prefix="RecoveryTips",
            owner=profile_id,
            conversation_owner=profile.name,
            prompt=prompts.recovery_prompt(profile),
        )

    # ─────────────────────────────────────────────────────────────────
    # Cache
    # ─────────────────────────────────────────────────────────────────

    async def get_cached_document(self, kind: str, owner: str) -> Optional[ExtractedDocument]:
        """Last validated document of ``kind`` for ``owner`` (a profile id or "all")."""
        raw = await self._store.get(document_cache_key(kind, owner))
        if raw is None:
            return None
        return json.loads(raw)

    # ─────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────

    async def _generate(
        self,
        prefix: str,
        prompt: str,
        profile: Optional[UserProfile] = None,
        conversation_owner: Optional[str] = None,
    ) -> Tuple[str, ExtractedDocument, Any]:
        """Prompt and extract; returns (conversation, document, raw reply)."""
        owner = conversation_owner or (profile.name if profile else SHARED_OWNER)
        conversation_name = f"{prefix}_{owner}_{int(time.time() * 1000)}"

        logger.debug(f"Sending prompt in conversation {conversation_name}")
        reply = await self._agent.chat(
            prompt,
            system_prompt=prompts.SYSTEM_PROMPT,
            conversation_name=conversation_name,
            max_tokens=self._max_tokens,
            temperature=self._temperature,
        )

        return conversation_name, self._extractor.extract(reply), reply

    async def _get_text(
        self,
        kind: str,
        prefix: str,
        owner: str,
        conversation_owner: str,
        prompt: str,
    ) -> str:
        """Generate a document holding one text field named ``kind``."""
        conversation_name, document, raw = await self._generate(
            prefix=prefix,
            prompt=prompt,
            conversation_owner=conversation_owner,
        )
        value = document.get(kind)
        if not isinstance(value, str):
            raise SchemaMismatchError(
                f"Document has no '{kind}' text",
                raw_response=raw,
                details={"keys": sorted(document.keys())},
            )
        await self._finish(kind, owner, conversation_name, document, {kind: value})
        return value

    async def _finish(
        self,
        kind: str,
        owner: str,
        conversation_name: str,
        document: ExtractedDocument,
        payload: Any,
    ) -> None:
        """Cache a validated document and log it back to the conversation."""
        await self._store.set(document_cache_key(kind, owner), json.dumps(document))
        await self._agent.record_message(
            conversation_name,
            "assistant",
            json.dumps(payload, indent=2),
        )
