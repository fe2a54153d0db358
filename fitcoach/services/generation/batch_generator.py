"""
Batch workout generation.

Produces N uniquely named workouts by splitting the request into at most
three smaller remote calls. Smaller replies are less likely to be cut off
by the agent's generation limit, and names are deduplicated here because
independent calls can repeat each other.
"""

import logging
import math
from typing import Any, List, Optional, Set

from pydantic import ValidationError

from common.ai.base import AIProvider
from common.utils.exceptions import ExtractionError, GenerationChunkError
from fitcoach.schemas.profile import UserProfile
from fitcoach.schemas.workout import ExerciseSpec, GeneratedArtifact, WorkoutPreferences
from fitcoach.services.extraction import StructuredResponseExtractor
from fitcoach.services.generation.prompts import (
    SYSTEM_PROMPT,
    describe_athlete,
    workout_batch_prompt,
)

logger = logging.getLogger(__name__)


def plan_chunks(count: int, max_chunks: int = 3) -> List[int]:
    """
    Split ``count`` into at most ``max_chunks`` sizes of ceil(count / max_chunks).

    >>> plan_chunks(5)
    [2, 2, 1]
    >>> plan_chunks(7)
    [3, 3, 1]
    """
    if count < 1:
        raise ValueError("count must be at least 1")

    chunk_size = math.ceil(count / max_chunks)
    sizes = []
    remaining = count
    while remaining > 0:
        size = min(chunk_size, remaining)
        sizes.append(size)
        remaining -= size
    return sizes


class BatchPlanGenerator:
    """
    Generates a batch of named workouts with client-side deduplication.
    """

    def __init__(
        self,
        agent: AIProvider,
        extractor: Optional[StructuredResponseExtractor] = None,
        max_chunks: int = 3,
        default_focus: str = "General",
        default_difficulty: int = 3,
        max_tokens: int = 4000,
        temperature: float = 0.7,
    ):
        """
        Initialize BatchPlanGenerator.

        Args:
            agent: Remote agent answering the prompts
            extractor: Reply parser (a default one is created if omitted)
            max_chunks: Upper bound on remote calls per batch
            default_focus: Focus used when a workout has none
            default_difficulty: Difficulty used when a workout has none
            max_tokens: Token limit passed to the agent per chunk
            temperature: Sampling temperature passed to the agent
        """
        self._agent = agent
        self._extractor = extractor or StructuredResponseExtractor()
        self._max_chunks = max_chunks
        self._default_focus = default_focus
        self._default_difficulty = default_difficulty
        self._max_tokens = max_tokens
        self._temperature = temperature

    async def generate(
        self,
        preferences: WorkoutPreferences,
        user_context: UserProfile,
        count: int,
        focus_hint: Optional[str] = None,
    ) -> List[GeneratedArtifact]:
        """
        Generate up to ``count`` workouts with pairwise distinct names.

        Args:
            preferences: Goal, level, equipment and so on
            user_context: Read-only profile snapshot describing the athlete
            count: Number of workouts wanted (>= 1)
            focus_hint: Optional emphasis, e.g. "core stability"

        Returns:
            Workouts in generation order; fewer than ``count`` if the agent
            repeated itself

        Raises:
            ValueError: If count < 1
            GenerationChunkError: If any chunk's call or extraction fails
        """
        sizes = plan_chunks(count, self._max_chunks)
        athlete = describe_athlete(user_context)

        seen_names: Set[str] = set()
        workouts: List[GeneratedArtifact] = []

        for index, size in enumerate(sizes):
            prompt = workout_batch_prompt(preferences, athlete, size, focus_hint)
            candidates = await self._request_chunk(index, prompt)

            kept = 0
            for raw in candidates:
                if len(workouts) >= count:
                    break

                artifact = self._build_artifact(raw)
                if artifact is None:
                    continue

                if artifact.name in seen_names:
                    logger.debug(f"Discarding duplicate workout '{artifact.name}' from chunk {index}")
                    continue

                seen_names.add(artifact.name)
                workouts.append(artifact)
                kept += 1

            logger.info(
                f"Chunk {index + 1}/{len(sizes)}: requested {size}, "
                f"received {len(candidates)}, kept {kept}"
            )

        return workouts

    async def _request_chunk(self, index: int, prompt: str) -> List[Any]:
        """Run one remote call and return its raw workout candidates."""
        try:
            reply = await self._agent.chat(
                prompt,
                system_prompt=SYSTEM_PROMPT,
                max_tokens=self._max_tokens,
                temperature=self._temperature,
            )
        except Exception as e:
            logger.error(f"Chunk {index} remote call failed: {e}")
            raise GenerationChunkError(
                f"Remote call for chunk {index} failed",
                chunk_index=index,
                details={"error": str(e)},
            ) from e

        try:
            document = self._extractor.extract(reply)
        except ExtractionError as e:
            logger.error(f"Chunk {index} reply could not be parsed")
            raise GenerationChunkError(
                f"Could not extract workouts from chunk {index}",
                chunk_index=index,
                details=e.to_dict(),
            ) from e

        candidates = document.get("workouts")
        if not isinstance(candidates, list):
            raise GenerationChunkError(
                f"Chunk {index} reply has no 'workouts' list",
                chunk_index=index,
                details={"keys": sorted(document.keys())},
            )
        return candidates

    def _build_artifact(self, raw: Any) -> Optional[GeneratedArtifact]:
        """Assemble a workout from one candidate, or None if it has no name."""
        if not isinstance(raw, dict):
            logger.warning(f"Skipping non-object workout candidate: {raw!r}")
            return None

        name = raw.get("name")
        if not isinstance(name, str) or not name.strip():
            logger.warning("Skipping workout candidate without a name")
            return None

        focus = raw.get("focus")
        if not isinstance(focus, str) or not focus.strip():
            focus = self._default_focus

        raw_items = raw.get("exercises", raw.get("items")) or []
        items: List[ExerciseSpec] = []
        if isinstance(raw_items, list):
            for raw_item in raw_items:
                try:
                    items.append(ExerciseSpec.model_validate(raw_item))
                except ValidationError:
                    logger.warning(f"Skipping malformed exercise in '{name}'")

        return GeneratedArtifact(
            name=name,
            difficulty=self._coerce_difficulty(raw.get("difficulty")),
            focus=focus,
            items=items,
        )

    def _coerce_difficulty(self, value: Any) -> int:
        """Integer difficulty clamped to 1..5, or the default when unusable."""
        if isinstance(value, bool) or value is None:
            return self._default_difficulty
        try:
            difficulty = int(float(value))
        except (TypeError, ValueError, OverflowError):
            return self._default_difficulty
        return max(1, min(5, difficulty))
