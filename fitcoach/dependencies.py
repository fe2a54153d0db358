"""
Service wiring for the FitCoach core.

Builds the remote agent, the state store and the services once at startup
and hands out the shared instances afterwards.
"""

import logging
from typing import Optional

from common.ai import AIProvider, AGiXTProvider, ClaudeProvider, OpenAIProvider
from common.storage import StateStore, InMemoryStateStore, MongoStateStore
from fitcoach.config import Settings
from fitcoach.services.extraction import StructuredResponseExtractor
from fitcoach.services.generation import BatchPlanGenerator, CoachPlanService
from fitcoach.services.progress import ProfileRepository, ProgressService

logger = logging.getLogger(__name__)


_store: Optional[StateStore] = None
_agent: Optional[AIProvider] = None
_batch_generator: Optional[BatchPlanGenerator] = None
_plan_service: Optional[CoachPlanService] = None
_progress_service: Optional[ProgressService] = None


def configure_logging(level: str = "INFO") -> None:
    """Install a basic root handler."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def build_agent(settings: Settings) -> AIProvider:
    """Create the remote agent selected by ``AI_PROVIDER``."""
    if settings.AI_PROVIDER == "claude":
        return ClaudeProvider(api_key=settings.CLAUDE_API_KEY, model=settings.CLAUDE_MODEL)

    if settings.AI_PROVIDER == "openai":
        return OpenAIProvider(
            api_key=settings.OPENAI_API_KEY,
            model=settings.OPENAI_MODEL,
            json_mode=True,
        )

    return AGiXTProvider(
        base_uri=settings.AGIXT_URI or "",
        api_key=settings.AGIXT_API_KEY,
        agent_name=settings.AGIXT_AGENT_NAME,
        context_results=settings.AGIXT_CONTEXT_RESULTS,
    )


def build_store(settings: Settings) -> StateStore:
    """Create the state store selected by ``STATE_STORE``."""
    if settings.STATE_STORE == "mongodb":
        return MongoStateStore.from_uri(
            settings.MONGODB_URI,
            settings.MONGODB_DATABASE,
            collection_name=settings.STATE_COLLECTION,
        )
    return InMemoryStateStore()


def init_services(
    settings: Settings,
    store: Optional[StateStore] = None,
    agent: Optional[AIProvider] = None,
) -> None:
    """
    Initialize all services.

    Called once at application startup. ``store`` and ``agent`` override
    the ones the settings would build.

    Args:
        settings: Application settings
        store: Optional pre-built state store
        agent: Optional pre-built remote agent
    """
    global _store, _agent, _batch_generator, _plan_service, _progress_service

    if agent is None:
        settings.validate_required()

    _store = store or build_store(settings)
    _agent = agent or build_agent(settings)
    extractor = StructuredResponseExtractor()

    _batch_generator = BatchPlanGenerator(
        agent=_agent,
        extractor=extractor,
        max_chunks=settings.MAX_GENERATION_CHUNKS,
        default_focus=settings.DEFAULT_ARTIFACT_FOCUS,
        default_difficulty=settings.DEFAULT_ARTIFACT_DIFFICULTY,
        max_tokens=settings.AI_MAX_TOKENS,
        temperature=settings.AI_TEMPERATURE,
    )
    _plan_service = CoachPlanService(
        agent=_agent,
        store=_store,
        extractor=extractor,
        max_tokens=settings.AI_MAX_TOKENS,
        temperature=settings.AI_TEMPERATURE,
    )
    _progress_service = ProgressService(
        repository=ProfileRepository(_store),
        workout_xp=settings.WORKOUT_XP_REWARD,
        workout_coins=settings.WORKOUT_COIN_REWARD,
        bmi_xp=settings.BMI_XP_REWARD,
        plan_coins=settings.PLAN_COIN_REWARD,
    )

    logger.info(f"FitCoach services initialized with {_agent.describe()}")


def get_store() -> StateStore:
    """Get state store instance."""
    if _store is None:
        raise RuntimeError("FitCoach services not initialized.")
    return _store


def get_agent() -> AIProvider:
    """Get remote agent instance."""
    if _agent is None:
        raise RuntimeError("FitCoach services not initialized.")
    return _agent


def get_batch_generator() -> BatchPlanGenerator:
    """Get batch plan generator instance."""
    if _batch_generator is None:
        raise RuntimeError("FitCoach services not initialized.")
    return _batch_generator


def get_plan_service() -> CoachPlanService:
    """Get coaching plan service instance."""
    if _plan_service is None:
        raise RuntimeError("FitCoach services not initialized.")
    return _plan_service


def get_progress_service() -> ProgressService:
    """Get progress service instance."""
    if _progress_service is None:
        raise RuntimeError("FitCoach services not initialized.")
    return _progress_service
