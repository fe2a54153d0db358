"""
Generation services - Prompt the workout agent for plans and documents.
"""

from fitcoach.services.generation.batch_generator import BatchPlanGenerator, plan_chunks
from fitcoach.services.generation.plan_service import CoachPlanService, document_cache_key

__all__ = [
    "BatchPlanGenerator",
    "plan_chunks",
    "CoachPlanService",
    "document_cache_key",
]
