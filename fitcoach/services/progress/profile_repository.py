"""
Profile repository.

The single serialization point for the progression aggregate. A profile,
its counters and its BMI history are stored together as one JSON document
under ``profile:<id>``, so every action is committed by one ``set``.
"""

import asyncio
import logging
from typing import Dict, List, Optional

from common.storage.base import StateStore
from fitcoach.schemas.profile import BmiEntry, ProfileRecord, ProgressStats, UserProfile

logger = logging.getLogger(__name__)


def profile_key(profile_id: str) -> str:
    return f"profile:{profile_id}"


class ProfileRepository:
    """
    Loads and saves the profile aggregate.

    Also hands out one ``asyncio.Lock`` per profile so callers can run a
    whole read-modify-write cycle without another action interleaving.
    Locks are kept for the life of the repository, one per profile id
    seen; fine for a single-user client, not for an unbounded user base.
    """

    def __init__(self, store: StateStore):
        """
        Initialize ProfileRepository.

        Args:
            store: Key/value state store
        """
        self._store = store
        self._locks: Dict[str, asyncio.Lock] = {}

    def lock(self, profile_id: str) -> asyncio.Lock:
        """The lock serializing transitions for one profile."""
        lock = self._locks.get(profile_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[profile_id] = lock
        return lock

    async def load_record(self, profile_id: str) -> Optional[ProfileRecord]:
        raw = await self._store.get(profile_key(profile_id))
        if raw is None:
            return None
        return ProfileRecord.model_validate_json(raw)

    async def save_record(self, profile_id: str, record: ProfileRecord) -> None:
        """Write profile, counters and history in one ``set``."""
        await self._store.set(profile_key(profile_id), record.model_dump_json())
        logger.debug(f"Saved profile {profile_id}")

    async def load_profile(self, profile_id: str) -> Optional[UserProfile]:
        record = await self.load_record(profile_id)
        return record.profile if record else None

    async def load_stats(self, profile_id: str) -> ProgressStats:
        """Counters for a profile; zeroed if the profile does not exist."""
        record = await self.load_record(profile_id)
        return record.stats if record else ProgressStats()

    async def load_bmi_history(self, profile_id: str) -> List[BmiEntry]:
        record = await self.load_record(profile_id)
        return list(record.bmiHistory) if record else []
