"""
MongoDB-backed state store using Motor.

Each key is one document ``{key, value, updatedAt}`` in a single
collection. Writes are upserts, so the first ``set`` creates the key.

Example:
    from motor.motor_asyncio import AsyncIOMotorClient
    from common.storage import MongoStateStore

    client = AsyncIOMotorClient("mongodb://localhost:27017")
    store = MongoStateStore(client["fitcoach"], collection_name="state")
    await store.ensure_indexes()
    await store.set("profile:sam", '{"name": "Sam", ...}')
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from common.storage.base import StateStore

logger = logging.getLogger(__name__)


class MongoStateStore(StateStore):
    """Key/value state store on a Motor collection."""

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = "state"):
        """
        Initialize MongoStateStore.

        Args:
            db: Motor database handle
            collection_name: Collection holding the key/value documents
        """
        self._collection = db[collection_name]

    @classmethod
    def from_uri(
        cls,
        uri: str,
        database_name: str,
        collection_name: str = "state",
    ) -> "MongoStateStore":
        """Create a store with its own Motor client."""
        # Mask the URI for logging (hide credentials)
        masked_uri = uri.split("@")[-1] if "@" in uri else uri
        logger.info(f"Connecting state store to MongoDB: {masked_uri}/{database_name}")
        client = AsyncIOMotorClient(uri)
        return cls(client[database_name], collection_name=collection_name)

    async def ensure_indexes(self) -> None:
        """Create the unique index on ``key``."""
        await self._collection.create_index("key", unique=True)

    async def get(self, key: str) -> Optional[str]:
        doc = await self._collection.find_one({"key": key}, {"value": 1})
        if not doc:
            return None
        return doc.get("value")

    async def set(self, key: str, value: str) -> None:
        await self._collection.update_one(
            {"key": key},
            {
                "$set": {
                    "value": value,
                    "updatedAt": datetime.now(timezone.utc),
                }
            },
            upsert=True,
        )
        logger.debug(f"Stored state key {key}")
