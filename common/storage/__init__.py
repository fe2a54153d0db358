"""
Storage module - Async key/value state stores (in-memory, MongoDB).

Usage:
    from common.storage import InMemoryStateStore

    store = InMemoryStateStore()
    await store.set("profile:sam", profile_json)
    raw = await store.get("profile:sam")
"""

from common.storage.base import StateStore
from common.storage.memory import InMemoryStateStore
from common.storage.mongodb import MongoStateStore

__all__ = [
    "StateStore",
    "InMemoryStateStore",
    "MongoStateStore",
]
