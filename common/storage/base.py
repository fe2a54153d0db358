"""
Abstract key/value state store.

The coaching core persists everything as UTF-8 text documents under string
keys: the serialized profile, progress counters, BMI history and cached
agent documents. Any backend that can get and set strings can host it.
"""

from abc import ABC, abstractmethod
from typing import Optional


class StateStore(ABC):
    """Async key/value persistence for serialized documents."""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Returns:
            The stored text, or None if the key was never set
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Store text under a key, replacing any previous value."""
        pass
