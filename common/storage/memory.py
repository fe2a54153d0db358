"""
In-process state store.

Keeps values in a dict for the lifetime of the process. Used for local
runs and tests; nothing survives a restart.
"""

from typing import Dict, Optional

from common.storage.base import StateStore


class InMemoryStateStore(StateStore):
    """Dict-backed state store."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._values: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    async def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def keys(self):
        """Keys currently stored, for diagnostics."""
        return list(self._values.keys())
