"""
In-process dictionary store.
"""

from typing import Dict, List, Optional

from src.storage.base import KeyValueStore


class InMemoryStore(KeyValueStore):
    """Dictionary-backed store, used for development and tests."""

    name = "memory"

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    async def list(self, prefix: str = "") -> List[str]:
        return [key for key in self._data if key.startswith(prefix)]

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> bool:
        self._data[key] = value
        return True

    def __len__(self) -> int:
        return len(self._data)
