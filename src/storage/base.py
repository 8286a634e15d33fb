"""
Key-value store adapter contract.

The report repository depends on exactly three asynchronous operations:
``list(prefix)``, ``get(key)`` and ``set(key, value)``. Keys returned by
``list`` carry no ordering guarantee.
"""

from abc import ABC, abstractmethod
from typing import List, Optional


class StoreError(Exception):
    """I/O failure inside a store adapter."""


class KeyValueStore(ABC):
    """Asynchronous string key-value store."""

    name: str = "abstract"

    @abstractmethod
    async def list(self, prefix: str = "") -> List[str]:
        """Return all keys starting with ``prefix``."""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Return the value stored under ``key``, or None when absent."""

    @abstractmethod
    async def set(self, key: str, value: str) -> bool:
        """Store ``value`` under ``key``. Returns False if the write was refused."""

    async def close(self) -> None:
        """Release adapter resources."""
