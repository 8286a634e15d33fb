"""
SQL-backed key-value store.

Runs the blocking SQLAlchemy calls in worker threads so the repository
only ever suspends on the adapter, never blocks the event loop.
"""

import asyncio
import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from src.database.connection import DatabaseConnection
from src.database.models import KeyValueEntry
from src.storage.base import KeyValueStore, StoreError

logger = logging.getLogger(__name__)


class SQLStore(KeyValueStore):
    """Key-value store over the ``kv_entries`` table."""

    name = "database"

    def __init__(self, db: DatabaseConnection, create_tables: bool = True):
        self.db = db
        if create_tables:
            self.db.create_tables()

    def _list(self, prefix: str) -> List[str]:
        with self.db.get_session() as session:
            stmt = select(KeyValueEntry.key)
            if prefix:
                stmt = stmt.where(KeyValueEntry.key.startswith(prefix, autoescape=True))
            return list(session.scalars(stmt))

    def _get(self, key: str) -> Optional[str]:
        with self.db.get_session() as session:
            entry = session.get(KeyValueEntry, key)
            return entry.value if entry is not None else None

    def _set(self, key: str, value: str) -> bool:
        with self.db.get_session() as session:
            entry = session.get(KeyValueEntry, key)
            if entry is None:
                session.add(KeyValueEntry(key=key, value=value))
            else:
                entry.value = value
        return True

    async def list(self, prefix: str = "") -> List[str]:
        try:
            return await asyncio.to_thread(self._list, prefix)
        except SQLAlchemyError as e:
            raise StoreError(f"list({prefix!r}) failed: {e}") from e

    async def get(self, key: str) -> Optional[str]:
        try:
            return await asyncio.to_thread(self._get, key)
        except SQLAlchemyError as e:
            raise StoreError(f"get({key!r}) failed: {e}") from e

    async def set(self, key: str, value: str) -> bool:
        try:
            return await asyncio.to_thread(self._set, key, value)
        except SQLAlchemyError as e:
            raise StoreError(f"set({key!r}) failed: {e}") from e

    async def close(self) -> None:
        self.db.close()
