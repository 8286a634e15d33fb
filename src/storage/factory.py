"""
Build the configured store adapter.
"""

import logging
from typing import Optional

from src.core.config import Settings, settings as default_settings
from src.database.connection import DatabaseConnection
from src.storage.base import KeyValueStore
from src.storage.file_store import JsonFileStore
from src.storage.memory import InMemoryStore
from src.storage.sql_store import SQLStore

logger = logging.getLogger(__name__)

STORE_BACKENDS = ("memory", "file", "database")


def create_store(config: Optional[Settings] = None) -> KeyValueStore:
    """
    Create a store adapter from settings.

    Args:
        config: Settings to read ``store_backend`` and its options from

    Returns:
        KeyValueStore instance

    Raises:
        ValueError: If the backend name is unknown
    """
    config = config or default_settings
    backend = config.store_backend.lower()

    if backend == "memory":
        store: KeyValueStore = InMemoryStore()
    elif backend == "file":
        store = JsonFileStore(config.store_file_path)
    elif backend == "database":
        store = SQLStore(DatabaseConnection(database_url=config.database_url))
    else:
        raise ValueError(
            f"Unknown store backend: {config.store_backend}. "
            f"Expected one of: {', '.join(STORE_BACKENDS)}"
        )

    logger.info(f"Using {store.name} store")
    return store
