"""
Sanitary Map AI - Storage Module
Key-value store adapters consumed by the report repository.
"""

from src.storage.base import KeyValueStore, StoreError
from src.storage.memory import InMemoryStore
from src.storage.file_store import JsonFileStore
from src.storage.sql_store import SQLStore
from src.storage.factory import create_store

__all__ = [
    "KeyValueStore",
    "StoreError",
    "InMemoryStore",
    "JsonFileStore",
    "SQLStore",
    "create_store",
]
