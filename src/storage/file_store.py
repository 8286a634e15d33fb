"""
JSON file store.

Keeps every key in a single JSON object on disk, the server-side
equivalent of the browser-local store used by standalone clients.
Writes go to a temporary file that then replaces the existing one.
"""

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Union

from src.storage.base import KeyValueStore, StoreError

logger = logging.getLogger(__name__)


class JsonFileStore(KeyValueStore):
    """Key-value store persisted as one JSON document."""

    name = "file"

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read store file {self.path}: {e}")
            raise StoreError(f"Cannot read {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise StoreError(f"Store file {self.path} does not hold a JSON object")
        return data

    def _write(self, data: Dict[str, str]) -> None:
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tmp_path.open("w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error(f"Failed to write store file {self.path}: {e}")
            raise StoreError(f"Cannot write {self.path}: {e}") from e

    def _set(self, key: str, value: str) -> bool:
        data = self._read()
        data[key] = value
        self._write(data)
        return True

    async def list(self, prefix: str = "") -> List[str]:
        data = await asyncio.to_thread(self._read)
        return [key for key in data if key.startswith(prefix)]

    async def get(self, key: str) -> Optional[str]:
        data = await asyncio.to_thread(self._read)
        value = data.get(key)
        return value if value is None or isinstance(value, str) else json.dumps(value)

    async def set(self, key: str, value: str) -> bool:
        return await asyncio.to_thread(self._set, key, value)
