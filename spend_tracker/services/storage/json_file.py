"""
JSON File Storage Implementation

Each key is one JSON file in the data directory, e.g.
.spend_tracker/monthly_expenses.json.

TRADEOFFS:
- Every write serializes and replaces the whole document
- No locking: two concurrent writers race and the last one wins
- Writes go through a temporary file and os.replace, so a reader sees
  either the old document or the new one
"""

import asyncio
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

import structlog

from spend_tracker.config import get_settings
from spend_tracker.services.storage.interface import (
    CorruptDataError,
    KeyValueStorageInterface,
    StorageError,
)


logger = structlog.get_logger(__name__)


class JsonFileStorage(KeyValueStorageInterface):
    """
    Key-value storage backed by one JSON file per key.

    File I/O runs in a worker thread so awaiting callers
    don't block the event loop.
    """

    def __init__(self, data_dir: Optional[Path] = None):
        """
        Initialize file storage.

        Args:
            data_dir: Directory for the JSON files.
                      Defaults to the configured storage data_dir.
        """
        if data_dir is None:
            data_dir = get_settings().storage.data_path
        self._data_dir = Path(data_dir)

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def _path_for(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key:
            raise StorageError(f"Invalid storage key: {key!r}")
        return self._data_dir / f"{key}.json"

    def _read(self, key: str) -> Optional[Any]:
        path = self._path_for(key)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"Failed to read '{key}': {e}") from e

        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise CorruptDataError(key, f"Stored data for '{key}' is not valid JSON: {e}") from e

    def _write(self, key: str, value: Any) -> None:
        path = self._path_for(key)
        try:
            text = json.dumps(value, indent=2, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Value for '{key}' is not JSON serializable: {e}") from e

        temp_name = None
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                prefix=f"{key}-",
                suffix=".tmp",
                dir=self._data_dir,
                delete=False,
            ) as tf:
                temp_name = tf.name
                tf.write(text)
                tf.flush()
            os.replace(temp_name, path)
        except OSError as e:
            if temp_name and os.path.exists(temp_name):
                try:
                    os.unlink(temp_name)
                except OSError:
                    logger.warning("temp_file_cleanup_failed", path=temp_name)
            raise StorageError(f"Failed to write '{key}': {e}") from e

        logger.debug("storage_write", key=key, bytes=len(text))

    def _remove(self, key: str) -> bool:
        path = self._path_for(key)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageError(f"Failed to remove '{key}': {e}") from e
        return True

    async def get_item(self, key: str) -> Optional[Any]:
        return await asyncio.to_thread(self._read, key)

    async def set_item(self, key: str, value: Any) -> None:
        await asyncio.to_thread(self._write, key, value)

    async def remove_item(self, key: str) -> bool:
        return await asyncio.to_thread(self._remove, key)

    async def has_item(self, key: str) -> bool:
        return self._path_for(key).exists()
