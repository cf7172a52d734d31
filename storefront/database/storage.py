"""Durable key-value storage for carts"""

import os
import logging
import tempfile
from abc import ABC, abstractmethod
from typing import Optional

logger = logging.getLogger(__name__)


class KeyValueStorage(ABC):
    """String key/value store with a localStorage-style interface"""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Return the stored value or None"""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one"""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Remove a value (missing keys are ignored)"""


class MemoryStorage(KeyValueStorage):
    """In-memory storage, lost on restart"""

    def __init__(self):
        self.items: dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


class JsonFileStorage(KeyValueStorage):
    """
    File-backed storage: one ``<key>.json`` file per key.

    Values are written to a temporary file first and renamed into place,
    so a reader never sees a half-written cart.
    """

    def __init__(self, directory: str):
        self.directory = directory
        os.makedirs(directory, exist_ok=True)

    def _path(self, key: str) -> str:
        safe_key = "".join(c if c.isalnum() or c in "-_." else "_" for c in key)
        return os.path.join(self.directory, f"{safe_key}.json")

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not os.path.exists(path):
            return None
        with open(path, "r", encoding="utf-8") as f:
            return f.read()

    def set_item(self, key: str, value: str) -> None:
        fd, tmp_path = tempfile.mkstemp(dir=self.directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_path, self._path(key))
        except OSError:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def remove_item(self, key: str) -> None:
        path = self._path(key)
        if os.path.exists(path):
            os.remove(path)
            logger.debug(f"Removed stored value {key}")


def create_storage(directory: Optional[str] = None) -> KeyValueStorage:
    """Create file storage when a directory is configured, memory storage otherwise"""
    if directory:
        logger.info(f"Cart storage: files in {directory}")
        return JsonFileStorage(directory)
    logger.info("Cart storage: in-memory")
    return MemoryStorage()
