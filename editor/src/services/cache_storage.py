"""
Banner Layout Editor - Cache Storage Backends

Key-value stores used by FormatCache. Keys are tuples of strings
(e.g. ('Instagram Post', 'Story')); values are JSON text. Backends never
interpret the values, so a corrupted value is handed back as-is and the
cache decides what to do with it.

- MemoryStorage: dict in memory (tests, one-shot CLI runs)
- JsonFileStorage: one file per key in a directory
"""

import hashlib
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, Tuple

from constants import CACHE_INDEX_NAME

logger = logging.getLogger(__name__)

StorageKey = Tuple[str, ...]


class CacheStorage(ABC):
    """Abstract key-value store for cache entries"""

    @abstractmethod
    def read(self, key: StorageKey) -> Optional[str]:
        """Stored text for key, or None if absent"""
        pass

    @abstractmethod
    def write(self, key: StorageKey, value: str):
        pass

    @abstractmethod
    def delete(self, key: StorageKey):
        """Remove key (no-op if absent)"""
        pass

    @abstractmethod
    def clear(self):
        """Remove everything"""
        pass


class MemoryStorage(CacheStorage):
    """In-memory storage"""

    def __init__(self):
        self._data: Dict[StorageKey, str] = {}

    def read(self, key):
        return self._data.get(tuple(key))

    def write(self, key, value):
        self._data[tuple(key)] = value

    def delete(self, key):
        self._data.pop(tuple(key), None)

    def clear(self):
        self._data.clear()

    def __len__(self):
        return len(self._data)


class JsonFileStorage(CacheStorage):
    """One JSON file per key in a directory

    File names are hashes of the JSON-encoded key, so format names may
    contain any character. The index key maps to index.json.
    """

    SUFFIX = '.json'

    def __init__(self, directory):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def path_for(self, key: StorageKey) -> Path:
        key = tuple(key)
        if key == (CACHE_INDEX_NAME,):
            return self.directory / f"{CACHE_INDEX_NAME}{self.SUFFIX}"
        encoded = json.dumps(list(key), ensure_ascii=False)
        digest = hashlib.sha256(encoded.encode('utf-8')).hexdigest()
        return self.directory / f"{digest}{self.SUFFIX}"

    def read(self, key):
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read cache file {path.name}: {e}")
            return None

    def write(self, key, value):
        path = self.path_for(key)
        tmp_path = path.with_suffix('.tmp')
        tmp_path.write_text(value, encoding='utf-8')
        tmp_path.replace(path)

    def delete(self, key):
        path = self.path_for(key)
        if path.exists():
            path.unlink()

    def clear(self):
        for path in self.directory.glob(f"*{self.SUFFIX}"):
            path.unlink()
