"""
Purpose: Key-value storage backends (the "database" of the demo).
What it does:
- Defines the KeyValueStore contract: get / put / remove / keys
- InMemoryStore: dict-backed, used by tests and throwaway simulations
- JsonFileStore: a single JSON document on disk, rewritten on every put

Values are JSON-compatible python structures (dict, list, str, ...).
There is no locking across processes: last write wins.
"""

from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class StorageCorruptError(Exception):
    """Raised when persisted state cannot be decoded. Call reset() to recover."""
    pass


class KeyValueStore(ABC):
    """
    Minimal storage contract shared by every backend.
    Reads return copies so callers can never mutate stored state by accident.
    """

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        ...

    @abstractmethod
    def put(self, key: str, value: Any) -> None:
        ...

    @abstractmethod
    def remove(self, key: str) -> None:
        ...

    @abstractmethod
    def keys(self) -> List[str]:
        ...

    def reset(self) -> None:
        for key in self.keys():
            self.remove(key)


class InMemoryStore(KeyValueStore):

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = copy.deepcopy(initial) if initial else {}

    def get(self, key: str, default: Any = None) -> Any:
        if key not in self._data:
            return default
        return copy.deepcopy(self._data[key])

    def put(self, key: str, value: Any) -> None:
        # round-trip through json so the in-memory backend rejects exactly what a file would
        self._data[key] = json.loads(json.dumps(value))

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._data.keys())


class JsonFileStore(KeyValueStore):
    """
    Stores every key in one JSON object on disk.

    The file is re-read on every get so two processes sharing a path observe
    each other's writes (same semantics as two browser tabs on one origin).
    """

    def __init__(self, path: str):
        self.path = path

    def _load(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as file:
                data = json.load(file)
        except json.JSONDecodeError as exc:
            raise StorageCorruptError(f"Cannot decode storage file {self.path}: {exc}") from exc

        if not isinstance(data, dict):
            raise StorageCorruptError(f"Storage file {self.path} does not hold a JSON object")
        return data

    def _dump(self, data: Dict[str, Any]) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".storage-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as file:
                json.dump(data, file, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def get(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def put(self, key: str, value: Any) -> None:
        data = self._load()
        data[key] = value
        self._dump(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._dump(data)

    def keys(self) -> List[str]:
        return list(self._load().keys())

    def reset(self) -> None:
        # works even when the file is corrupt
        if os.path.exists(self.path):
            logger.warning("Resetting storage file %s", self.path)
            os.remove(self.path)
