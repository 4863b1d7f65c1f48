# services/store/memory_store.py
"""
In-process document store for local development and tests.

Values are deep-copied on the way in and out so callers can never
mutate stored state without going through set/update.
"""

import copy
import threading
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from .base import DocumentStore, Mutator


class InMemoryDocumentStore(DocumentStore):
    name = "memory"

    def __init__(self):
        self._data: Dict[str, Any] = {}
        self._data_lock = threading.Lock()
        # key -> [lock, holders and waiters]; dropped when nobody uses it
        self._key_locks: Dict[str, list] = {}
        self._key_locks_guard = threading.Lock()

    @contextmanager
    def _locked(self, key: str):
        with self._key_locks_guard:
            entry = self._key_locks.setdefault(key, [threading.Lock(), 0])
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._key_locks_guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._key_locks[key]

    def get(self, key: str) -> Optional[Any]:
        with self._data_lock:
            return copy.deepcopy(self._data.get(key))

    def set(self, key: str, value: Any) -> None:
        with self._data_lock:
            self._data[key] = copy.deepcopy(value)

    def delete(self, key: str) -> None:
        with self._data_lock:
            self._data.pop(key, None)

    def get_by_prefix(self, prefix: str) -> List[Any]:
        with self._data_lock:
            return [
                copy.deepcopy(self._data[key])
                for key in sorted(self._data)
                if key.startswith(prefix)
            ]

    def update(self, key: str, mutate: Mutator, default: Any = None) -> Any:
        # Serialises read-modify-write per key; other keys stay concurrent.
        with self._locked(key):
            current = self.get(key)
            if current is None:
                current = copy.deepcopy(default)
            new_value = mutate(copy.deepcopy(current))
            if new_value != current:
                self.set(key, new_value)
            return copy.deepcopy(new_value)

    def keys(self) -> List[str]:
        with self._data_lock:
            return sorted(self._data)
