# services/store/base.py
"""
Document store contract.

A flat mapping from string keys to JSON-compatible values. Key prefixes
(`user:`, `video:`, `messages:` ...) are the only index.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional

Mutator = Callable[[Any], Any]


class DocumentStore(ABC):
    """Key -> JSON value store with prefix scan and atomic updates."""

    name = "abstract"

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Return the stored value, or None when the key is absent."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store `value` under `key`, replacing any previous value."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove `key`. Removing an absent key is not an error."""

    @abstractmethod
    def get_by_prefix(self, prefix: str) -> List[Any]:
        """Return the values of every key starting with `prefix`, ordered by key."""

    @abstractmethod
    def update(self, key: str, mutate: Mutator, default: Any = None) -> Any:
        """
        Atomically read, mutate and write back one key.

        `mutate` receives the current value (a private copy of `default`
        when the key is absent) and returns the new value. When it returns
        a value equal to the current one nothing is written. Concurrent
        updates of the same key never lose each other's changes.

        Returns:
            The value stored after the update.
        """
