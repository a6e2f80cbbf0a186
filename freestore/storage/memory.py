"""
In-memory key-value store.

Contents live only as long as the store object.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Mapping
from typing import Any

from freestore._vendor import NOTHING, FrozenDict, Maybe, Some


class InMemoryStore:
    """
    In-memory store backing the bundled interpreters.

    Thread-safe via a reentrant lock for concurrent access.

    Example:
        store = InMemoryStore({"wild-cats": 2})
        store.put("tame-cats", 5)
        store.get("tame-cats")  # Some(value=5)
        store.get("lions")      # Nothing()
    """

    def __init__(self, initial: Mapping[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(initial) if initial else {}
        self._lock = threading.RLock()

    def get(self, key: str) -> Maybe[Any]:
        with self._lock:
            if key in self._data:
                return Some(self._data[key])
            return NOTHING

    def put(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = value

    def delete(self, key: str) -> bool:
        """Delete key. Returns True if key existed."""
        with self._lock:
            if key in self._data:
                del self._data[key]
                return True
            return False

    def exists(self, key: str) -> bool:
        with self._lock:
            return key in self._data

    def keys(self) -> Iterable[str]:
        """Return list of all keys."""
        with self._lock:
            return list(self._data.keys())

    def items(self) -> Iterable[tuple[str, Any]]:
        """Return list of all (key, value) pairs."""
        with self._lock:
            return list(self._data.items())

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def snapshot(self) -> FrozenDict:
        """Return an immutable copy of the current contents."""
        with self._lock:
            return FrozenDict(self._data)

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __repr__(self) -> str:
        with self._lock:
            return f"InMemoryStore({len(self._data)} entries)"
