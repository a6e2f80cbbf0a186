"""
Key-value store interfaces and implementations for freestore interpreters.

A store is the mutable backing state of a concrete interpreter. Programs and
the runner never see it; interpreters receive one through their constructor.

Public API:
- KeyValueStore: Protocol for store backends
- InMemoryStore: thread-safe in-memory store

Example usage:
    from freestore import InMemoryInterpreter, put, run
    from freestore.storage import InMemoryStore

    store = InMemoryStore()
    run(put("toto", 3), InMemoryInterpreter(store))
    store.snapshot()  # frozendict({'toto': 3})
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from freestore._vendor import FrozenDict, Maybe


@runtime_checkable
class KeyValueStore(Protocol):
    """
    Protocol for store backends.

    Implementations own their concurrency discipline; the runner provides none.

    Methods:
        get: Look a key up. Returns NOTHING if not found, so a stored None
            stays distinguishable from an absent key.
        put: Store value with key. Overwrites if exists.
        delete: Delete key. Returns True if key existed.
        exists: Check if key exists.
        keys: Iterate over all keys.
        items: Iterate over all (key, value) pairs.
        clear: Delete all entries.
        snapshot: Immutable copy of the current contents.
    """

    def get(self, key: str) -> Maybe[Any]:
        ...

    def put(self, key: str, value: Any) -> None:
        ...

    def delete(self, key: str) -> bool:
        ...

    def exists(self, key: str) -> bool:
        ...

    def keys(self) -> Iterable[str]:
        ...

    def items(self) -> Iterable[tuple[str, Any]]:
        ...

    def clear(self) -> None:
        ...

    def snapshot(self) -> FrozenDict:
        ...


# Import implementations for convenience
from freestore.storage.memory import InMemoryStore  # noqa: E402

__all__ = [
    "InMemoryStore",
    "KeyValueStore",
]
