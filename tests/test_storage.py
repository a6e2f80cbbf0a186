"""Tests for the in-memory key-value store."""

from __future__ import annotations

import threading

import pytest

from freestore import NOTHING, FrozenDict, KeyValueStore, Some
from freestore.storage import InMemoryStore


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


def test_satisfies_protocol(store: InMemoryStore) -> None:
    assert isinstance(store, KeyValueStore)


def test_put_get(store: InMemoryStore) -> None:
    store.put("wild-cats", 2)
    assert store.get("wild-cats") == Some(2)
    assert store.get("lions") is NOTHING


def test_none_value_is_present(store: InMemoryStore) -> None:
    store.put("k", None)
    assert store.get("k") == Some(None)
    assert store.exists("k")


def test_delete_reports_existence(store: InMemoryStore) -> None:
    store.put("k", 1)
    assert store.delete("k") is True
    assert store.delete("k") is False
    assert not store.exists("k")


def test_keys_items_clear(store: InMemoryStore) -> None:
    store.put("a", 1)
    store.put("b", 2)
    assert sorted(store.keys()) == ["a", "b"]
    assert sorted(store.items()) == [("a", 1), ("b", 2)]
    store.clear()
    assert len(store) == 0


def test_initial_contents_are_copied() -> None:
    initial = {"a": 1}
    store = InMemoryStore(initial)
    store.put("b", 2)
    assert initial == {"a": 1}
    assert len(store) == 2


def test_snapshot_is_immutable_copy(store: InMemoryStore) -> None:
    store.put("a", 1)
    snapshot = store.snapshot()
    store.put("a", 2)
    assert isinstance(snapshot, FrozenDict)
    assert snapshot == {"a": 1}
    with pytest.raises(TypeError):
        snapshot["a"] = 3  # type: ignore[index]


def test_concurrent_puts(store: InMemoryStore) -> None:
    def writer(offset: int) -> None:
        for i in range(200):
            store.put(f"k{offset}-{i}", i)

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert len(store) == 800
