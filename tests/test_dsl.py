"""Tests for the derived DSL combinators, run against every store-backed context."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from freestore import (
    NOTHING,
    Some,
    delete,
    get,
    get_or_else,
    pure,
    put,
    sequence,
    traverse,
    update,
)

if TYPE_CHECKING:
    from tests.conftest import StoreBackedRunner


class TestCoreBehaviour:
    def test_put_then_get(self, interpreter: "StoreBackedRunner") -> None:
        program = put("k", 1).and_then(lambda _: get("k"))
        assert interpreter(program) == Some(1)

    def test_get_missing_key_is_nothing(self, interpreter: "StoreBackedRunner") -> None:
        assert interpreter(get("missing")) is NOTHING

    def test_update_composition(self, interpreter: "StoreBackedRunner") -> None:
        program = (
            put("k", 2)
            .and_then(lambda _: update("k", lambda x: x + 10))
            .and_then(lambda _: get("k"))
        )
        assert interpreter(program) == Some(12)

    def test_delete_then_get(self, interpreter: "StoreBackedRunner") -> None:
        program = (
            put("k", 5)
            .and_then(lambda _: delete("k"))
            .and_then(lambda _: get("k"))
        )
        assert interpreter(program) is NOTHING

    def test_stored_none_is_present(self, interpreter: "StoreBackedRunner") -> None:
        assert interpreter(put("k", None).then(get("k"))) == Some(None)


class TestCombinators:
    def test_update_absent_key_is_noop(self, interpreter: "StoreBackedRunner") -> None:
        program = update("k", lambda x: x + 1).then(get("k"))
        assert interpreter(program) is NOTHING

    def test_put_overwrites(self, interpreter: "StoreBackedRunner") -> None:
        program = put("k", "a").then(put("k", "b")).then(get("k"))
        assert interpreter(program) == Some("b")

    def test_delete_absent_key_is_not_an_error(
        self, interpreter: "StoreBackedRunner"
    ) -> None:
        assert interpreter(delete("never-set")) is None

    def test_get_or_else(self, interpreter: "StoreBackedRunner") -> None:
        program = put("a", 1).then(
            sequence([get_or_else("a", 0), get_or_else("b", 0)])
        )
        assert interpreter(program) == [1, 0]

    def test_sequence_preserves_order(self, interpreter: "StoreBackedRunner") -> None:
        program = sequence([put("a", 1), put("b", 2), get("a"), get("b"), pure("end")])
        assert interpreter(program) == [None, None, Some(1), Some(2), "end"]

    def test_sequence_empty(self, interpreter: "StoreBackedRunner") -> None:
        assert interpreter(sequence([])) == []

    def test_traverse(self, interpreter: "StoreBackedRunner") -> None:
        keys = ["x", "y", "z"]
        program = traverse(keys, lambda key: put(key, key.upper())).then(
            traverse(keys, get)
        )
        assert interpreter(program) == [Some("X"), Some("Y"), Some("Z")]

    def test_dependent_sequencing(self, interpreter: "StoreBackedRunner") -> None:
        # The key written second is read from the store by the first step.
        program = (
            put("pointer", "target")
            .then(get("pointer"))
            .and_then(lambda found: put(found.unwrap(), "hit"))
            .then(get("target"))
        )
        assert interpreter(program) == Some("hit")


def test_sequence_rejects_non_programs() -> None:
    with pytest.raises(TypeError, match="expects Programs"):
        sequence([put("a", 1), 2])  # type: ignore[list-item]
