"""Tests for the vendored Maybe and Result types."""

import pytest

from freestore import NOTHING, Err, FrozenDict, Nothing, Ok, Some


def test_maybe_truthiness():
    assert Some(42)
    assert not NOTHING


def test_some_none_is_present():
    # A stored None is still a present value.
    assert Some(None)
    assert Some(None) != NOTHING
    assert Some(None).unwrap_or("default") is None


def test_nothing_is_singleton():
    assert Nothing() is NOTHING
    assert repr(NOTHING) == "Nothing()"


def test_maybe_map_and_unwrap():
    assert Some(3).map(lambda x: x + 1) == Some(4)
    assert NOTHING.map(lambda x: x) is NOTHING
    assert Some(1).unwrap() == 1
    assert NOTHING.unwrap_or(0) == 0

    with pytest.raises(RuntimeError):
        NOTHING.unwrap()


def test_result_helpers():
    ok = Ok(2)
    err = Err(KeyError("k"))

    assert ok and not err
    assert ok.map(lambda x: x * 10) == Ok(20)
    assert err.map(lambda x: x * 10) is err
    assert ok.and_then(lambda x: Ok(x + 1)) == Ok(3)
    assert err.and_then(lambda x: Ok(x + 1)) is err
    assert ok.unwrap() == 2
    assert err.unwrap_or(7) == 7

    with pytest.raises(TypeError):
        ok.and_then(lambda x: x)  # type: ignore[arg-type]
    with pytest.raises(KeyError):
        err.unwrap()


def test_frozen_dict_is_immutable():
    snapshot = FrozenDict({"a": 1})
    updated = snapshot.set("b", 2)

    assert snapshot == {"a": 1}
    assert updated == {"a": 1, "b": 2}
    with pytest.raises(TypeError):
        snapshot["c"] = 3  # type: ignore[index]
