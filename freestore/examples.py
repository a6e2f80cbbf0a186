"""Worked example programs over the key-value store language.

``wild_cats_program`` is the classic free-monad walkthrough: build the
program as data, then fold it with any interpreter.

    from freestore import InMemoryInterpreter, run
    from freestore.examples import wild_cats_program

    run(wild_cats_program(), InMemoryInterpreter())
    # Some(value=14)
"""

from __future__ import annotations

from typing import Any

from freestore._vendor import Maybe
from freestore.do import do
from freestore.dsl import delete, get, put, update
from freestore.program import ProgramBase


def wild_cats_program() -> ProgramBase[Maybe[int]]:
    """put wild-cats 2, add 12, put tame-cats 5, read wild-cats, delete tame-cats."""
    return (
        put("wild-cats", 2)
        .then(update("wild-cats", lambda n: n + 12, int))
        .then(put("tame-cats", 5))
        .then(get("wild-cats", int))
        .and_then(lambda n: delete("tame-cats").map(lambda _: n))
    )


@do
def wild_cats_do():
    """The same program written with do-notation."""
    yield put("wild-cats", 2)
    yield update("wild-cats", lambda n: n + 12, int)
    yield put("tame-cats", 5)
    n = yield get("wild-cats", int)
    yield delete("tame-cats")
    return n


def counter_program(key: str, times: int) -> ProgramBase[Maybe[Any]]:
    """Increment ``key`` from 0, ``times`` times, then read it back."""
    program: ProgramBase[Any] = put(key, 0)
    for _ in range(times):
        program = program.then(update(key, lambda n: n + 1))
    return program.then(get(key))


__all__ = ["counter_program", "wild_cats_do", "wild_cats_program"]
