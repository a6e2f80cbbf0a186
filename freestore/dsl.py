"""
Program builders for the key-value store language.

Smart constructors lift single commands into programs; the combinators
compose them without running anything:

    from freestore.dsl import delete, get, put, update

    program = (
        put("wild-cats", 2)
        .then(update("wild-cats", lambda n: n + 12))
        .then(get("wild-cats"))
    )

``and_then`` is the only composition primitive; every other combinator here
is written in terms of it.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from functools import partial
from typing import Any, TypeVar

from freestore._vendor import Maybe
from freestore.commands import Delete, Get, Put
from freestore.program import ProgramBase, Pure, Suspend, defer
from freestore.utils import capture_creation_context

T = TypeVar("T")
U = TypeVar("U")

Program = ProgramBase


def _check_key(key: Any) -> str:
    if not isinstance(key, str):
        raise TypeError(f"key must be a str; got {type(key).__name__}")
    return key


def put(key: str, value: Any) -> Program[None]:
    """Store ``value`` under ``key``."""
    command = Put(_check_key(key), value, created_at=capture_creation_context())
    return Suspend(command)


def get(key: str, expected_type: type | None = None) -> Program[Maybe[Any]]:
    """Look ``key`` up; yields ``Some(value)`` or ``NOTHING``.

    With ``expected_type``, a stored value of another type makes the
    interpreter fail with TypeMismatch.
    """
    command = Get(
        _check_key(key), expected_type, created_at=capture_creation_context()
    )
    return Suspend(command)


def delete(key: str) -> Program[None]:
    """Remove ``key`` from the store."""
    command = Delete(_check_key(key), created_at=capture_creation_context())
    return Suspend(command)


def pure(value: T) -> Program[T]:
    return Pure(value)


def and_then(program: Program[T], f: Callable[[T], Program[U]]) -> Program[U]:
    return program.and_then(f)


def fmap(program: Program[T], f: Callable[[T], U]) -> Program[U]:
    return program.map(f)


def _put_updated(
    key: str, f: Callable[[Any], Any], found: Maybe[Any]
) -> Program[None]:
    return found.map(lambda value: put(key, f(value))).unwrap_or(Pure(None))


def update(
    key: str, f: Callable[[Any], Any], expected_type: type | None = None
) -> Program[None]:
    """Get ``key`` and put back ``f(value)``; does nothing when the key is absent."""
    return get(key, expected_type).and_then(partial(_put_updated, key, f))


def get_or_else(key: str, default: T, expected_type: type | None = None) -> Program[Any]:
    """Look ``key`` up, yielding the bare value or ``default`` when absent."""
    return get(key, expected_type).map(lambda found: found.unwrap_or(default))


def _collect(program: Program[T], collected: Any) -> Program[Any]:
    return program.map(lambda value: (value, collected))


def _to_list(collected: Any) -> list[Any]:
    values: list[Any] = []
    while collected is not None:
        value, collected = collected
        values.append(value)
    values.reverse()
    return values


def sequence(programs: Iterable[Program[T]]) -> Program[list[T]]:
    """Run ``programs`` in order and yield their results as a list."""
    # Results are consed, not appended, so the program stays re-runnable.
    acc: Program[Any] = Pure(None)
    for program in programs:
        if not isinstance(program, ProgramBase):
            raise TypeError(
                f"sequence() expects Programs; got {type(program).__name__}"
            )
        acc = acc.and_then(partial(_collect, program))
    return acc.map(_to_list)


def traverse(items: Iterable[T], f: Callable[[T], Program[U]]) -> Program[list[U]]:
    """Build ``f(item)`` for each item and sequence the results."""
    return sequence(f(item) for item in items)


__all__ = [
    "and_then",
    "defer",
    "delete",
    "fmap",
    "get",
    "get_or_else",
    "pure",
    "put",
    "sequence",
    "traverse",
    "update",
]
