"""
Program class for the freestore system.

A Program is an immutable description of a sequence of commands where each
step's result may decide the next step. It is the free monad over the command
grammar and has three node types:

- Pure(value): finished, yields ``value``
- Suspend(command): a single lifted command, yields the command's result
- FlatMap(source, continuation): runs ``source`` then the Program returned
  by ``continuation(result)``

Building a Program never runs a command; only ``freestore.runner.run`` does.
"""

from __future__ import annotations

from abc import ABC
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from freestore.commands import Command

T = TypeVar("T")
U = TypeVar("U")


class ProgramBase(ABC, Generic[T]):
    """Runtime base class for all freestore programs."""

    def and_then(self, f: Callable[[T], ProgramBase[U]]) -> ProgramBase[U]:
        """Monadic bind: feed this program's result into ``f``."""

        if not callable(f):
            raise TypeError("continuation must be callable returning a Program")
        return FlatMap(self, f)

    def flat_map(self, f: Callable[[T], ProgramBase[U]]) -> ProgramBase[U]:
        """Alias for and_then."""

        return self.and_then(f)

    def map(self, f: Callable[[T], U]) -> ProgramBase[U]:
        """Map a function over this program's result without adding a command."""

        if not callable(f):
            raise TypeError("mapper must be callable")
        return self.and_then(lambda value: Pure(f(value)))

    def then(self, next_program: ProgramBase[U]) -> ProgramBase[U]:
        """Sequence ``next_program`` after this one, discarding this result."""

        if not isinstance(next_program, ProgramBase):
            raise TypeError(
                f"then() expects a Program; got {type(next_program).__name__}"
            )
        return self.and_then(lambda _: next_program)

    def __rshift__(self, next_program: ProgramBase[U]) -> ProgramBase[U]:
        return self.then(next_program)

    @staticmethod
    def pure(value: T) -> ProgramBase[T]:
        return Pure(value)

    @staticmethod
    def lift(command: Command) -> ProgramBase[Any]:
        return Suspend(command)


@dataclass(frozen=True)
class Pure(ProgramBase[T]):
    """A program that performs no command and yields ``value``."""

    value: T

    def and_then(self, f: Callable[[T], ProgramBase[U]]) -> ProgramBase[U]:
        # Binding a pure value needs no node: apply the continuation now.
        if not callable(f):
            raise TypeError("continuation must be callable returning a Program")
        next_program = f(self.value)
        if not isinstance(next_program, ProgramBase):
            raise TypeError(
                "continuation must return a Program; got "
                f"{type(next_program).__name__}"
            )
        return next_program


@dataclass(frozen=True)
class Suspend(ProgramBase[T]):
    """A single command lifted into a program."""

    command: Command


@dataclass(frozen=True, repr=False, eq=False)
class FlatMap(ProgramBase[U], Generic[T, U]):
    """``source`` followed by whatever ``continuation`` builds from its result.

    Compared by identity. The repr walks the left spine in a loop, so
    programs of any length can be printed and logged.
    """

    source: ProgramBase[T]
    continuation: Callable[[T], ProgramBase[U]]

    def __repr__(self) -> str:
        depth = 1
        source = self.source
        while isinstance(source, FlatMap):
            depth += 1
            source = source.source
        return f"FlatMap({source!r}, <{depth} continuation(s)>)"


def defer(thunk: Callable[[], ProgramBase[T]]) -> ProgramBase[T]:
    """Build the program returned by ``thunk`` only when it is run."""

    return FlatMap(Pure(None), lambda _: thunk())


Program = ProgramBase

__all__ = ["FlatMap", "Program", "ProgramBase", "Pure", "Suspend", "defer"]
