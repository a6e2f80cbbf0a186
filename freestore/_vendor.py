"""
Vendored minimal data types shared by commands, effect contexts and interpreters.

``Maybe`` is the result type of a ``Get`` command, ``Result`` is the value type
of the error-carrying effect context, and ``FrozenDict`` backs immutable store
snapshots.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Final, Generic, NoReturn, TypeVar, cast

from frozendict import frozendict

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)
U = TypeVar("U")


class Result(Generic[T_co]):
    """Outcome of one step in the result context: ``Ok`` or ``Err``."""

    __slots__ = ()

    def unwrap(self) -> T_co:
        """Return the value or raise the stored error."""

        if isinstance(self, Ok):
            return self.value
        raise self.error

    def unwrap_or(self, default: U) -> T_co | U:
        if isinstance(self, Ok):
            return self.value
        return default

    def map(self, f: Callable[[T_co], U]) -> Result[U]:
        if isinstance(self, Ok):
            return Ok(f(self.value))
        return cast(Result[U], self)

    def and_then(self, f: Callable[[T_co], Result[U]]) -> Result[U]:
        """Chain computations that return ``Result``; an ``Err`` short-circuits."""

        if isinstance(self, Ok):
            result = f(self.value)
            if not isinstance(result, Result):
                raise TypeError("and_then must return a Result instance")
            return result
        return cast(Result[U], self)

    def __bool__(self) -> bool:
        return isinstance(self, Ok)


@dataclass(frozen=True)
class Ok(Result[T], Generic[T]):
    value: T


@dataclass(frozen=True)
class Err(Result[NoReturn]):
    error: Exception


class Maybe(Generic[T_co]):
    """Optional value: ``Some(value)`` or ``NOTHING``.

    A ``Get`` against an absent key yields ``NOTHING``; absence is a normal
    result, never an error. ``Some(None)`` is a present ``None``.
    """

    __slots__ = ()

    def unwrap(self) -> T_co:
        """Return the contained value or raise ``RuntimeError``."""

        if isinstance(self, Some):
            return self.value
        raise RuntimeError("Called unwrap on Nothing value")

    def unwrap_or(self, default: U) -> T_co | U:
        if isinstance(self, Some):
            return self.value
        return default

    def map(self, func: Callable[[T_co], U]) -> Maybe[U]:
        if isinstance(self, Some):
            return Some(func(self.value))
        return NOTHING

    def __bool__(self) -> bool:
        return isinstance(self, Some)


@dataclass(frozen=True)
class Some(Maybe[T], Generic[T]):
    value: T


class Nothing(Maybe[NoReturn]):
    """Singleton representing the absence of a value."""

    __slots__ = ()
    _instance: Nothing | None = None

    def __new__(cls) -> Nothing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Nothing()"


NOTHING: Final[Maybe[NoReturn]] = Nothing()

FrozenDict = frozendict

__all__ = [
    "NOTHING",
    "Err",
    "FrozenDict",
    "Maybe",
    "Nothing",
    "Ok",
    "Result",
    "Some",
]
