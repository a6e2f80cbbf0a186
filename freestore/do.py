"""
The do decorator for the freestore system.

``@do`` turns a generator function into a function returning a Program.
Each ``yield program`` binds that program's result, so multi-step programs
read top to bottom:

    @do
    def transfer(source: str, target: str):
        amount = (yield get(source)).unwrap_or(0)
        yield put(target, amount)
        yield delete(source)
        return amount

The generator body does not run when the Program is built, only when it is
folded, and it starts afresh on every run.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Generator
from functools import partial, update_wrapper
from typing import Any, Generic, ParamSpec, TypeVar

from freestore.errors import ContinuationReuseError
from freestore.program import FlatMap, ProgramBase, Pure, defer

P = ParamSpec("P")
T = TypeVar("T")

ProgramGenerator = Generator[ProgramBase[Any], Any, T]


class _GeneratorDriver:
    """Feeds program results back into one generator instance."""

    def __init__(self, generator: ProgramGenerator[Any], name: str) -> None:
        self.generator = generator
        self.name = name
        self.position = 0

    def start(self) -> ProgramBase[Any]:
        return self._advance(partial(next, self.generator))

    def resume(self, position: int, value: Any) -> ProgramBase[Any]:
        # Generators are one-shot: only the latest continuation may resume.
        if position != self.position:
            raise ContinuationReuseError(self.name)
        return self._advance(partial(self.generator.send, value))

    def _advance(self, step: Callable[[], Any]) -> ProgramBase[Any]:
        try:
            yielded = step()
        except StopIteration as stop_exc:
            self.position += 1
            return Pure(stop_exc.value)

        if not isinstance(yielded, ProgramBase):
            raise TypeError(
                f"@do function {self.name!r} yielded {type(yielded).__name__}; "
                "yield Programs built with put(), get(), delete() or pure()"
            )
        self.position += 1
        # FlatMap directly: Pure.and_then would resume on this stack frame.
        return FlatMap(yielded, partial(self.resume, self.position))


class DoFunction(Generic[P, T]):
    """Callable returned by @do; calling it builds a Program without running it."""

    def __init__(self, func: Callable[P, ProgramGenerator[T]]) -> None:
        self.original_func = func
        update_wrapper(self, func)

    @property
    def original_generator(self) -> Callable[P, ProgramGenerator[T]]:
        """Expose the user-defined generator for downstream tooling."""

        return self.original_func

    def __call__(self, *args: P.args, **kwargs: P.kwargs) -> ProgramBase[T]:
        return defer(partial(self._start, args, kwargs))

    def _start(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> ProgramBase[T]:
        result = self.original_func(*args, **kwargs)
        if not inspect.isgenerator(result):
            if isinstance(result, ProgramBase):
                return result
            return Pure(result)
        return _GeneratorDriver(result, self.__name__).start()

    def __repr__(self) -> str:
        return f"<do {self.__qualname__}>"


def do(func: Callable[P, ProgramGenerator[T]]) -> DoFunction[P, T]:
    """
    Decorator that converts a generator function into a Program builder.

    Args:
        func: Generator function yielding Programs. Plain functions are
            accepted too; their return value is lifted with ``pure``.

    Returns:
        A callable with the same signature returning ``Program[T]``.
    """
    return DoFunction(func)


__all__ = ["DoFunction", "ProgramGenerator", "do"]
