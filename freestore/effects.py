"""Effect contexts an interpreter can target.

An effect context is the monad a program is folded into. Each one supplies:

- pure(value): inject a plain value (unit)
- flat_map(fa, f): sequence an effect value with a continuation (bind)
- tail_rec_m(seed, step): run ``step`` until it reports Done, iteratively

The runner only ever sequences through ``tail_rec_m``, so folding stays
stack-safe for programs of any length as long as each context loops instead
of recursing.

Provided contexts:
- IDENTITY: the bare value, evaluated immediately
- RESULT: ``Ok``/``Err``; the first ``Err`` stops the fold
- LIST: every possible outcome, in order
- ASYNCIO: awaitables, awaited strictly one after another
- STATE: ``StateAction`` functions threading a store through the fold
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Iterator
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from freestore._vendor import Err, Ok, Result

A = TypeVar("A")
B = TypeVar("B")
S = TypeVar("S")


@dataclass(frozen=True)
class Continue(Generic[S]):
    """Loop again from ``state``."""

    state: S


@dataclass(frozen=True)
class Done(Generic[A]):
    """Stop looping with ``value``."""

    value: A


Step = Continue[Any] | Done[Any]


def _check_step(step: Any) -> Step:
    if not isinstance(step, (Continue, Done)):
        raise TypeError(f"tail_rec_m step must return Continue or Done; got {step!r}")
    return step


class EffectType(ABC):
    """Monad operations for one effect context."""

    name: str = "effect"

    @abstractmethod
    def pure(self, value: A) -> Any:
        ...

    @abstractmethod
    def flat_map(self, fa: Any, f: Callable[[Any], Any]) -> Any:
        ...

    def map(self, fa: Any, f: Callable[[Any], B]) -> Any:
        return self.flat_map(fa, lambda a: self.pure(f(a)))

    @abstractmethod
    def tail_rec_m(self, seed: S, step: Callable[[S], Any]) -> Any:
        """Apply ``step`` from ``seed`` until it yields ``Done`` inside the context."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class IdentityEffect(EffectType):
    name = "identity"

    def pure(self, value: A) -> A:
        return value

    def flat_map(self, fa: A, f: Callable[[A], B]) -> B:
        return f(fa)

    def map(self, fa: A, f: Callable[[A], B]) -> B:
        return f(fa)

    def tail_rec_m(self, seed: S, step: Callable[[S], Step]) -> Any:
        current = _check_step(step(seed))
        while isinstance(current, Continue):
            current = _check_step(step(current.state))
        return current.value


class ResultEffect(EffectType):
    name = "result"

    def pure(self, value: A) -> Result[A]:
        return Ok(value)

    def flat_map(self, fa: Result[A], f: Callable[[A], Result[B]]) -> Result[B]:
        return fa.and_then(f)

    def tail_rec_m(self, seed: S, step: Callable[[S], Result[Step]]) -> Result[Any]:
        state = seed
        while True:
            outcome = step(state)
            if isinstance(outcome, Err):
                return outcome
            if not isinstance(outcome, Ok):
                raise TypeError(f"result context expects Ok or Err; got {outcome!r}")
            current = _check_step(outcome.value)
            if isinstance(current, Done):
                return Ok(current.value)
            state = current.state


class ListEffect(EffectType):
    name = "list"

    def pure(self, value: A) -> list[A]:
        return [value]

    def flat_map(self, fa: list[A], f: Callable[[A], list[B]]) -> list[B]:
        return [b for a in fa for b in f(a)]

    def map(self, fa: list[A], f: Callable[[A], B]) -> list[B]:
        return [f(a) for a in fa]

    def tail_rec_m(self, seed: S, step: Callable[[S], list[Step]]) -> list[Any]:
        results: list[Any] = []
        # Depth-first, left to right, so results keep branch order.
        branches: list[Iterator[Step]] = [iter(step(seed))]
        while branches:
            try:
                current = _check_step(next(branches[-1]))
            except StopIteration:
                branches.pop()
                continue
            if isinstance(current, Continue):
                branches.append(iter(step(current.state)))
            else:
                results.append(current.value)
        return results


class AsyncioEffect(EffectType):
    """Effect values are awaitables; each is awaited exactly once."""

    name = "asyncio"

    def pure(self, value: A) -> Awaitable[A]:
        async def _pure() -> A:
            return value

        return _pure()

    def flat_map(
        self, fa: Awaitable[A], f: Callable[[A], Awaitable[B]]
    ) -> Awaitable[B]:
        async def _bound() -> B:
            return await f(await fa)

        return _bound()

    def map(self, fa: Awaitable[A], f: Callable[[A], B]) -> Awaitable[B]:
        async def _mapped() -> B:
            return f(await fa)

        return _mapped()

    def tail_rec_m(
        self, seed: S, step: Callable[[S], Awaitable[Step]]
    ) -> Awaitable[Any]:
        async def _loop() -> Any:
            current = _check_step(await step(seed))
            while isinstance(current, Continue):
                # Let other tasks run between steps.
                await asyncio.sleep(0)
                current = _check_step(await step(current.state))
            return current.value

        return _loop()


@dataclass(frozen=True)
class StateAction(Generic[S, A]):
    """A function from a state to a value and the next state."""

    run: Callable[[S], tuple[A, S]]

    def run_state(self, initial: S) -> tuple[A, S]:
        return self.run(initial)

    def eval_state(self, initial: S) -> A:
        return self.run(initial)[0]

    def exec_state(self, initial: S) -> S:
        return self.run(initial)[1]


class StateEffect(EffectType):
    name = "state"

    def pure(self, value: A) -> StateAction[Any, A]:
        return StateAction(lambda state: (value, state))

    def flat_map(
        self, fa: StateAction[S, A], f: Callable[[A], StateAction[S, B]]
    ) -> StateAction[S, B]:
        def run(state: S) -> tuple[B, S]:
            value, next_state = fa.run(state)
            return f(value).run(next_state)

        return StateAction(run)

    def map(self, fa: StateAction[S, A], f: Callable[[A], B]) -> StateAction[S, B]:
        def run(state: S) -> tuple[B, S]:
            value, next_state = fa.run(state)
            return f(value), next_state

        return StateAction(run)

    def tail_rec_m(
        self, seed: Any, step: Callable[[Any], StateAction[S, Step]]
    ) -> StateAction[S, Any]:
        def run(state: S) -> tuple[Any, S]:
            current, state = step(seed).run(state)
            current = _check_step(current)
            while isinstance(current, Continue):
                current, state = step(current.state).run(state)
                current = _check_step(current)
            return current.value, state

        return StateAction(run)


IDENTITY = IdentityEffect()
RESULT = ResultEffect()
LIST = ListEffect()
ASYNCIO = AsyncioEffect()
STATE = StateEffect()

__all__ = [
    "ASYNCIO",
    "IDENTITY",
    "LIST",
    "RESULT",
    "STATE",
    "AsyncioEffect",
    "Continue",
    "Done",
    "EffectType",
    "IdentityEffect",
    "ListEffect",
    "ResultEffect",
    "StateAction",
    "StateEffect",
    "Step",
]
