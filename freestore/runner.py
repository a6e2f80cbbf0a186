"""Fold engine: runs a Program through an Interpreter.

The fold is a small machine. Its state is the program still to run plus a
continuation stack (an immutable cons list, so multi-shot contexts such as
LIST can resume the same state more than once):

- FlatMap(source, k): push k, continue with source
- Pure(value): pop the next continuation and apply it to value; with an
  empty stack the fold is done
- Suspend(command): hand the command to the interpreter; its result
  re-enters the machine as Pure(result)

Only the effect context's ``tail_rec_m`` sequences steps, and every bundled
context implements it as a loop, so programs of any length fold without
growing the Python call stack.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from freestore.effects import AsyncioEffect, Continue, Done, IdentityEffect
from freestore.errors import StepLimitExceededError
from freestore.program import FlatMap, ProgramBase, Pure, Suspend

if TYPE_CHECKING:
    from freestore.commands import Command
    from freestore.interpreter import Interpreter

T = TypeVar("T")

logger = logging.getLogger(__name__)

# (continuation, rest) pairs; None is the empty stack.
Kontinuation = tuple[Callable[[Any], ProgramBase[Any]], "Kontinuation"] | None


@dataclass(frozen=True)
class FoldState(Generic[T]):
    program: ProgramBase[Any]
    kont: Kontinuation = None
    steps: int = 0


@dataclass(frozen=True)
class Dispatch:
    """The machine stopped at a command that needs the interpreter."""

    command: Command
    kont: Kontinuation


def _apply(continuation: Callable[[Any], ProgramBase[Any]], value: Any) -> ProgramBase[Any]:
    next_program = continuation(value)
    if not isinstance(next_program, ProgramBase):
        raise TypeError(
            f"continuation must return a Program; got {type(next_program).__name__}"
        )
    return next_program


def advance(program: ProgramBase[Any], kont: Kontinuation = None) -> Done[Any] | Dispatch:
    """Run pure steps until the program finishes or reaches a command."""

    while True:
        if isinstance(program, FlatMap):
            kont = (program.continuation, kont)
            program = program.source
        elif isinstance(program, Pure):
            if kont is None:
                return Done(program.value)
            continuation, kont = kont
            program = _apply(continuation, program.value)
        elif isinstance(program, Suspend):
            return Dispatch(program.command, kont)
        else:
            raise TypeError(f"Cannot run {type(program).__name__}; expected a Program")


class Runner:
    """Folds programs through one interpreter.

    Args:
        interpreter: Maps commands into its effect context.
        max_steps: Optional budget of dispatched commands per run.
    """

    def __init__(self, interpreter: Interpreter, *, max_steps: int | None = None) -> None:
        if max_steps is not None and max_steps < 0:
            raise ValueError(f"max_steps must be >= 0, got {max_steps}")
        self.interpreter = interpreter
        self.max_steps = max_steps

    @property
    def effect(self) -> Any:
        return self.interpreter.effect

    def _step(self, state: FoldState[Any]) -> Any:
        effect = self.interpreter.effect
        outcome = advance(state.program, state.kont)
        if isinstance(outcome, Done):
            return effect.pure(outcome)

        steps = state.steps + 1
        if self.max_steps is not None and steps > self.max_steps:
            raise StepLimitExceededError(self.max_steps)

        command = outcome.command
        if logger.isEnabledFor(logging.DEBUG):
            if command.created_at is not None:
                logger.debug(
                    "step %d: %s (created at %s)",
                    steps,
                    command,
                    command.created_at.format_location(),
                )
            else:
                logger.debug("step %d: %s", steps, command)

        kont = outcome.kont
        return effect.map(
            self.interpreter.interpret(command),
            lambda result: Continue(FoldState(Pure(result), kont, steps)),
        )

    def run(self, program: ProgramBase[T]) -> Any:
        """Fold ``program`` into a single value of the interpreter's effect context."""

        if not isinstance(program, ProgramBase):
            raise TypeError(f"run() expects a Program; got {type(program).__name__}")
        return self.interpreter.effect.tail_rec_m(FoldState(program), self._step)


def run(
    program: ProgramBase[T],
    interpreter: Interpreter,
    *,
    max_steps: int | None = None,
) -> Any:
    """Fold ``program`` through ``interpreter``; the Runner never catches its failures."""

    return Runner(interpreter, max_steps=max_steps).run(program)


def run_sync(
    program: ProgramBase[T],
    interpreter: Interpreter,
    *,
    max_steps: int | None = None,
) -> T:
    """Run with an identity-context interpreter and return the plain result."""

    if not isinstance(interpreter.effect, IdentityEffect):
        raise TypeError(
            f"run_sync requires an identity-context interpreter; "
            f"{type(interpreter).__name__} targets {interpreter.effect!r}"
        )
    return run(program, interpreter, max_steps=max_steps)


async def run_async(
    program: ProgramBase[T],
    interpreter: Interpreter,
    *,
    max_steps: int | None = None,
) -> T:
    """Run with an asyncio-context interpreter and await the result."""

    if not isinstance(interpreter.effect, AsyncioEffect):
        raise TypeError(
            f"run_async requires an asyncio-context interpreter; "
            f"{type(interpreter).__name__} targets {interpreter.effect!r}"
        )
    return await run(program, interpreter, max_steps=max_steps)


__all__ = [
    "Dispatch",
    "FoldState",
    "Runner",
    "advance",
    "run",
    "run_async",
    "run_sync",
]
