"""
Pytest configuration for freestore tests.

Provides a parameterized ``interpreter`` fixture so the same program-level
tests run against every store-backed effect context and must agree.
"""

import asyncio
from collections.abc import Callable
from typing import Any, TypeVar

import pytest

from freestore import (
    AsyncInterpreter,
    FrozenDict,
    InMemoryInterpreter,
    SafeInterpreter,
    StateInterpreter,
    run,
    run_async,
)
from freestore.program import Program

T = TypeVar("T")


class StoreBackedRunner:
    """Runs a program to its plain result, whatever the effect context."""

    def __init__(self, interpreter_type: str, run_to_value: Callable[[Program[Any]], Any]):
        self.interpreter_type = interpreter_type
        self._run_to_value = run_to_value

    def __call__(self, program: Program[T]) -> T:
        return self._run_to_value(program)

    def __repr__(self) -> str:
        return f"StoreBackedRunner({self.interpreter_type})"


def _run_identity(program: Program[Any]) -> Any:
    return run(program, InMemoryInterpreter())


def _run_result(program: Program[Any]) -> Any:
    return run(program, SafeInterpreter()).unwrap()


def _run_state(program: Program[Any]) -> Any:
    return run(program, StateInterpreter()).eval_state(FrozenDict())


def _run_asyncio(program: Program[Any]) -> Any:
    return asyncio.run(run_async(program, AsyncInterpreter()))


_RUNNERS = {
    "identity": _run_identity,
    "result": _run_result,
    "state": _run_state,
    "asyncio": _run_asyncio,
}


@pytest.fixture(params=sorted(_RUNNERS))
def interpreter(request: pytest.FixtureRequest) -> StoreBackedRunner:
    """
    Parameterized fixture running a program on a fresh store in each context.

    Each runner has an ``interpreter_type`` attribute ("identity", "result",
    "state" or "asyncio").
    """
    return StoreBackedRunner(request.param, _RUNNERS[request.param])


@pytest.fixture
def memory_interpreter() -> InMemoryInterpreter:
    """Fixture providing only the synchronous in-memory interpreter."""
    return InMemoryInterpreter()
