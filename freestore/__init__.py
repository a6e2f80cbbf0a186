"""
freestore - Free-monad programs over a key-value store, with pluggable interpreters.

Programs are built as immutable data from put/get/delete commands, then
folded through an interpreter that decides what the commands mean:
executed in memory, awaited with asyncio, threaded through an immutable
store, explored over every possible outcome, or just recorded.

Example:
    >>> from freestore import InMemoryInterpreter, get, put, run
    >>>
    >>> program = put("toto", 3).then(get("toto"))
    >>> run(program, InMemoryInterpreter())
    Some(value=3)
"""

from freestore._vendor import NOTHING, Err, FrozenDict, Maybe, Nothing, Ok, Result, Some
from freestore.commands import Command, Delete, Get, Put
from freestore.do import do
from freestore.dsl import (
    and_then,
    defer,
    delete,
    fmap,
    get,
    get_or_else,
    pure,
    put,
    sequence,
    traverse,
    update,
)
from freestore.effects import (
    ASYNCIO,
    IDENTITY,
    LIST,
    RESULT,
    STATE,
    EffectType,
    StateAction,
)
from freestore.errors import (
    ContinuationReuseError,
    FreeStoreError,
    StepLimitExceededError,
    TypeMismatchError,
    UnhandledCommandError,
)
from freestore.interpreter import CommandInterpreter, FunctionInterpreter, Interpreter
from freestore.interpreters import (
    AsyncInterpreter,
    InMemoryInterpreter,
    RecordingInterpreter,
    SafeInterpreter,
    SimulationInterpreter,
    StateInterpreter,
)
from freestore.program import FlatMap, Program, Pure, Suspend
from freestore.runner import Runner, run, run_async, run_sync
from freestore.storage import InMemoryStore, KeyValueStore

__all__ = [
    "ASYNCIO",
    "IDENTITY",
    "LIST",
    "NOTHING",
    "RESULT",
    "STATE",
    "AsyncInterpreter",
    "Command",
    "CommandInterpreter",
    "ContinuationReuseError",
    "Delete",
    "EffectType",
    "Err",
    "FlatMap",
    "FreeStoreError",
    "FrozenDict",
    "FunctionInterpreter",
    "Get",
    "InMemoryInterpreter",
    "InMemoryStore",
    "Interpreter",
    "KeyValueStore",
    "Maybe",
    "Nothing",
    "Ok",
    "Program",
    "Pure",
    "Put",
    "RecordingInterpreter",
    "Result",
    "Runner",
    "SafeInterpreter",
    "SimulationInterpreter",
    "Some",
    "StateAction",
    "StateInterpreter",
    "StepLimitExceededError",
    "Suspend",
    "TypeMismatchError",
    "UnhandledCommandError",
    "and_then",
    "defer",
    "delete",
    "do",
    "fmap",
    "get",
    "get_or_else",
    "pure",
    "put",
    "run",
    "run_async",
    "run_sync",
    "sequence",
    "traverse",
    "update",
]
