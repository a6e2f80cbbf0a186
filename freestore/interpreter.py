"""
Interpreter contract for the freestore system.

An interpreter is a natural transformation from commands to effect values: a
single ``interpret(command)`` operation, total over the grammar, paired with
the ``EffectType`` its values live in. It is the only place side effects
happen.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Never, Protocol, runtime_checkable

from freestore._vendor import Maybe, Some
from freestore.commands import Command, Delete, Get, Put, is_command
from freestore.effects import IDENTITY, EffectType
from freestore.errors import TypeMismatchError, UnhandledCommandError


@runtime_checkable
class Interpreter(Protocol):
    """Anything that can map every command into its effect context."""

    @property
    def effect(self) -> EffectType:
        ...

    def interpret(self, command: Command) -> Any:
        ...


def unhandled_command(command: Never) -> Never:
    """Exhaustiveness guard for command dispatch.

    Type checkers reject a call here unless every variant was matched before;
    at run time it rejects objects that are not commands at all.
    """
    raise UnhandledCommandError(command)


class CommandInterpreter(ABC):
    """Base class dispatching each command variant to its own handler.

    One abstract handler per variant: a subclass that misses a variant
    cannot be instantiated.
    """

    effect: EffectType = IDENTITY

    def interpret(self, command: Command) -> Any:
        match command:
            case Put():
                return self.handle_put(command)
            case Get():
                return self.handle_get(command)
            case Delete():
                return self.handle_delete(command)
            case _:
                unhandled_command(command)

    @abstractmethod
    def handle_put(self, command: Put) -> Any:
        ...

    @abstractmethod
    def handle_get(self, command: Get) -> Any:
        ...

    @abstractmethod
    def handle_delete(self, command: Delete) -> Any:
        ...

    def __call__(self, command: Command) -> Any:
        return self.interpret(command)


@dataclass(frozen=True)
class FunctionInterpreter:
    """Wrap a plain ``command -> effect value`` function as an interpreter.

    Example:
        def to_strings(command):
            return [str(command)]

        interpreter = FunctionInterpreter(LIST, to_strings)
    """

    effect: EffectType
    func: Callable[[Command], Any]

    def interpret(self, command: Command) -> Any:
        if not is_command(command):
            raise UnhandledCommandError(command)
        return self.func(command)


def check_expected_type(command: Get, found: Maybe[Any]) -> Maybe[Any]:
    """Return ``found`` unchanged, or raise TypeMismatchError if its value has the wrong type."""

    if (
        command.expected_type is not None
        and isinstance(found, Some)
        and not isinstance(found.value, command.expected_type)
    ):
        raise TypeMismatchError(
            command.key, command.expected_type, found.value, command.created_at
        )
    return found


__all__ = [
    "CommandInterpreter",
    "FunctionInterpreter",
    "Interpreter",
    "check_expected_type",
    "unhandled_command",
]
