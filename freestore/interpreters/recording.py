"""No-op interpreter recording every command it sees, for tests and dry runs."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from freestore._vendor import NOTHING, Maybe, Some
from freestore.commands import Command, Delete, Get, Put
from freestore.effects import IDENTITY
from freestore.interpreter import CommandInterpreter, check_expected_type


class RecordingInterpreter(CommandInterpreter):
    """Records commands in order without touching any store.

    Gets are answered from the fixed ``responses`` mapping; a Put never
    changes what a later Get returns.
    """

    effect = IDENTITY

    def __init__(self, responses: Mapping[str, Any] | None = None) -> None:
        self.responses: dict[str, Any] = dict(responses or {})
        self.calls: list[Command] = []

    def handle_put(self, command: Put) -> None:
        self.calls.append(command)
        return None

    def handle_get(self, command: Get) -> Maybe[Any]:
        self.calls.append(command)
        if command.key in self.responses:
            return check_expected_type(command, Some(self.responses[command.key]))
        return NOTHING

    def handle_delete(self, command: Delete) -> None:
        self.calls.append(command)
        return None

    def call_log(self) -> list[str]:
        """Recorded commands rendered as ``put(key, value)``-style strings."""
        return [str(command) for command in self.calls]


__all__ = ["RecordingInterpreter"]
