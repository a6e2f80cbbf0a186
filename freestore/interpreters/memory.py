"""Synchronous interpreters over a mutable key-value store.

- InMemoryInterpreter: identity context; a TypeMismatch is raised
- SafeInterpreter: result context; a TypeMismatch becomes ``Err`` and
  stops the fold

Usage:
    from freestore import InMemoryInterpreter, get, put, run

    program = put("toto", 3).then(get("toto"))
    run(program, InMemoryInterpreter())
    # Some(value=3)
"""

from __future__ import annotations

import logging
from typing import Any

from freestore._vendor import Err, Maybe, Ok, Result
from freestore.commands import Delete, Get, Put
from freestore.effects import IDENTITY, RESULT
from freestore.errors import TypeMismatchError
from freestore.interpreter import CommandInterpreter, check_expected_type
from freestore.storage import InMemoryStore, KeyValueStore

logger = logging.getLogger(__name__)


class InMemoryInterpreter(CommandInterpreter):
    """Executes commands immediately against ``store``.

    The store is owned by this interpreter instance; pass one in to share
    or inspect it, otherwise a fresh ``InMemoryStore`` is created.
    """

    effect = IDENTITY

    def __init__(self, store: KeyValueStore | None = None) -> None:
        self.store: KeyValueStore = store if store is not None else InMemoryStore()

    def handle_put(self, command: Put) -> None:
        logger.debug("%s", command)
        self.store.put(command.key, command.value)
        return None

    def handle_get(self, command: Get) -> Maybe[Any]:
        logger.debug("%s", command)
        return check_expected_type(command, self.store.get(command.key))

    def handle_delete(self, command: Delete) -> None:
        logger.debug("%s", command)
        self.store.delete(command.key)
        return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.store!r})"


class SafeInterpreter(InMemoryInterpreter):
    """Like InMemoryInterpreter, but failures are carried as ``Err`` values."""

    effect = RESULT

    def handle_put(self, command: Put) -> Result[None]:
        return Ok(super().handle_put(command))

    def handle_get(self, command: Get) -> Result[Maybe[Any]]:
        try:
            return Ok(super().handle_get(command))
        except TypeMismatchError as exc:
            logger.debug("%s failed: %s", command, exc)
            return Err(exc)

    def handle_delete(self, command: Delete) -> Result[None]:
        return Ok(super().handle_delete(command))


__all__ = ["InMemoryInterpreter", "SafeInterpreter"]
