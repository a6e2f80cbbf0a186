"""Simulation interpreter exploring every possible store content.

The store is uncertain: each key maps to the values it might hold. A Get
branches into one outcome per candidate (plus ``NOTHING`` when the key may
be absent); Put and Delete are recorded as planned writes and do not change
the candidates. Folding yields the list of all outcomes, in branch order.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from freestore._vendor import NOTHING, Maybe, Some
from freestore.commands import Command, Delete, Get, Put
from freestore.effects import LIST
from freestore.errors import TypeMismatchError
from freestore.interpreter import CommandInterpreter, check_expected_type

logger = logging.getLogger(__name__)


class SimulationInterpreter(CommandInterpreter):
    """
    Args:
        candidates: Possible values per key.
        allow_missing: Whether every key may also be absent. Keys without
            candidates are always absent.
    """

    effect = LIST

    def __init__(
        self,
        candidates: Mapping[str, Sequence[Any]] | None = None,
        *,
        allow_missing: bool = False,
    ) -> None:
        self.candidates: dict[str, tuple[Any, ...]] = {
            key: tuple(values) for key, values in (candidates or {}).items()
        }
        self.allow_missing = allow_missing
        self.writes: list[Command] = []

    def handle_put(self, command: Put) -> list[None]:
        self.writes.append(command)
        return [None]

    def handle_get(self, command: Get) -> list[Maybe[Any]]:
        values = self.candidates.get(command.key, ())
        outcomes: list[Maybe[Any]] = []
        for value in values:
            try:
                outcomes.append(check_expected_type(command, Some(value)))
            except TypeMismatchError:
                # A candidate of the wrong type is not a possible outcome.
                logger.debug("%s: dropping candidate %r", command, value)
        if self.allow_missing or not values:
            outcomes.append(NOTHING)
        logger.debug("%s -> %d outcome(s)", command, len(outcomes))
        return outcomes

    def handle_delete(self, command: Delete) -> list[None]:
        self.writes.append(command)
        return [None]


__all__ = ["SimulationInterpreter"]
