"""Pure interpreter threading an immutable store through the fold.

Commands become ``StateAction`` values over a ``FrozenDict``; nothing is
mutated, so the same folded program can be replayed from any initial store.

Usage:
    from freestore import StateInterpreter, get, put, run

    action = run(put("x", 10).then(get("x")), StateInterpreter())
    value, store = action.run_state(FrozenDict())
    # value == Some(10), store == frozendict({'x': 10})
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from freestore._vendor import NOTHING, FrozenDict, Maybe, Some
from freestore.commands import Delete, Get, Put
from freestore.effects import STATE, StateAction
from freestore.interpreter import CommandInterpreter, check_expected_type

logger = logging.getLogger(__name__)


def _freeze(store: Mapping[str, Any]) -> FrozenDict:
    if isinstance(store, FrozenDict):
        return store
    return FrozenDict(store)


class StateInterpreter(CommandInterpreter):
    """Maps each command to a store transition; holds no state itself."""

    effect = STATE

    def handle_put(self, command: Put) -> StateAction[FrozenDict, None]:
        def run(store: Mapping[str, Any]) -> tuple[None, FrozenDict]:
            logger.debug("%s", command)
            return None, _freeze(store).set(command.key, command.value)

        return StateAction(run)

    def handle_get(self, command: Get) -> StateAction[FrozenDict, Maybe[Any]]:
        def run(store: Mapping[str, Any]) -> tuple[Maybe[Any], FrozenDict]:
            logger.debug("%s", command)
            frozen = _freeze(store)
            found = Some(frozen[command.key]) if command.key in frozen else NOTHING
            return check_expected_type(command, found), frozen

        return StateAction(run)

    def handle_delete(self, command: Delete) -> StateAction[FrozenDict, None]:
        def run(store: Mapping[str, Any]) -> tuple[None, FrozenDict]:
            logger.debug("%s", command)
            frozen = _freeze(store)
            if command.key in frozen:
                frozen = frozen.delete(command.key)
            return None, frozen

        return StateAction(run)


__all__ = ["StateInterpreter"]
