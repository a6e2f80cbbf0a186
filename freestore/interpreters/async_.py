"""Asynchronous interpreter for asyncio.

Every command becomes a coroutine. The runner awaits each one before
building the next step, so commands never overlap within a run; the lock
serialises runs that share one interpreter. The lock is recreated
when the interpreter is first used from a new event loop, so one instance
can be reused across ``asyncio.run`` calls.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from typing import Any

from freestore._vendor import Maybe
from freestore.commands import Delete, Get, Put
from freestore.effects import ASYNCIO
from freestore.interpreter import CommandInterpreter, check_expected_type
from freestore.storage import InMemoryStore, KeyValueStore

logger = logging.getLogger(__name__)


class AsyncInterpreter(CommandInterpreter):
    """Runs commands as coroutines against ``store``.

    Args:
        store: Backing store. Defaults to a fresh InMemoryStore.
        latency: Seconds to sleep before each command, simulating I/O.
    """

    effect = ASYNCIO

    def __init__(self, store: KeyValueStore | None = None, *, latency: float = 0.0) -> None:
        if latency < 0:
            raise ValueError(f"latency must be >= 0, got {latency}")
        self.store: KeyValueStore = store if store is not None else InMemoryStore()
        self.latency = latency
        self._lock_loop: asyncio.AbstractEventLoop | None = None
        self._loop_lock: asyncio.Lock | None = None

    def _lock(self) -> asyncio.Lock:
        loop = asyncio.get_running_loop()
        if self._loop_lock is None or self._lock_loop is not loop:
            self._lock_loop = loop
            self._loop_lock = asyncio.Lock()
        return self._loop_lock

    async def _pause(self) -> None:
        await asyncio.sleep(self.latency)

    def handle_put(self, command: Put) -> Awaitable[None]:
        async def _put() -> None:
            async with self._lock():
                await self._pause()
                logger.debug("%s", command)
                self.store.put(command.key, command.value)

        return _put()

    def handle_get(self, command: Get) -> Awaitable[Maybe[Any]]:
        async def _get() -> Maybe[Any]:
            async with self._lock():
                await self._pause()
                logger.debug("%s", command)
                return check_expected_type(command, self.store.get(command.key))

        return _get()

    def handle_delete(self, command: Delete) -> Awaitable[None]:
        async def _delete() -> None:
            async with self._lock():
                await self._pause()
                logger.debug("%s", command)
                self.store.delete(command.key)

        return _delete()


__all__ = ["AsyncInterpreter"]
