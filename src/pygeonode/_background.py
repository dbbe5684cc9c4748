"""Fire-and-forget task bookkeeping."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any

_logger = logging.getLogger(__name__)


class BackgroundTasks:
    """Hold strong references to detached tasks until they finish.

    Tasks spawned here only ever write into the geo cache; nobody awaits
    their results. Keyed spawns are deduplicated while the previous task
    with the same key is still running.
    """

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task[Any]] = set()
        self._keyed: dict[str, asyncio.Task[Any]] = {}

    def spawn(self, coro: Coroutine[Any, Any, Any], *, key: str | None = None) -> asyncio.Task[Any] | None:
        """Schedule *coro* on the running loop.

        Returns ``None`` (and closes the coroutine) when a task with the
        same *key* is already in flight or when no loop is running.
        """
        if key is not None:
            existing = self._keyed.get(key)
            if existing is not None and not existing.done():
                coro.close()
                return None
        try:
            task = asyncio.get_running_loop().create_task(coro)
        except RuntimeError:
            coro.close()
            _logger.debug("No running event loop; background task %s skipped", key or "<anonymous>")
            return None

        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        if key is not None:
            self._keyed[key] = task
            task.add_done_callback(lambda t, k=key: self._forget(k, t))
        return task

    def _forget(self, key: str, task: asyncio.Task[Any]) -> None:
        if self._keyed.get(key) is task:
            del self._keyed[key]

    def in_flight(self, key: str) -> bool:
        task = self._keyed.get(key)
        return task is not None and not task.done()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def join(self) -> None:
        """Wait until every task spawned so far (and any they spawn) is done."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
