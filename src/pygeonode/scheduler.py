"""Periodic background re-resolution of node locations."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable, Iterable

from pygeonode.exceptions import GeoConfigError
from pygeonode.models.node import NodeRecord, node_key
from pygeonode.resolver import LocationResolver

_logger = logging.getLogger(__name__)


class RefreshScheduler:
    """Re-resolve every known node on a fixed interval.

    Two states: idle (no timer) and running. :meth:`start` fires one pass
    right away and then one per tick. :meth:`stop` only cancels the timer;
    passes already in flight finish and still write into the cache.
    """

    def __init__(
        self,
        resolver: LocationResolver,
        nodes: Callable[[], Iterable[NodeRecord]],
        interval: float,
    ) -> None:
        if interval <= 0:
            raise GeoConfigError(f"refresh interval must be > 0, got {interval}")
        self._resolver = resolver
        self._nodes = nodes
        self._interval = interval
        self._timer: asyncio.Task[None] | None = None
        self._passes = 0

    @property
    def is_running(self) -> bool:
        return self._timer is not None and not self._timer.done()

    @property
    def passes_started(self) -> int:
        return self._passes

    def start(self) -> None:
        """idle -> running; requires a running event loop."""
        if self.is_running:
            return
        loop = asyncio.get_running_loop()
        self._spawn_pass()
        self._timer = loop.create_task(self._tick_forever())
        _logger.debug("Refresh scheduler started (interval=%ss)", self._interval)

    def stop(self) -> None:
        """running -> idle; in-flight passes are left to complete."""
        timer = self._timer
        self._timer = None
        if timer is not None and not timer.done():
            timer.cancel()
            _logger.debug("Refresh scheduler stopped")

    async def aclose(self) -> None:
        """Stop and wait for the timer task to unwind."""
        timer = self._timer
        self.stop()
        if timer is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await timer

    async def _tick_forever(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            self._spawn_pass()

    def _spawn_pass(self) -> None:
        self._passes += 1
        self._resolver.tasks.spawn(self.run_pass())

    async def run_pass(self) -> None:
        """Resolve all nodes concurrently; one failure never aborts the rest."""
        nodes = list(self._nodes())
        if not nodes:
            return
        results = await asyncio.gather(
            *(self._resolver.refresh_node(node) for node in nodes),
            return_exceptions=True,
        )
        for node, result in zip(nodes, results, strict=True):
            if isinstance(result, BaseException):
                _logger.debug("Refresh of node %s failed", node_key(node), exc_info=result)
