"""High-level geo-aware node balancer."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import Any

import aiohttp

from pygeonode._background import BackgroundTasks
from pygeonode._transport import HttpTransport, Transport
from pygeonode.cache import GeoCache
from pygeonode.config import GeoNodeConfig
from pygeonode.exceptions import GeoNodeError
from pygeonode.lookup import GeoLookupClient
from pygeonode.models.coordinate import Coordinate
from pygeonode.models.node import NodeRecord
from pygeonode.registry import GeoRoutedRegistry, NodeRegistry
from pygeonode.resolver import LocationResolver
from pygeonode.scheduler import RefreshScheduler
from pygeonode.selector import NearestNodeSelector, Target

_logger = logging.getLogger(__name__)


class GeoBalancer:
    """Place new work on the backend node nearest to it.

    Usage::

        async with GeoBalancer(config) as balancer:
            registry = balancer.start(host_registry)
            registry.create({"guildId": "123"})  # node picked for you
            ...
            balancer.stop()

    The geo cache survives :meth:`stop`; pass the same :class:`GeoCache`
    to a new balancer (or restart this one) to keep it warm.
    """

    def __init__(
        self,
        config: GeoNodeConfig | None = None,
        *,
        cache: GeoCache | None = None,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config or GeoNodeConfig()
        self._cache = cache if cache is not None else GeoCache()
        self._external_session = session is not None
        self._http_session = session
        self._transport = transport
        self._tasks = BackgroundTasks()
        self._resolver: LocationResolver | None = None
        self._selector: NearestNodeSelector | None = None
        self._scheduler: RefreshScheduler | None = None
        self._registry: GeoRoutedRegistry | None = None
        if transport is not None:
            self._build(transport)

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> GeoBalancer:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = HttpTransport(self._http_session, user_agent=self._config.user_agent)
            self._build(self._transport)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Stop, let background lookups finish, and release the HTTP session."""
        self.stop()
        await self._tasks.join()
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None

    def _build(self, transport: Transport) -> None:
        lookup = GeoLookupClient(self._config, transport)
        self._resolver = LocationResolver(self._config, self._cache, lookup, self._tasks)
        self._selector = NearestNodeSelector(self._config, self._resolver)

    # ------------------------------------------------------------------
    # Start / stop
    # ------------------------------------------------------------------

    @property
    def config(self) -> GeoNodeConfig:
        return self._config

    @property
    def cache(self) -> GeoCache:
        return self._cache

    @property
    def tasks(self) -> BackgroundTasks:
        return self._tasks

    @property
    def is_started(self) -> bool:
        return self._registry is not None

    @property
    def scheduler(self) -> RefreshScheduler | None:
        return self._scheduler

    def is_routing(self, registry: GeoRoutedRegistry) -> bool:
        """True while *registry* is the wrapper returned by the latest :meth:`start`."""
        return self._registry is registry

    def start(self, registry: NodeRegistry) -> GeoRoutedRegistry:
        """Wrap *registry* and begin the optional refresh schedule.

        Must be called from a running event loop. Returns the wrapper the
        host should use in place of *registry*.
        """
        resolver = self._require_resolver()
        if self._registry is not None:
            self.stop()

        self._registry = GeoRoutedRegistry(registry, self)
        if self._config.refresh_enabled:
            self._scheduler = RefreshScheduler(resolver, lambda: registry.nodes, self._config.refresh_interval)
            self._scheduler.start()
        _logger.debug("Geo balancer started (refresh_interval=%ss)", self._config.refresh_interval)
        return self._registry

    def stop(self) -> None:
        """Stop the refresh timer and turn the wrapper into a pass-through.

        Cached coordinates and in-flight lookups are left alone.
        """
        if self._scheduler is not None:
            self._scheduler.stop()
            self._scheduler = None
        if self._registry is not None:
            self._registry = None
            _logger.debug("Geo balancer stopped")

    def clear_cache(self) -> None:
        """Drop all cached coordinates (for a cold restart)."""
        self._cache.clear()

    # ------------------------------------------------------------------
    # Selection and hints
    # ------------------------------------------------------------------

    def select(self, target: Target = None, *, nodes: Iterable[NodeRecord] | None = None) -> str | None:
        """Nearest node key for *target*.

        *nodes* defaults to the started registry's pool; ``None`` is
        returned when the balancer is stopped.
        """
        registry = self._registry
        if registry is None:
            return None
        pool = nodes if nodes is not None else registry.nodes
        return self._require_selector().select(pool, target)

    def record_region_hint(self, target_id: str, region: str | None) -> Coordinate | None:
        """Remember that *target_id* lives in *region* (unknown regions are ignored)."""
        return self._require_resolver().record_target_region(target_id, region)

    async def resolve_target_location(self, target_id: str) -> Coordinate | None:
        return await self._require_resolver().resolve_target_location(target_id)

    async def refresh_now(self) -> None:
        """Run one resolution pass over the started registry and wait for it."""
        registry = self._registry
        if registry is None:
            return
        resolver = self._require_resolver()
        await asyncio.gather(*(resolver.refresh_node(node) for node in registry.nodes), return_exceptions=True)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_resolver(self) -> LocationResolver:
        if self._resolver is None:
            raise GeoNodeError("Balancer not initialized. Use 'async with GeoBalancer(...) as balancer:'")
        return self._resolver

    def _require_selector(self) -> NearestNodeSelector:
        if self._selector is None:
            raise GeoNodeError("Balancer not initialized. Use 'async with GeoBalancer(...) as balancer:'")
        return self._selector
