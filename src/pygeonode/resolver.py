"""Location resolution for nodes, targets and the host itself."""

from __future__ import annotations

import logging
from typing import Any

from pygeonode._background import BackgroundTasks
from pygeonode.cache import GeoCache
from pygeonode.config import GeoNodeConfig
from pygeonode.lookup import GeoLookupClient
from pygeonode.models.coordinate import Coordinate
from pygeonode.models.node import NodeRecord, node_key
from pygeonode.regions import to_coordinate

_logger = logging.getLogger(__name__)

_SELF_TASK_KEY = "self"


class LocationResolver:
    """Fill the geo cache from overrides, hints, callbacks and lookups.

    The async ``resolve_*`` methods may touch the network. The ``peek_*``
    methods are what selection uses: they only read the cache and leave
    any work they trigger running in the background, so a later call can
    see the result.
    """

    def __init__(
        self,
        config: GeoNodeConfig,
        cache: GeoCache,
        lookup: GeoLookupClient,
        tasks: BackgroundTasks,
    ) -> None:
        self._config = config
        self._cache = cache
        self._lookup = lookup
        self._tasks = tasks

    @property
    def cache(self) -> GeoCache:
        return self._cache

    @property
    def tasks(self) -> BackgroundTasks:
        return self._tasks

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------

    def node_override(self, key: str) -> Coordinate | None:
        return to_coordinate(self._config.node_overrides.get(key))

    async def resolve_node_location(self, key: str, host: str) -> Coordinate | None:
        """Override for *key*, else an external lookup of *host*, else ``None``.

        An override that names an unknown region falls through to the lookup.
        """
        override = self.node_override(key)
        if override is not None:
            return override
        if key in self._config.node_overrides:
            _logger.debug("Ignoring unusable location override for node %s", key)
        try:
            return await self._lookup.lookup(host)
        except Exception:
            _logger.debug("Location lookup for node %s (%s) failed", key, host, exc_info=True)
            return None

    async def refresh_node(self, node: NodeRecord) -> Coordinate | None:
        """Resolve *node* and store the result; a miss keeps the old entry."""
        key = node_key(node)
        coordinate = await self.resolve_node_location(key, node.host)
        if coordinate is not None:
            self._cache.set_node(key, coordinate)
            self._trace("Node %s located at %s,%s", key, coordinate.lat, coordinate.lon)
        else:
            self._trace("Node %s could not be located", key)
        return coordinate

    def schedule_node_refresh(self, node: NodeRecord) -> None:
        """Resolve *node* in the background unless that is already happening."""
        key = node_key(node)
        self._tasks.spawn(self.refresh_node(node), key=f"node:{key}")

    # ------------------------------------------------------------------
    # Targets
    # ------------------------------------------------------------------

    def target_override(self, key: str) -> Coordinate | None:
        return to_coordinate(self._config.target_overrides.get(key))

    def record_target_region(self, key: str, region: str | None) -> Coordinate | None:
        """Store the coordinate of *region* for *key* (newest hint wins)."""
        coordinate = to_coordinate({"region": region}) if region else None
        if coordinate is None:
            self._trace("Ignoring unknown region %r for target %s", region, key)
            return None
        self._cache.set_target(key, coordinate)
        self._trace("Target %s pinned to region %s", key, region)
        return coordinate

    def peek_target_location(self, key: str) -> Coordinate | None:
        """Override or cached hint for *key*, without waiting on anything.

        On a miss the configured resolver callback is started in the
        background and ``None`` is returned for this call.
        """
        override = self.target_override(key)
        if override is not None:
            return override
        cached = self._cache.get_target(key)
        if cached is not None:
            return cached
        if self._config.target_resolver is not None:
            self._tasks.spawn(self._resolve_target_via_callback(key), key=f"target:{key}")
        return None

    async def resolve_target_location(self, key: str) -> Coordinate | None:
        """Override, cached hint, resolver callback, then self location."""
        override = self.target_override(key)
        if override is not None:
            return override
        cached = self._cache.get_target(key)
        if cached is not None:
            return cached
        resolved = await self._resolve_target_via_callback(key)
        if resolved is not None:
            return resolved
        return await self.resolve_self_location()

    async def _resolve_target_via_callback(self, key: str) -> Coordinate | None:
        resolver = self._config.target_resolver
        if resolver is None:
            return None
        try:
            value: Any = await resolver(key)
        except Exception:
            _logger.debug("Target resolver failed for %s", key, exc_info=True)
            return None
        coordinate = to_coordinate(value)
        if coordinate is not None:
            self._cache.set_target(key, coordinate)
            self._trace("Target %s resolved by callback to %s,%s", key, coordinate.lat, coordinate.lon)
        return coordinate

    # ------------------------------------------------------------------
    # Self
    # ------------------------------------------------------------------

    def peek_self_location(self) -> Coordinate | None:
        """Cached self location; starts a background lookup while unknown."""
        cached = self._cache.self_location
        if cached is None:
            self._tasks.spawn(self.resolve_self_location(), key=_SELF_TASK_KEY)
        return cached

    async def resolve_self_location(self) -> Coordinate | None:
        cached = self._cache.self_location
        if cached is not None:
            return cached
        try:
            coordinate = await self._lookup.lookup(None)
        except Exception:
            _logger.debug("Self location lookup failed", exc_info=True)
            return None
        if coordinate is not None:
            self._cache.set_self_location(coordinate)
            self._trace("Self located at %s,%s", coordinate.lat, coordinate.lon)
        return coordinate

    def _trace(self, msg: str, *args: Any) -> None:
        if self._config.debug:
            _logger.debug(msg, *args)
