"""Nearest-node selection."""

from __future__ import annotations

import inspect
import logging
import math
from collections.abc import Callable, Iterable
from typing import Any

from pygeonode._constants import EARTH_RADIUS_KM
from pygeonode.config import GeoNodeConfig
from pygeonode.models.coordinate import Coordinate, RegionRef
from pygeonode.models.node import NodeRecord, node_key
from pygeonode.regions import to_coordinate
from pygeonode.resolver import LocationResolver

_logger = logging.getLogger(__name__)

CoordinateProvider = Callable[[], Any]
"""Zero-argument callable returning a location, ``None`` or an awaitable."""

Target = str | Coordinate | RegionRef | CoordinateProvider | None


def haversine_km(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance between *a* and *b* in kilometres."""
    d_lat = math.radians(b.lat - a.lat)
    d_lon = math.radians(b.lon - a.lon)
    h = math.sin(d_lat / 2) ** 2 + (
        math.cos(math.radians(a.lat)) * math.cos(math.radians(b.lat)) * math.sin(d_lon / 2) ** 2
    )
    # Rounding can push sqrt(h) just past 1 for antipodal points.
    return 2 * EARTH_RADIUS_KM * math.asin(min(1.0, math.sqrt(h)))


class NearestNodeSelector:
    """Pick the node closest to a target using only cached coordinates.

    :meth:`select` is synchronous and never waits for the network. Cache
    misses are handed to the resolver to fill in the background; until
    then the affected nodes are left out, and with nothing to compare the
    first registered node is returned.
    """

    def __init__(self, config: GeoNodeConfig, resolver: LocationResolver) -> None:
        self._config = config
        self._resolver = resolver

    def target_coordinate(self, target: Target) -> Coordinate | None:
        """Resolve *target* without blocking; falls back to the self location."""
        coordinate: Coordinate | None = None
        if isinstance(target, str):
            coordinate = self._resolver.peek_target_location(target)
        elif isinstance(target, (Coordinate, RegionRef)):
            coordinate = to_coordinate(target)
        elif callable(target):
            coordinate = self._call_provider(target)
        if coordinate is None:
            coordinate = self._resolver.peek_self_location()
        return coordinate

    def _call_provider(self, provider: CoordinateProvider) -> Coordinate | None:
        try:
            value = provider()
        except Exception:
            _logger.debug("Target coordinate provider failed", exc_info=True)
            return None
        if inspect.isawaitable(value):
            # Pending values count as absent; selection never waits.
            if inspect.iscoroutine(value):
                value.close()
            self._trace("Target coordinate still pending; treating as absent")
            return None
        return to_coordinate(value)

    def select(self, nodes: Iterable[NodeRecord], target: Target = None) -> str | None:
        """Return the key of the node nearest to *target*.

        Returns ``None`` for an empty pool and the first node's key when no
        distance can be computed. Ties go to the earlier node.
        """
        pool = list(nodes)
        if not pool:
            return None
        first_key = node_key(pool[0])

        cache = self._resolver.cache
        located: list[tuple[str, Coordinate]] = []
        for node in pool:
            key = node_key(node)
            location = cache.get_node(key)
            if location is None:
                self._resolver.schedule_node_refresh(node)
            else:
                located.append((key, location))

        origin = self.target_coordinate(target)
        if origin is None:
            self._trace("No target coordinate; using first node %s", first_key)
            return first_key

        best_key: str | None = None
        best_distance = math.inf
        for key, location in located:
            distance = haversine_km(origin, location)
            if distance < best_distance:
                best_key = key
                best_distance = distance

        if best_key is None:
            self._trace("No node coordinates cached yet; using first node %s", first_key)
            return first_key
        self._trace("Selected node %s at %.1f km", best_key, best_distance)
        return best_key

    def _trace(self, msg: str, *args: Any) -> None:
        if self._config.debug:
            _logger.debug(msg, *args)
