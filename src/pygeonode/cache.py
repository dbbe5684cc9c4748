"""In-memory geo cache for node, target and self coordinates."""

from __future__ import annotations

from pygeonode.models.coordinate import Coordinate


class GeoCache:
    """Three independent coordinate stores.

    * ``nodes``: node key -> coordinate. A missing key means "not resolved
      yet", not "unreachable".
    * ``targets``: target key -> coordinate, last write wins.
    * ``self_location``: the host's own coordinate, kept once known.

    Entries are only replaced by an explicit overwrite; nothing expires.
    The balancer does not clear the cache on stop, so reusing the same
    instance across a stop/start keeps it warm. Call :meth:`clear` for a
    cold restart.
    """

    def __init__(self) -> None:
        self._nodes: dict[str, Coordinate] = {}
        self._targets: dict[str, Coordinate] = {}
        self._self: Coordinate | None = None

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------

    def get_node(self, key: str) -> Coordinate | None:
        return self._nodes.get(key)

    def set_node(self, key: str, coordinate: Coordinate) -> None:
        self._nodes[key] = coordinate

    @property
    def nodes(self) -> dict[str, Coordinate]:
        """Snapshot of the node store."""
        return dict(self._nodes)

    # ------------------------------------------------------------------
    # Targets
    # ------------------------------------------------------------------

    def get_target(self, key: str) -> Coordinate | None:
        return self._targets.get(key)

    def set_target(self, key: str, coordinate: Coordinate) -> None:
        self._targets[key] = coordinate

    @property
    def targets(self) -> dict[str, Coordinate]:
        """Snapshot of the target store."""
        return dict(self._targets)

    # ------------------------------------------------------------------
    # Self
    # ------------------------------------------------------------------

    @property
    def self_location(self) -> Coordinate | None:
        return self._self

    def set_self_location(self, coordinate: Coordinate) -> None:
        self._self = coordinate

    def clear(self) -> None:
        """Forget everything (node, target and self coordinates)."""
        self._nodes.clear()
        self._targets.clear()
        self._self = None
