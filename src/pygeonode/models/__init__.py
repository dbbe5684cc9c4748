"""Data models for pygeonode."""

from pygeonode.models.coordinate import Coordinate, LocationValue, RegionRef
from pygeonode.models.node import NodeInfo, NodeRecord, node_key
from pygeonode.models.providers import IpApiResponse, IpWhoIsResponse

__all__ = [
    "Coordinate",
    "IpApiResponse",
    "IpWhoIsResponse",
    "LocationValue",
    "NodeInfo",
    "NodeRecord",
    "RegionRef",
    "node_key",
]
