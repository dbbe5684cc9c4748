"""pygeonode - Geo-aware nearest-node selection for asyncio hosts."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pygeonode")
except PackageNotFoundError:
    __version__ = "0+local"
from pygeonode.balancer import GeoBalancer
from pygeonode.cache import GeoCache
from pygeonode.config import GeoNodeConfig
from pygeonode.exceptions import (
    GeoConfigError,
    GeoLookupError,
    GeoNodeError,
    GeoTransportError,
)
from pygeonode.ingestion import VoiceRegionHint, extract_voice_hint, parse_endpoint_region
from pygeonode.lookup import GeoLookupClient, GeoProvider
from pygeonode.models import Coordinate, NodeInfo, NodeRecord, RegionRef, node_key
from pygeonode.regions import REGION_COORDINATES, lookup_region, to_coordinate
from pygeonode.registry import GeoRoutedRegistry, NodeRegistry
from pygeonode.resolver import LocationResolver
from pygeonode.scheduler import RefreshScheduler
from pygeonode.selector import NearestNodeSelector, haversine_km

__all__ = [
    "__version__",
    "Coordinate",
    "GeoBalancer",
    "GeoCache",
    "GeoConfigError",
    "GeoLookupClient",
    "GeoLookupError",
    "GeoNodeConfig",
    "GeoNodeError",
    "GeoProvider",
    "GeoRoutedRegistry",
    "GeoTransportError",
    "LocationResolver",
    "NearestNodeSelector",
    "NodeInfo",
    "NodeRecord",
    "NodeRegistry",
    "REGION_COORDINATES",
    "RefreshScheduler",
    "RegionRef",
    "VoiceRegionHint",
    "extract_voice_hint",
    "haversine_km",
    "lookup_region",
    "node_key",
    "parse_endpoint_region",
    "to_coordinate",
]
