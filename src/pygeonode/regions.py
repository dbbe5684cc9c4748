"""Static region table and location normalization.

Region codes follow the voice-server naming used by Discord
(``us-east``, ``rotterdam``, ...) plus a handful of metro codes that
show up as endpoint prefixes. Each maps to one approximate coordinate.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from pygeonode.models.coordinate import Coordinate, RegionRef

REGION_COORDINATES: dict[str, Coordinate] = {
    code: Coordinate(lat=lat, lon=lon)
    for code, (lat, lon) in {
        "us-east": (39.04, -77.49),
        "us-west": (37.34, -121.89),
        "us-central": (41.88, -87.63),
        "us-south": (32.78, -96.80),
        "atlanta": (33.75, -84.39),
        "newark": (40.74, -74.17),
        "seattle": (47.61, -122.33),
        "santa-clara": (37.35, -121.96),
        "brazil": (-23.55, -46.63),
        "santiago": (-33.45, -70.67),
        "buenos-aires": (-34.60, -58.38),
        "europe": (50.11, 8.68),
        "frankfurt": (50.11, 8.68),
        "amsterdam": (52.37, 4.90),
        "rotterdam": (51.92, 4.48),
        "london": (51.51, -0.13),
        "paris": (48.86, 2.35),
        "madrid": (40.42, -3.70),
        "milan": (45.46, 9.19),
        "stockholm": (59.33, 18.07),
        "bucharest": (44.43, 26.10),
        "russia": (55.76, 37.62),
        "dubai": (25.20, 55.27),
        "india": (19.08, 72.88),
        "singapore": (1.35, 103.82),
        "hongkong": (22.32, 114.17),
        "japan": (35.68, 139.69),
        "south-korea": (37.57, 126.98),
        "sydney": (-33.87, 151.21),
        "southafrica": (-26.20, 28.05),
    }.items()
}


def lookup_region(code: str | None) -> Coordinate | None:
    """Return the coordinate for *code*, or ``None`` for unknown codes.

    Matching is exact after lowercasing; there is no fuzzy matching.
    """
    if not code:
        return None
    return REGION_COORDINATES.get(code.strip().lower())


def to_coordinate(value: Any) -> Coordinate | None:
    """Normalize an override or resolver result into a coordinate.

    Accepts a :class:`Coordinate`, a :class:`RegionRef`, or a mapping with
    either ``lat``/``lon`` or ``region`` keys. Anything else, and any
    unknown region code, yields ``None``.
    """
    if value is None:
        return None
    if isinstance(value, Coordinate):
        return value
    if isinstance(value, RegionRef):
        return lookup_region(value.region)
    if isinstance(value, Mapping):
        if "region" in value:
            region = value.get("region")
            return lookup_region(region) if isinstance(region, str) else None
        try:
            return Coordinate.model_validate(dict(value))
        except ValidationError:
            return None
    return None
