"""ipwho.is lookups (secondary provider).

Endpoint: ``GET {base}/{host}``; success is reported through a boolean
``success`` field, coordinates as ``latitude``/``longitude``.
"""

from __future__ import annotations

from typing import Any

from pygeonode._api._common import build_lookup_url
from pygeonode.exceptions import GeoLookupError
from pygeonode.models.coordinate import Coordinate
from pygeonode.models.providers import IpWhoIsResponse

NAME = "ipwho.is"


def build_url(base_url: str, host: str | None) -> str:
    return build_lookup_url(base_url, host)


def parse_response(payload: Any) -> Coordinate:
    """Validate an ipwho.is payload and return its coordinate.

    Raises
    ------
    pydantic.ValidationError
        If the payload does not have the expected shape.
    GeoLookupError
        If the provider reports failure or omits the coordinate.
    """
    response = IpWhoIsResponse.model_validate(payload)
    if not response.ok:
        raise GeoLookupError(f"ipwho.is success=false message={response.message}", provider=NAME)
    coordinate = response.to_coordinate()
    if coordinate is None:
        raise GeoLookupError("ipwho.is success without latitude/longitude", provider=NAME)
    return coordinate
