"""ip-api.com lookups (primary provider).

Endpoint: ``GET {base}/{host}?fields=status,message,lat,lon``. The free
tier answers HTTP 200 even for failures and signals them through
``status="fail"`` plus a ``message``.
"""

from __future__ import annotations

from typing import Any

from pygeonode._api._common import build_lookup_url
from pygeonode.exceptions import GeoLookupError
from pygeonode.models.coordinate import Coordinate
from pygeonode.models.providers import IpApiResponse

NAME = "ip-api"

_FIELDS = "status,message,lat,lon"


def build_url(base_url: str, host: str | None) -> str:
    return build_lookup_url(base_url, host, f"fields={_FIELDS}")


def parse_response(payload: Any) -> Coordinate:
    """Validate an ip-api payload and return its coordinate.

    Raises
    ------
    pydantic.ValidationError
        If the payload does not have the expected shape.
    GeoLookupError
        If the provider reports failure or omits the coordinate.
    """
    response = IpApiResponse.model_validate(payload)
    if not response.ok:
        raise GeoLookupError(f"ip-api status={response.status} message={response.message}", provider=NAME)
    coordinate = response.to_coordinate()
    if coordinate is None:
        raise GeoLookupError("ip-api success without lat/lon", provider=NAME)
    return coordinate
