"""Response models for the external geolocation providers.

Coordinates are declared strict so that strings, booleans and nulls are
rejected instead of being coerced. A payload that fails validation is a
provider failure, never a crash.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pygeonode.models.coordinate import Coordinate


class IpApiResponse(BaseModel):
    """``ip-api.com/json`` payload (only the fields we use)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    status: str
    message: str | None = None
    lat: float | None = Field(default=None, strict=True)
    lon: float | None = Field(default=None, strict=True)

    @property
    def ok(self) -> bool:
        return self.status == "success"

    def to_coordinate(self) -> Coordinate | None:
        if self.lat is None or self.lon is None:
            return None
        return Coordinate(lat=self.lat, lon=self.lon)


class IpWhoIsResponse(BaseModel):
    """``ipwho.is`` payload (only the fields we use)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    success: bool = Field(strict=True)
    message: str | None = None
    latitude: float | None = Field(default=None, strict=True)
    longitude: float | None = Field(default=None, strict=True)

    @property
    def ok(self) -> bool:
        return self.success

    def to_coordinate(self) -> Coordinate | None:
        if self.latitude is None or self.longitude is None:
            return None
        return Coordinate(lat=self.latitude, lon=self.longitude)
