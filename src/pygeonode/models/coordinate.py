"""Coordinate and region reference models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


class Coordinate(BaseModel):
    """A point on the globe in decimal degrees.

    Ranges are not validated: provider payloads are shape-checked before
    they become coordinates, and caller-supplied values are trusted.

    Parameters
    ----------
    lat : float
        Latitude in degrees.
    lon : float
        Longitude in degrees.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    lat: float
    lon: float

    def as_tuple(self) -> tuple[float, float]:
        return self.lat, self.lon


class RegionRef(BaseModel):
    """Override value naming a region code instead of a literal coordinate."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    region: str

    @field_validator("region")
    @classmethod
    def _normalize_region(cls, value: str) -> str:
        return value.strip().lower()


LocationValue = Coordinate | RegionRef
"""A caller-supplied location: literal coordinate or region reference."""
