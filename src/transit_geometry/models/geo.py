"""Pydantic models for geographic values."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class DistanceUnit(str, Enum):
    """Unit for great-circle distances."""

    KILOMETERS = "km"
    METERS = "m"


class GeoPoint(BaseModel):
    """A WGS84 coordinate in degrees."""

    model_config = ConfigDict(frozen=True)

    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)

    def as_lon_lat(self) -> str:
        """Format as "lon,lat" (routing service order)."""
        return f"{self.lon},{self.lat}"


class Facility(BaseModel):
    """A named point of interest (stop or destination)."""

    model_config = ConfigDict(frozen=True)

    facility_id: str
    name: str
    location: GeoPoint


class MapRegion(BaseModel):
    """Viewport that fits a set of points."""

    center: GeoPoint
    lat_delta: float = Field(description="Latitude span in degrees")
    lon_delta: float = Field(description="Longitude span in degrees")
