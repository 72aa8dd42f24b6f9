"""Pydantic models for itineraries and their rendered output."""

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from transit_geometry.models.geo import GeoPoint


class SegmentStyle(str, Enum):
    """Style class of a rendered leg."""

    WALKING = "walking"
    TRANSIT = "transit"


class _LegBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    origin: GeoPoint
    destination: GeoPoint
    duration_minutes: float = Field(default=0, ge=0)

    @field_validator("duration_minutes", mode="before")
    @classmethod
    def _missing_duration_is_zero(cls, value):
        # planner sometimes reports null durations
        return 0 if value is None else value


class WalkLeg(_LegBase):
    """Walking portion of a trip."""

    type: Literal["walk"] = "walk"


class TransitLeg(_LegBase):
    """A ride on one vehicle between two stops."""

    type: Literal["transit"] = "transit"
    origin_stop_id: str | None = None
    destination_stop_id: str | None = None
    trip_id: str | None = None
    route_name: str | None = Field(default=None, description="Route long name")
    route_short_name: str | None = None
    departure_time: str | None = None
    arrival_time: str | None = None

    @field_validator("origin_stop_id", "destination_stop_id", "trip_id", mode="before")
    @classmethod
    def _ids_as_strings(cls, value):
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


ItineraryLeg = Annotated[WalkLeg | TransitLeg, Field(discriminator="type")]


class Itinerary(BaseModel):
    """Ordered legs from trip start to trip end."""

    legs: list[ItineraryLeg] = Field(min_length=1)
    estimated_duration_minutes: float | None = None
    departure_time: str | None = None

    @property
    def origin(self) -> GeoPoint:
        return self.legs[0].origin

    @property
    def destination(self) -> GeoPoint:
        return self.legs[-1].destination

    @property
    def total_duration_minutes(self) -> float:
        """Planner estimate if present, else the sum of leg durations (at least 1)."""
        total = self.estimated_duration_minutes or 0
        if total <= 0:
            total = sum(leg.duration_minutes for leg in self.legs)
        return max(1, total)


class RenderableSegment(BaseModel):
    """Polyline for one leg, ready for map rendering."""

    points: list[GeoPoint] = Field(min_length=2)
    style: SegmentStyle
    color: str = Field(description="Hex stroke color")
    fallback_used: bool = Field(
        default=False, description="True if any part degraded to a straight line"
    )


class TimelineSlot(BaseModel):
    """Visual width of one leg in the itinerary summary bar."""

    is_transit: bool
    raw_duration_minutes: float
    width_percent: float
