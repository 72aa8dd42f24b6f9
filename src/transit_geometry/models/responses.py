from pydantic import BaseModel, Field

from transit_geometry.models.geo import Facility, MapRegion
from transit_geometry.models.itinerary import Itinerary, RenderableSegment, TimelineSlot


class NearestStopResponse(BaseModel):
    stop: Facility
    distance_meters: float = Field(description="Great-circle distance from the query point")
    catalog_size: int = Field(description="Number of stops searched")


class ItineraryGeometryResponse(BaseModel):
    """Rendered geometry for one itinerary."""

    segments: list[RenderableSegment] = Field(description="One segment per leg, in leg order")
    region: MapRegion | None = Field(
        default=None, description="Viewport fitting every segment point"
    )
    count: int = Field(description="Number of segments returned")
    degraded_count: int = Field(
        default=0, description="Segments that fell back to straight lines"
    )


class ItinerarySummary(BaseModel):
    """One option in the itinerary summary list."""

    label: str = Field(description="Option letter (A, B, C...)")
    itinerary: Itinerary
    total_duration_minutes: float
    timeline: list[TimelineSlot]


class TimelineResponse(BaseModel):
    slots: list[TimelineSlot]
    total_duration_minutes: float
    total_width_percent: float = Field(description="Sum of slot widths (never above 100)")


class PlanTripGeometryResponse(BaseModel):
    """Response from plan_trip_geometry tool."""

    options: list[ItinerarySummary] = Field(default_factory=list)
    geometry: ItineraryGeometryResponse | None = Field(
        default=None, description="Geometry of the first option"
    )
    count: int
    success: bool
    error: str | None = None
