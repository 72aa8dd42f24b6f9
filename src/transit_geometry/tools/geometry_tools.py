"""MCP tools for itinerary geometry."""

from typing import Literal

from transit_geometry.app import mcp
from transit_geometry.data.catalog import DESTINATIONS, get_destination
from transit_geometry.models.geo import GeoPoint
from transit_geometry.models.itinerary import Itinerary
from transit_geometry.models.responses import (
    ItineraryGeometryResponse,
    PlanTripGeometryResponse,
)
from transit_geometry.services.geometry_service import (
    get_itinerary_geometry as _get_itinerary_geometry,
)
from transit_geometry.services.geometry_service import (
    plan_trip_geometry as _plan_trip_geometry,
)
from transit_geometry.services.geometry_service import resolve_shuttle_route
from transit_geometry.services.stop_service import get_stop_catalog


@mcp.tool()
async def get_itinerary_geometry(itinerary: Itinerary) -> ItineraryGeometryResponse:
    """Resolve an itinerary's legs into road-following polylines.

    Each leg becomes one segment. Transit legs with a known trip follow
    every intermediate stop. Legs whose road path cannot be fetched are
    drawn as straight lines and counted in degraded_count.

    Args:
        itinerary: Ordered walk/transit legs with endpoint coordinates.

    Returns:
        ItineraryGeometryResponse with segments in leg order and a map region.
    """
    return await _get_itinerary_geometry(itinerary)


@mcp.tool()
async def get_shuttle_route(lat: float, lon: float, destination_id: str) -> ItineraryGeometryResponse:
    """Route from a coordinate to a campus destination via the nearest stop.

    Args:
        lat: Starting latitude.
        lon: Starting longitude.
        destination_id: One of "bern-dibner", "paulson-center", "washington-square".

    Returns:
        ItineraryGeometryResponse with a walking segment then a shuttle segment.
    """
    destination = get_destination(destination_id)
    if destination is None:
        known = ", ".join(d.facility_id for d in DESTINATIONS)
        raise ValueError(f"Unknown destination: {destination_id} (expected one of {known})")

    catalog = await get_stop_catalog()
    return await resolve_shuttle_route(GeoPoint(lat=lat, lon=lon), destination, catalog)


@mcp.tool()
async def plan_trip_geometry(
    from_lat: float,
    from_lon: float,
    to_lat: float,
    to_lon: float,
    timestamp: str | None = None,
    mode: Literal["departure", "arrival"] = "departure",
) -> PlanTripGeometryResponse:
    """Plan a trip and resolve the geometry of the first option.

    Args:
        from_lat, from_lon: Trip start.
        to_lat, to_lon: Trip end.
        timestamp: ISO time to depart at (or arrive by, per mode); default now.
        mode: "departure" or "arrival".

    Returns:
        PlanTripGeometryResponse with labelled options and geometry for option A.
    """
    return await _plan_trip_geometry(
        GeoPoint(lat=from_lat, lon=from_lon),
        GeoPoint(lat=to_lat, lon=to_lon),
        timestamp=timestamp,
        mode=mode,
    )
