"""MCP tools for stop lookups."""

from transit_geometry.app import mcp
from transit_geometry.models.geo import DistanceUnit, GeoPoint
from transit_geometry.models.responses import NearestStopResponse
from transit_geometry.services.stop_service import (
    distance,
    find_nearest_facility,
    get_stop_catalog,
)


@mcp.tool()
async def find_nearest_stop(lat: float, lon: float) -> NearestStopResponse:
    """Find the transit stop closest to a coordinate.

    Examples:
        find_nearest_stop(lat=40.7306, lon=-73.9970)  # near Washington Square

    Args:
        lat: Latitude in degrees.
        lon: Longitude in degrees.

    Returns:
        NearestStopResponse with the stop and its great-circle distance.
    """
    point = GeoPoint(lat=lat, lon=lon)
    catalog = await get_stop_catalog()
    stop = find_nearest_facility(point, catalog)

    return NearestStopResponse(
        stop=stop,
        distance_meters=round(distance(point, stop.location, DistanceUnit.METERS), 1),
        catalog_size=len(catalog),
    )
