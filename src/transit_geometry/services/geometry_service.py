"""Itinerary-level geometry resolution.

Legs resolve concurrently and come back in leg order. ResolutionTracker
keeps the latest accepted result for interactive callers and drops
results from superseded requests.
"""

import asyncio
import logging
from collections.abc import Sequence
from datetime import datetime
from typing import Literal

from transit_geometry.data.catalog import DEFAULT_ROUTE_COLOR, route_color
from transit_geometry.data.config import RoutingConfig, get_routing_config
from transit_geometry.data.osrm_client import RoadGeometryClient
from transit_geometry.data.transit_api_client import TransitAPIClient
from transit_geometry.models.geo import Facility, GeoPoint, MapRegion
from transit_geometry.models.itinerary import (
    Itinerary,
    RenderableSegment,
    TransitLeg,
    WalkLeg,
)
from transit_geometry.models.responses import (
    ItineraryGeometryResponse,
    PlanTripGeometryResponse,
)
from transit_geometry.services.leg_stitcher import PathFetcher, stitch_leg
from transit_geometry.services.stop_service import (
    StopSequenceLookup,
    distance,
    find_nearest_facility,
    make_stop_sequence_lookup,
)
from transit_geometry.services.timeline_service import summarize_itineraries

logger = logging.getLogger(__name__)

# Viewport padding around the resolved route
REGION_PADDING = 1.5

# Walking speed used for seeded walk legs (~80 m/min)
WALKING_METERS_PER_MINUTE = 80


async def resolve_itinerary(
    itinerary: Itinerary,
    fetch_path: PathFetcher,
    stop_sequence_lookup: StopSequenceLookup | None = None,
    retries: int = 0,
    transit_color: str = DEFAULT_ROUTE_COLOR,
) -> list[RenderableSegment]:
    """Resolve every leg of an itinerary into a renderable segment.

    Legs are resolved concurrently; the result is in leg order and has
    exactly one segment per leg.
    """
    return list(
        await asyncio.gather(
            *(
                stitch_leg(
                    leg,
                    fetch_path,
                    stop_sequence_lookup=stop_sequence_lookup,
                    retries=retries,
                    transit_color=transit_color,
                )
                for leg in itinerary.legs
            )
        )
    )


class ResolutionTracker:
    """Latest accepted itinerary geometry, guarded by a request token.

    Each resolution takes a token from begin(); commit() only accepts the
    most recent token, so a resolution that finishes after a newer one
    started (or after supersede()) is dropped. In-flight I/O is not
    cancelled.
    """

    def __init__(self) -> None:
        self._token = 0
        self._latest: list[RenderableSegment] | None = None

    @property
    def token(self) -> int:
        return self._token

    @property
    def latest(self) -> list[RenderableSegment] | None:
        return self._latest

    def begin(self) -> int:
        """Start a new resolution and return its token."""
        self._token += 1
        return self._token

    def supersede(self) -> None:
        """Invalidate pending resolutions and clear the current result."""
        self._token += 1
        self._latest = None

    def is_current(self, token: int) -> bool:
        return token == self._token

    def commit(self, token: int, segments: list[RenderableSegment]) -> bool:
        """Accept segments if token is still current.

        Returns:
            True if accepted, False if the result was stale.
        """
        if not self.is_current(token):
            logger.debug(f"Dropping stale resolution (token {token}, current {self._token})")
            return False
        self._latest = segments
        return True

    async def resolve(
        self,
        itinerary: Itinerary,
        fetch_path: PathFetcher,
        stop_sequence_lookup: StopSequenceLookup | None = None,
        retries: int = 0,
        transit_color: str = DEFAULT_ROUTE_COLOR,
    ) -> list[RenderableSegment] | None:
        """Resolve an itinerary and commit it unless superseded meanwhile.

        Returns:
            The committed segments, or None if the result was stale.
        """
        token = self.begin()
        segments = await resolve_itinerary(
            itinerary,
            fetch_path,
            stop_sequence_lookup=stop_sequence_lookup,
            retries=retries,
            transit_color=transit_color,
        )
        if self.commit(token, segments):
            return segments
        return None


def compute_region(
    segments: Sequence[RenderableSegment],
    padding: float = REGION_PADDING,
) -> MapRegion | None:
    """Viewport centered on the bounding box of all segment points."""
    points = [point for segment in segments for point in segment.points]
    if not points:
        return None

    lats = [p.lat for p in points]
    lons = [p.lon for p in points]
    min_lat, max_lat = min(lats), max(lats)
    min_lon, max_lon = min(lons), max(lons)

    return MapRegion(
        center=GeoPoint(lat=(min_lat + max_lat) / 2, lon=(min_lon + max_lon) / 2),
        lat_delta=(max_lat - min_lat) * padding,
        lon_delta=(max_lon - min_lon) * padding,
    )


def seed_itinerary(
    point: GeoPoint,
    destination: Facility,
    facilities: Sequence[Facility],
) -> Itinerary:
    """Build a walk-then-shuttle itinerary via the stop nearest to point.

    Raises:
        EmptyCatalogError: If facilities is empty.
    """
    stop = find_nearest_facility(point, facilities)
    walk_meters = distance(point, stop.location) * 1000

    return Itinerary(
        legs=[
            WalkLeg(
                origin=point,
                destination=stop.location,
                duration_minutes=round(walk_meters / WALKING_METERS_PER_MINUTE),
            ),
            TransitLeg(
                origin=stop.location,
                destination=destination.location,
                origin_stop_id=stop.facility_id,
                route_name=f"Shuttle to {destination.name}",
            ),
        ]
    )


def _build_response(segments: list[RenderableSegment]) -> ItineraryGeometryResponse:
    return ItineraryGeometryResponse(
        segments=segments,
        region=compute_region(segments),
        count=len(segments),
        degraded_count=sum(1 for segment in segments if segment.fallback_used),
    )


async def get_itinerary_geometry(
    itinerary: Itinerary,
    config: RoutingConfig | None = None,
    transit_color: str = DEFAULT_ROUTE_COLOR,
) -> ItineraryGeometryResponse:
    """Resolve an itinerary against the configured routing service and transit API.

    Args:
        itinerary: Itinerary to resolve.
        config: Optional configuration override.
        transit_color: Stroke color for transit segments.

    Returns:
        ItineraryGeometryResponse with one segment per leg and a fitted region.
    """
    config = config or get_routing_config()
    async with RoadGeometryClient(config) as road_client, TransitAPIClient(config) as api_client:
        segments = await resolve_itinerary(
            itinerary,
            road_client.fetch_path,
            stop_sequence_lookup=make_stop_sequence_lookup(api_client, config),
            retries=config.retry_attempts,
            transit_color=transit_color,
        )
    return _build_response(segments)


async def resolve_shuttle_route(
    point: GeoPoint,
    destination: Facility,
    facilities: Sequence[Facility],
    config: RoutingConfig | None = None,
) -> ItineraryGeometryResponse:
    """Walk to the nearest stop, then ride to destination, colored per destination."""
    config = config or get_routing_config()
    itinerary = seed_itinerary(point, destination, facilities)

    async with RoadGeometryClient(config) as road_client:
        segments = await resolve_itinerary(
            itinerary,
            road_client.fetch_path,
            retries=config.retry_attempts,
            transit_color=route_color(destination.facility_id),
        )
    return _build_response(segments)


async def plan_trip_geometry(
    origin: GeoPoint,
    destination: GeoPoint,
    timestamp: datetime | str | None = None,
    mode: Literal["departure", "arrival"] = "departure",
    config: RoutingConfig | None = None,
) -> PlanTripGeometryResponse:
    """Fetch planner options and resolve geometry for the first one.

    Planner failures are reported in the response rather than raised.
    """
    config = config or get_routing_config()
    try:
        async with TransitAPIClient(config) as client:
            itineraries = await client.fetch_plans(origin, destination, timestamp, mode)
    except Exception as e:
        logger.warning(f"Failed to fetch plans: {e}")
        return PlanTripGeometryResponse(count=0, success=False, error=str(e))

    if not itineraries:
        return PlanTripGeometryResponse(count=0, success=False, error="No itineraries found")

    geometry = await get_itinerary_geometry(itineraries[0], config)
    options = summarize_itineraries(itineraries)
    return PlanTripGeometryResponse(
        options=options,
        geometry=geometry,
        count=len(options),
        success=True,
    )
