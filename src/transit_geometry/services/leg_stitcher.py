"""Road geometry for single itinerary legs.

Every road query goes through fetch_with_fallback, so a leg always
resolves to a renderable polyline. Transit legs with a known stop
sequence are stitched from one query per consecutive stop pair.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass

from transit_geometry.data.catalog import DEFAULT_ROUTE_COLOR, WALKING_COLOR
from transit_geometry.errors import RouteUnavailableError, StopSequenceUnavailableError
from transit_geometry.models.geo import GeoPoint
from transit_geometry.models.itinerary import (
    RenderableSegment,
    SegmentStyle,
    TransitLeg,
    WalkLeg,
)
from transit_geometry.services.stop_service import StopSequenceLookup

logger = logging.getLogger(__name__)

PathFetcher = Callable[[GeoPoint, GeoPoint], Awaitable[list[GeoPoint]]]


@dataclass
class ResolvedPath:
    """Points for one origin -> destination query."""

    points: list[GeoPoint]
    fallback_used: bool = False


async def fetch_with_fallback(
    origin: GeoPoint,
    destination: GeoPoint,
    primary: Callable[[], Awaitable[list[GeoPoint]]],
    retries: int = 0,
) -> ResolvedPath:
    """Run a road query, substituting a straight line if it fails.

    Args:
        origin: Start of the path.
        destination: End of the path.
        primary: Zero-argument coroutine factory performing the query.
        retries: Extra attempts after a RouteUnavailableError.

    Returns:
        The queried path, or [origin, destination] with fallback_used set.
    """
    attempts = 1 + max(0, retries)
    for attempt in range(1, attempts + 1):
        try:
            points = await primary()
        except RouteUnavailableError as e:
            logger.warning(f"Route unavailable (attempt {attempt}/{attempts}): {e}")
            continue
        except Exception as e:
            logger.warning(f"Unexpected error fetching route, using straight line: {e!r}")
            break

        if len(points) >= 2:
            return ResolvedPath(points=points)
        logger.warning(f"Route had {len(points)} point(s), using straight line")
        break

    return ResolvedPath(points=[origin, destination], fallback_used=True)


def stitch_paths(paths: Sequence[Sequence[GeoPoint]]) -> list[GeoPoint]:
    """Concatenate consecutive sub-paths into one polyline.

    Each sub-path after the first starts where the previous one ended, so
    its first point is dropped.
    """
    stitched: list[GeoPoint] = []
    for index, path in enumerate(paths):
        stitched.extend(path if index == 0 else path[1:])
    return stitched


async def _single_query(
    leg: WalkLeg | TransitLeg,
    fetch_path: PathFetcher,
    retries: int,
) -> ResolvedPath:
    return await fetch_with_fallback(
        leg.origin,
        leg.destination,
        lambda: fetch_path(leg.origin, leg.destination),
        retries=retries,
    )


async def stitch_leg(
    leg: WalkLeg | TransitLeg,
    fetch_path: PathFetcher,
    stop_sequence_lookup: StopSequenceLookup | None = None,
    retries: int = 0,
    transit_color: str = DEFAULT_ROUTE_COLOR,
) -> RenderableSegment:
    """Resolve one leg into a renderable segment.

    Walk legs, and transit legs without a usable stop sequence (fewer than
    two stops), use a single origin -> destination query. Otherwise each
    consecutive stop pair is queried concurrently and the results are
    stitched in stop order.

    Args:
        leg: The leg to resolve.
        fetch_path: Road query, e.g. RoadGeometryClient.fetch_path.
        stop_sequence_lookup: Returns the stops a transit leg passes through.
        retries: Extra attempts per road query before falling back.
        transit_color: Stroke color for transit segments.

    Returns:
        RenderableSegment with at least two points.
    """
    if isinstance(leg, WalkLeg):
        path = await _single_query(leg, fetch_path, retries)
        return RenderableSegment(
            points=path.points,
            style=SegmentStyle.WALKING,
            color=WALKING_COLOR,
            fallback_used=path.fallback_used,
        )

    stops = []
    if stop_sequence_lookup is not None:
        try:
            stops = await stop_sequence_lookup(leg)
        except StopSequenceUnavailableError as e:
            logger.debug(f"No stop sequence for trip {leg.trip_id}: {e}")
        except Exception as e:
            logger.warning(f"Stop sequence lookup failed for trip {leg.trip_id}: {e!r}")

    if len(stops) < 2:
        path = await _single_query(leg, fetch_path, retries)
        return RenderableSegment(
            points=path.points,
            style=SegmentStyle.TRANSIT,
            color=transit_color,
            fallback_used=path.fallback_used,
        )

    pairs = list(zip(stops, stops[1:]))
    # gather keeps results in pair order regardless of completion order
    sub_paths = await asyncio.gather(
        *(
            fetch_with_fallback(
                start.location,
                end.location,
                lambda start=start, end=end: fetch_path(start.location, end.location),
                retries=retries,
            )
            for start, end in pairs
        )
    )
    logger.debug(f"Stitched {len(sub_paths)} sub-paths for trip {leg.trip_id}")

    return RenderableSegment(
        points=stitch_paths([path.points for path in sub_paths]),
        style=SegmentStyle.TRANSIT,
        color=transit_color,
        fallback_used=any(path.fallback_used for path in sub_paths),
    )
