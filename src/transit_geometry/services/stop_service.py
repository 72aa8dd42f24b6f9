"""Distance, nearest-stop lookup, and stop sequences for transit legs."""

import logging
import math
from collections.abc import Awaitable, Callable, Sequence

from transit_geometry.data.cache import TTLCache
from transit_geometry.data.catalog import DEFAULT_STOPS
from transit_geometry.data.config import RoutingConfig, get_routing_config
from transit_geometry.data.transit_api_client import TransitAPIClient
from transit_geometry.errors import EmptyCatalogError, StopSequenceUnavailableError
from transit_geometry.models.geo import DistanceUnit, Facility, GeoPoint
from transit_geometry.models.itinerary import TransitLeg

logger = logging.getLogger(__name__)

# Earth's radius in meters for haversine calculation
EARTH_RADIUS_METERS = 6_371_000

StopSequenceLookup = Callable[[TransitLeg], Awaitable[list[Facility]]]

# Module-level caches (lazy-initialized)
_catalog_cache: TTLCache[str, list[Facility]] | None = None
_trip_stops_cache: TTLCache[str, list[Facility]] | None = None

_CATALOG_KEY = "stops"


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate the great-circle distance between two points in meters.

    Args:
        lat1, lon1: First point coordinates in degrees.
        lat2, lon2: Second point coordinates in degrees.

    Returns:
        Distance in meters.
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2
    )
    # rounding can push a slightly past 1 for antipodal points
    a = min(1.0, a)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_METERS * c


def distance(a: GeoPoint, b: GeoPoint, unit: DistanceUnit = DistanceUnit.KILOMETERS) -> float:
    """Great-circle distance between two points in the requested unit."""
    meters = haversine_distance(a.lat, a.lon, b.lat, b.lon)
    if unit == DistanceUnit.METERS:
        return meters
    return meters / 1000


def find_nearest_facility(point: GeoPoint, facilities: Sequence[Facility]) -> Facility:
    """Find the facility closest to a point.

    Ties go to the facility listed first.

    Raises:
        EmptyCatalogError: If facilities is empty.
    """
    if not facilities:
        raise EmptyCatalogError("Cannot find nearest facility in an empty catalog")

    nearest = facilities[0]
    min_distance = distance(point, nearest.location)
    for facility in facilities[1:]:
        d = distance(point, facility.location)
        if d < min_distance:
            min_distance = d
            nearest = facility
    return nearest


def extract_stop_window(
    trip_stops: Sequence[Facility],
    origin_stop_id: str,
    destination_stop_id: str,
) -> list[Facility]:
    """Slice the stops between origin and destination (inclusive) in travel order.

    The listing may run in either direction; when the destination comes
    first the window is reversed so it always starts at the origin stop.

    Raises:
        StopSequenceUnavailableError: If either stop is not in the listing.
    """
    ids = [stop.facility_id for stop in trip_stops]
    try:
        from_index = ids.index(origin_stop_id)
        to_index = ids.index(destination_stop_id)
    except ValueError as e:
        raise StopSequenceUnavailableError(
            f"Stops {origin_stop_id} -> {destination_stop_id} not on trip listing"
        ) from e

    if from_index <= to_index:
        return list(trip_stops[from_index : to_index + 1])
    return list(reversed(trip_stops[to_index : from_index + 1]))


def _get_catalog_cache(config: RoutingConfig) -> TTLCache[str, list[Facility]]:
    global _catalog_cache
    if _catalog_cache is None or _catalog_cache.ttl != config.catalog_cache_ttl_seconds:
        _catalog_cache = TTLCache[str, list[Facility]](ttl=config.catalog_cache_ttl_seconds)
    return _catalog_cache


def _get_trip_stops_cache(config: RoutingConfig) -> TTLCache[str, list[Facility]]:
    """Get the per-trip listing cache, rebuilt when the configured TTL changes."""
    global _trip_stops_cache
    ttl = config.trip_stops_cache_ttl_seconds
    if _trip_stops_cache is None or _trip_stops_cache.ttl != ttl:
        _trip_stops_cache = TTLCache[str, list[Facility]](ttl=ttl)
    return _trip_stops_cache


async def get_stop_catalog(
    config: RoutingConfig | None = None,
    force_refresh: bool = False,
) -> list[Facility]:
    """Get the stop catalog used for nearest-stop lookups.

    Uses the remote /v1/stops listing when enabled, with caching. Falls
    back to the built-in stops if the remote catalog is disabled,
    unreachable, or empty.

    Args:
        config: Optional configuration override.
        force_refresh: If True, bypass cache and fetch fresh data.

    Returns:
        Non-empty list of stops.
    """
    config = config or get_routing_config()
    if not config.use_remote_catalog:
        return list(DEFAULT_STOPS)

    cache = _get_catalog_cache(config)
    if not force_refresh:
        cached = cache.get(_CATALOG_KEY)
        if cached is not None:
            return cached

    async with cache.lock:
        if not force_refresh:
            cached = cache.get(_CATALOG_KEY)
            if cached is not None:
                return cached

        try:
            async with TransitAPIClient(config) as client:
                stops = await client.fetch_stops()
        except Exception as e:
            logger.warning(f"Failed to fetch stop catalog, using built-in stops: {e}")
            return list(DEFAULT_STOPS)

        if not stops:
            logger.warning("Remote stop catalog is empty, using built-in stops")
            return list(DEFAULT_STOPS)

        cache.set(_CATALOG_KEY, stops)
        logger.debug(f"Fetched {len(stops)} stops")
        return stops


def make_stop_sequence_lookup(
    client: TransitAPIClient,
    config: RoutingConfig | None = None,
) -> StopSequenceLookup:
    """Build a stop sequence lookup backed by per-trip stop listings.

    Listings are cached per trip. The returned callable raises
    StopSequenceUnavailableError when the leg has no trip or stop ids, or
    when the listing cannot be fetched or does not contain both stops.
    """
    cache = _get_trip_stops_cache(config or get_routing_config())

    async def lookup(leg: TransitLeg) -> list[Facility]:
        if not (leg.trip_id and leg.origin_stop_id and leg.destination_stop_id):
            raise StopSequenceUnavailableError("Leg has no trip or stop ids")

        trip_stops = cache.get(leg.trip_id)
        if trip_stops is None:
            async with cache.lock:
                trip_stops = cache.get(leg.trip_id)
                if trip_stops is None:
                    trip_stops = await client.fetch_trip_stops(leg.trip_id)
                    cache.set(leg.trip_id, trip_stops)

        return extract_stop_window(trip_stops, leg.origin_stop_id, leg.destination_stop_id)

    return lookup


def reset_service() -> None:
    """Reset cached catalog and trip listings. Useful for testing."""
    global _catalog_cache, _trip_stops_cache
    _catalog_cache = None
    _trip_stops_cache = None
    if hasattr(get_routing_config, "cache_clear"):
        get_routing_config.cache_clear()
