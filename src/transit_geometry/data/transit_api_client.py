from datetime import datetime
from typing import Any, Literal

import httpx

from transit_geometry.data.config import RoutingConfig
from transit_geometry.errors import StopSequenceUnavailableError
from transit_geometry.models.geo import Facility, GeoPoint
from transit_geometry.models.itinerary import Itinerary, TransitLeg, WalkLeg


class TransitAPIClient:
    """Async HTTP client for the transit API (stops, trip stops, plans).

    Usage:
        async with TransitAPIClient(config) as client:
            stops = await client.fetch_stops()
    """

    def __init__(self, config: RoutingConfig):
        """Initialize the client.

        Args:
            config: Configuration with the transit API base URL.
        """
        self._config = config
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "TransitAPIClient":
        """Enter async context - create HTTP client."""
        self._client = httpx.AsyncClient(
            base_url=self._config.transit_api_url,
            timeout=self._config.request_timeout_seconds,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context - close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def _require_client(self) -> httpx.AsyncClient:
        if not self._client:
            raise RuntimeError("Client not initialized - use 'async with'")
        return self._client

    async def fetch_stops(self) -> list[Facility]:
        """Fetch the full stop catalog.

        Raises:
            RuntimeError: If client not initialized.
            httpx.HTTPError: If the HTTP request fails.
        """
        client = self._require_client()
        response = await client.get("/v1/stops")
        response.raise_for_status()
        return [self._parse_stop(stop) for stop in response.json().get("stops") or []]

    async def fetch_trip_stops(self, trip_id: str) -> list[Facility]:
        """Fetch the stops of a trip in travel order.

        Returns:
            Stops as traveled.

        Raises:
            RuntimeError: If client not initialized.
            StopSequenceUnavailableError: If the endpoint is missing, the trip
                is unknown, the request fails, or the listing is empty.
        """
        client = self._require_client()
        try:
            response = await client.get(f"/v1/trips/{trip_id}/stops")
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise StopSequenceUnavailableError(f"Trip {trip_id} stops unavailable: {e}") from e

        try:
            stops = [self._parse_stop(stop) for stop in payload.get("stops") or []]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise StopSequenceUnavailableError(f"Malformed stops for trip {trip_id}: {e}") from e

        if not stops:
            raise StopSequenceUnavailableError(f"Trip {trip_id} has no stops listed")
        return stops

    async def fetch_plans(
        self,
        origin: GeoPoint,
        destination: GeoPoint,
        timestamp: datetime | str | None = None,
        mode: Literal["departure", "arrival"] = "departure",
    ) -> list[Itinerary]:
        """Ask the planner for itineraries between two points.

        Args:
            origin: Trip start.
            destination: Trip end.
            timestamp: Departure (or arrival, per mode) time; planner default is now.
            mode: Whether timestamp is a departure or an arrival time.

        Returns:
            Itineraries in planner order. Plans with no segments are skipped.

        Raises:
            RuntimeError: If client not initialized.
            httpx.HTTPError: If the HTTP request fails.
        """
        client = self._require_client()
        params: dict[str, str] = {
            "from_lat": str(origin.lat),
            "from_lon": str(origin.lon),
            "to_lat": str(destination.lat),
            "to_lon": str(destination.lon),
            "mode": mode,
        }
        if timestamp is not None:
            params["timestamp"] = (
                timestamp.isoformat() if isinstance(timestamp, datetime) else timestamp
            )

        response = await client.get("/v1/plan", params=params)
        response.raise_for_status()

        itineraries = []
        for plan in response.json().get("plans") or []:
            if plan.get("segments"):
                itineraries.append(self._parse_plan(plan))
        return itineraries

    def _parse_stop(self, stop: dict[str, Any]) -> Facility:
        return Facility(
            facility_id=str(stop["stop_id"]),
            name=stop.get("stop_name") or str(stop["stop_id"]),
            location=GeoPoint(lat=float(stop["lat"]), lon=float(stop["lon"])),
        )

    def _parse_plan(self, plan: dict[str, Any]) -> Itinerary:
        """Parse a planner plan into an Itinerary."""
        return Itinerary(
            legs=[self._parse_segment(segment) for segment in plan["segments"]],
            estimated_duration_minutes=plan.get("estimated_duration_minutes"),
            departure_time=plan.get("departure_time"),
        )

    def _parse_segment(self, segment: dict[str, Any]) -> WalkLeg | TransitLeg:
        origin = GeoPoint(lat=segment["from_lat"], lon=segment["from_lon"])
        destination = GeoPoint(lat=segment["to_lat"], lon=segment["to_lon"])
        duration = segment.get("duration_minutes")

        if segment.get("type") == "transit":
            return TransitLeg(
                origin=origin,
                destination=destination,
                duration_minutes=duration,
                origin_stop_id=segment.get("from_stop_id"),
                destination_stop_id=segment.get("to_stop_id"),
                trip_id=segment.get("trip_id"),
                route_name=segment.get("route_long_name"),
                route_short_name=segment.get("route_short_name"),
                departure_time=segment.get("departure_time"),
                arrival_time=segment.get("arrival_time"),
            )
        return WalkLeg(origin=origin, destination=destination, duration_minutes=duration)
