from typing import Any

import httpx

from transit_geometry.data.config import RoutingConfig
from transit_geometry.errors import RouteUnavailableError
from transit_geometry.models.geo import GeoPoint

ROUTE_PARAMS = {
    "overview": "full",
    "geometries": "geojson",
    "alternatives": "false",
}


class RoadGeometryClient:
    """Async HTTP client for road paths from an OSRM route service.

    Usage:
        async with RoadGeometryClient(config) as client:
            points = await client.fetch_path(origin, destination)
    """

    def __init__(self, config: RoutingConfig):
        """Initialize the client.

        Args:
            config: Routing configuration with the OSRM URL and profile.
        """
        self._config = config
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "RoadGeometryClient":
        """Enter async context - create HTTP client."""
        self._client = httpx.AsyncClient(timeout=self._config.request_timeout_seconds)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context - close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def build_route_url(self, origin: GeoPoint, destination: GeoPoint) -> str:
        """Build the /route URL; OSRM wants longitude before latitude."""
        base_url = self._config.osrm_base_url.rstrip("/")
        coordinates = f"{origin.as_lon_lat()};{destination.as_lon_lat()}"
        return f"{base_url}/route/v1/{self._config.osrm_profile}/{coordinates}"

    async def fetch_path(self, origin: GeoPoint, destination: GeoPoint) -> list[GeoPoint]:
        """Fetch the road path between two points.

        Args:
            origin: Start of the path.
            destination: End of the path.

        Returns:
            Ordered points along the first route OSRM returns.

        Raises:
            RuntimeError: If client not initialized.
            RouteUnavailableError: On transport failure, non-success status,
                or a response without a usable route.
        """
        if not self._client:
            raise RuntimeError("Client not initialized - use 'async with'")

        url = self.build_route_url(origin, destination)
        try:
            response = await self._client.get(url, params=ROUTE_PARAMS)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise RouteUnavailableError(f"Route request failed: {e}") from e

        return self._parse_route(data)

    def _parse_route(self, data: Any) -> list[GeoPoint]:
        """Parse an OSRM route response into GeoPoints."""
        if not isinstance(data, dict) or data.get("code") != "Ok":
            code = data.get("code") if isinstance(data, dict) else None
            raise RouteUnavailableError(f"No route found (code={code})")

        routes = data.get("routes") or []
        if not routes:
            raise RouteUnavailableError("No route found (empty route list)")

        try:
            coordinates = routes[0]["geometry"]["coordinates"]
            # GeoJSON pairs are [lon, lat]
            return [GeoPoint(lat=lat, lon=lon) for lon, lat, *_ in coordinates]
        except (KeyError, TypeError, ValueError) as e:
            raise RouteUnavailableError(f"Malformed route geometry: {e}") from e
