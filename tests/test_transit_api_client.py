"""Tests for the transit API client."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from transit_geometry.data.config import RoutingConfig
from transit_geometry.data.transit_api_client import TransitAPIClient
from transit_geometry.errors import StopSequenceUnavailableError
from transit_geometry.models.geo import GeoPoint
from transit_geometry.models.itinerary import TransitLeg, WalkLeg


def create_plan_response() -> dict:
    """Create a sample /v1/plan response for testing."""
    return {
        "plans": [
            {
                "estimated_duration_minutes": 27,
                "departure_time": "2024-05-01T08:10:00",
                "segments": [
                    {
                        "type": "walk",
                        "from_lat": 40.7300,
                        "from_lon": -73.9980,
                        "to_lat": 40.7305,
                        "to_lon": -73.9975,
                        "duration_minutes": 3,
                    },
                    {
                        "type": "transit",
                        "from_lat": 40.7305,
                        "from_lon": -73.9975,
                        "to_lat": 40.6945,
                        "to_lon": -73.9870,
                        "duration_minutes": 22,
                        "from_stop_id": 12,
                        "to_stop_id": 31,
                        "route_long_name": "Route A",
                        "route_short_name": "A",
                        "trip_id": 501,
                        "departure_time": "08:12",
                        "arrival_time": "08:34",
                    },
                    {
                        "type": "walk",
                        "from_lat": 40.6945,
                        "from_lon": -73.9870,
                        "to_lat": 40.6943,
                        "to_lon": -73.9867,
                        "duration_minutes": None,
                    },
                ],
            },
            {"estimated_duration_minutes": 0, "segments": []},
        ]
    }


def create_stops_response() -> dict:
    return {
        "stops": [
            {"stop_id": 12, "stop_name": "715 Broadway", "lat": 40.7295, "lon": -73.9936},
            {"stop_id": 31, "stop_name": "MetroTech", "lat": 40.6930, "lon": -73.9855},
        ]
    }


@pytest.fixture
def config() -> RoutingConfig:
    """Create a test config."""
    return RoutingConfig(TRANSIT_API_URL="https://transit.example.com")


def _patched_client(response=None, side_effect=None) -> AsyncMock:
    mock_client = AsyncMock()
    mock_client.get = AsyncMock(return_value=response, side_effect=side_effect)
    return mock_client


def _json_response(data) -> MagicMock:
    mock_response = MagicMock()
    mock_response.json.return_value = data
    return mock_response


@pytest.mark.asyncio
async def test_fetch_plans_parses_legs(config: RoutingConfig):
    mock_client = _patched_client(_json_response(create_plan_response()))

    with patch("httpx.AsyncClient", return_value=mock_client):
        async with TransitAPIClient(config) as client:
            itineraries = await client.fetch_plans(
                GeoPoint(lat=40.73, lon=-73.998), GeoPoint(lat=40.6943, lon=-73.9867)
            )

    # plan without segments is skipped
    assert len(itineraries) == 1
    itinerary = itineraries[0]
    assert itinerary.estimated_duration_minutes == 27
    assert [type(leg) for leg in itinerary.legs] == [WalkLeg, TransitLeg, WalkLeg]

    transit = itinerary.legs[1]
    assert transit.origin_stop_id == "12"
    assert transit.destination_stop_id == "31"
    assert transit.trip_id == "501"
    assert transit.route_name == "Route A"
    assert transit.origin == GeoPoint(lat=40.7305, lon=-73.9975)

    # null duration reads as zero
    assert itinerary.legs[2].duration_minutes == 0


@pytest.mark.asyncio
async def test_fetch_plans_sends_query_params(config: RoutingConfig):
    mock_client = _patched_client(_json_response({"plans": []}))

    with patch("httpx.AsyncClient", return_value=mock_client):
        async with TransitAPIClient(config) as client:
            await client.fetch_plans(
                GeoPoint(lat=40.73, lon=-73.998),
                GeoPoint(lat=40.69, lon=-73.98),
                timestamp="2024-05-01T08:00:00",
                mode="arrival",
            )

    args, kwargs = mock_client.get.call_args
    assert args[0] == "/v1/plan"
    assert kwargs["params"] == {
        "from_lat": "40.73",
        "from_lon": "-73.998",
        "to_lat": "40.69",
        "to_lon": "-73.98",
        "mode": "arrival",
        "timestamp": "2024-05-01T08:00:00",
    }


@pytest.mark.asyncio
async def test_fetch_stops_parses_facilities(config: RoutingConfig):
    mock_client = _patched_client(_json_response(create_stops_response()))

    with patch("httpx.AsyncClient", return_value=mock_client):
        async with TransitAPIClient(config) as client:
            stops = await client.fetch_stops()

    assert [s.facility_id for s in stops] == ["12", "31"]
    assert stops[1].name == "MetroTech"
    assert stops[1].location == GeoPoint(lat=40.6930, lon=-73.9855)


@pytest.mark.asyncio
async def test_fetch_trip_stops_in_travel_order(config: RoutingConfig):
    mock_client = _patched_client(_json_response(create_stops_response()))

    with patch("httpx.AsyncClient", return_value=mock_client):
        async with TransitAPIClient(config) as client:
            stops = await client.fetch_trip_stops("501")

    assert mock_client.get.call_args.args[0] == "/v1/trips/501/stops"
    assert [s.facility_id for s in stops] == ["12", "31"]


@pytest.mark.asyncio
async def test_fetch_trip_stops_missing_endpoint_is_unavailable(config: RoutingConfig):
    mock_response = _json_response({})
    mock_response.raise_for_status.side_effect = httpx.HTTPStatusError(
        "404 Not Found", request=MagicMock(), response=MagicMock()
    )
    mock_client = _patched_client(mock_response)

    with patch("httpx.AsyncClient", return_value=mock_client):
        async with TransitAPIClient(config) as client:
            with pytest.raises(StopSequenceUnavailableError):
                await client.fetch_trip_stops("501")


@pytest.mark.asyncio
async def test_fetch_trip_stops_empty_listing_is_unavailable(config: RoutingConfig):
    mock_client = _patched_client(_json_response({"stops": []}))

    with patch("httpx.AsyncClient", return_value=mock_client):
        async with TransitAPIClient(config) as client:
            with pytest.raises(StopSequenceUnavailableError):
                await client.fetch_trip_stops("501")


@pytest.mark.asyncio
async def test_fetch_trip_stops_transport_error_is_unavailable(config: RoutingConfig):
    mock_client = _patched_client(side_effect=httpx.ReadTimeout("timed out"))

    with patch("httpx.AsyncClient", return_value=mock_client):
        async with TransitAPIClient(config) as client:
            with pytest.raises(StopSequenceUnavailableError):
                await client.fetch_trip_stops("501")
