"""Built-in campus stop and destination catalog."""

from transit_geometry.models.geo import Facility, GeoPoint

WALKING_COLOR = "#6b7280"
DEFAULT_ROUTE_COLOR = "#3b82f6"

# Bus stops around Washington Square and Brooklyn Tandon
DEFAULT_STOPS: tuple[Facility, ...] = (
    Facility(
        facility_id="wash-square-stop-1",
        name="Washington Square Stop",
        location=GeoPoint(lat=40.7305, lon=-73.9975),
    ),
    Facility(
        facility_id="wash-square-stop-2",
        name="Washington Square North Stop",
        location=GeoPoint(lat=40.7320, lon=-73.9965),
    ),
    Facility(
        facility_id="brooklyn-tandon-stop-1",
        name="Tandon School Stop",
        location=GeoPoint(lat=40.6945, lon=-73.9870),
    ),
    Facility(
        facility_id="brooklyn-tandon-stop-2",
        name="Tandon MetroTech Stop",
        location=GeoPoint(lat=40.6930, lon=-73.9855),
    ),
)

DESTINATIONS: tuple[Facility, ...] = (
    Facility(
        facility_id="bern-dibner",
        name="Bern Dibner",
        location=GeoPoint(lat=40.6943, lon=-73.9867),
    ),
    Facility(
        facility_id="paulson-center",
        name="Paulson Center",
        location=GeoPoint(lat=40.7296, lon=-73.9962),
    ),
    Facility(
        facility_id="washington-square",
        name="Washington Square",
        location=GeoPoint(lat=40.7309, lon=-73.9972),
    ),
)

ROUTE_COLORS: dict[str, str] = {
    "bern-dibner": "#8b5cf6",  # purple
    "paulson-center": "#10b981",  # green
    "washington-square": "#f59e0b",  # orange
}


def route_color(destination_id: str) -> str:
    """Stroke color for transit segments heading to a destination."""
    return ROUTE_COLORS.get(destination_id, DEFAULT_ROUTE_COLOR)


def get_destination(destination_id: str) -> Facility | None:
    for destination in DESTINATIONS:
        if destination.facility_id == destination_id:
            return destination
    return None
