from transit_geometry.app import mcp
from transit_geometry.models.itinerary import Itinerary
from transit_geometry.models.responses import TimelineResponse
from transit_geometry.services.timeline_service import get_timeline_layout as _get_timeline_layout


@mcp.tool()
def get_timeline_layout(itinerary: Itinerary) -> TimelineResponse:
    """Compute summary-bar widths for an itinerary's legs.

    Widths are proportional to leg duration, with transit legs at least 15%
    and walking legs at least 8%, scaled so the total stays within 100%.

    Args:
        itinerary: Ordered walk/transit legs with durations in minutes.

    Returns:
        TimelineResponse with one slot per leg.
    """
    return _get_timeline_layout(itinerary)
