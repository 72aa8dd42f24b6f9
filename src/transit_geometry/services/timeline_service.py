"""Proportional timeline widths for the itinerary summary bar.

Widths are percentages of the bar. Every transit leg is scaled up to a
legible minimum, walking legs get a smaller floor, and the result is
scaled back down so the bar never overflows.
"""

from collections.abc import Sequence

from transit_geometry.models.itinerary import Itinerary, TimelineSlot, TransitLeg
from transit_geometry.models.responses import ItinerarySummary, TimelineResponse

MIN_TRANSIT_WIDTH_PERCENT = 15
MIN_WALK_WIDTH_PERCENT = 8
MIN_LEG_DURATION_MINUTES = 1


def layout_widths(legs: Sequence[tuple[bool, float]]) -> list[float]:
    """Compute width percentages for (is_transit, duration_minutes) pairs.

    Args:
        legs: One (is_transit, duration_minutes) pair per leg, in order.

    Returns:
        Width percent per leg, in order. Sums to at most 100.
    """
    if not legs:
        return []

    # zero or missing durations would give zero-width (or NaN) segments
    durations = [max(MIN_LEG_DURATION_MINUTES, duration) for _, duration in legs]
    total = max(MIN_LEG_DURATION_MINUTES, sum(durations))
    widths = [100 * d / total for d in durations]

    transit_widths = [w for w, (is_transit, _) in zip(widths, legs) if is_transit]
    if transit_widths:
        smallest = min(transit_widths)
        if smallest < MIN_TRANSIT_WIDTH_PERCENT:
            scale = MIN_TRANSIT_WIDTH_PERCENT / smallest
            widths = [w * scale for w in widths]

    widths = [
        w if is_transit else max(w, MIN_WALK_WIDTH_PERCENT)
        for w, (is_transit, _) in zip(widths, legs)
    ]

    total_width = sum(widths)
    if total_width > 100:
        final_scale = 100 / total_width
        widths = [w * final_scale for w in widths]

    return widths


def build_timeline(itinerary: Itinerary) -> list[TimelineSlot]:
    """Timeline slots for each leg of an itinerary."""
    legs = [(isinstance(leg, TransitLeg), leg.duration_minutes) for leg in itinerary.legs]
    return [
        TimelineSlot(is_transit=is_transit, raw_duration_minutes=duration, width_percent=width)
        for (is_transit, duration), width in zip(legs, layout_widths(legs))
    ]


def get_timeline_layout(itinerary: Itinerary) -> TimelineResponse:
    slots = build_timeline(itinerary)
    return TimelineResponse(
        slots=slots,
        total_duration_minutes=itinerary.total_duration_minutes,
        total_width_percent=sum(slot.width_percent for slot in slots),
    )


def option_label(index: int) -> str:
    """Letter label for the index-th option: A, B, ..., Z, AA, AB, ..."""
    label = ""
    index += 1
    while index > 0:
        index, remainder = divmod(index - 1, 26)
        label = chr(ord("A") + remainder) + label
    return label


def summarize_itineraries(itineraries: Sequence[Itinerary]) -> list[ItinerarySummary]:
    """Labelled summaries (A, B, C...) with total duration and timeline."""
    return [
        ItinerarySummary(
            label=option_label(index),
            itinerary=itinerary,
            total_duration_minutes=itinerary.total_duration_minutes,
            timeline=build_timeline(itinerary),
        )
        for index, itinerary in enumerate(itineraries)
    ]
