"""Tests for timeline width layout."""

import math

import pytest

from transit_geometry.models.geo import GeoPoint
from transit_geometry.models.itinerary import Itinerary, TransitLeg, WalkLeg
from transit_geometry.services.timeline_service import (
    MIN_TRANSIT_WIDTH_PERCENT,
    MIN_WALK_WIDTH_PERCENT,
    build_timeline,
    get_timeline_layout,
    layout_widths,
    option_label,
    summarize_itineraries,
)

A = GeoPoint(lat=40.73, lon=-73.99)
B = GeoPoint(lat=40.70, lon=-73.98)


def _itinerary(*legs: tuple[str, float]) -> Itinerary:
    built = []
    for kind, duration in legs:
        cls = TransitLeg if kind == "transit" else WalkLeg
        built.append(cls(origin=A, destination=B, duration_minutes=duration))
    return Itinerary(legs=built)


class TestLayoutWidths:
    def test_empty(self):
        assert layout_widths([]) == []

    def test_proportional_when_no_floor_applies(self):
        widths = layout_widths([(False, 5), (True, 20), (False, 5)])
        assert widths == pytest.approx([100 * 5 / 30, 100 * 20 / 30, 100 * 5 / 30])

    def test_walk_floor_then_downscale(self):
        widths = layout_widths([(False, 1), (True, 50), (True, 10), (False, 0)])

        assert sum(widths) == pytest.approx(100)
        # walks were floored to the same width before the final scale
        assert widths[0] == pytest.approx(widths[3])
        assert widths[0] > 100 * 1 / 62
        # transit proportions survive the down-scale
        assert widths[1] / widths[2] == pytest.approx(5.0)

    def test_short_transit_scaled_up_then_normalized(self):
        widths = layout_widths([(False, 30), (True, 2), (False, 30)])

        assert sum(widths) <= 100 + 1e-9
        assert widths[0] / widths[1] == pytest.approx(15.0)
        assert widths[0] == pytest.approx(widths[2])

    def test_walk_only_itinerary(self):
        assert layout_widths([(False, 3)]) == pytest.approx([100])

    def test_transit_at_minimum_is_left_alone(self):
        widths = layout_widths([(True, 3), (True, 17)])
        assert widths == pytest.approx([MIN_TRANSIT_WIDTH_PERCENT, 85])

    @pytest.mark.parametrize(
        "legs",
        [
            [(True, 0)],
            [(True, 0), (False, 0)],
            [(False, 0), (True, 0), (False, 0)],
        ],
    )
    def test_zero_durations_never_zero_or_nan(self, legs):
        widths = layout_widths(legs)
        assert len(widths) == len(legs)
        for width in widths:
            assert width > 0
            assert not math.isnan(width)

    @pytest.mark.parametrize(
        "legs",
        [
            [(False, 2), (True, 1), (False, 2), (True, 40), (False, 9)],
            [(True, 1), (True, 1), (True, 1), (True, 1), (True, 1), (True, 1), (True, 1)],
            [(False, 1)] * 20,
            [(False, 120), (True, 1)],
        ],
    )
    def test_sum_never_exceeds_100(self, legs):
        assert sum(layout_widths(legs)) <= 100 + 1e-9

    def test_walk_floor_survives_when_no_overflow(self):
        # a lone walk leg cannot overflow, so it keeps its full width
        widths = layout_widths([(False, 0)])
        assert widths[0] >= MIN_WALK_WIDTH_PERCENT


class TestBuildTimeline:
    def test_slots_follow_legs(self):
        slots = build_timeline(_itinerary(("walk", 5), ("transit", 20), ("walk", 5)))

        assert [slot.is_transit for slot in slots] == [False, True, False]
        assert [slot.raw_duration_minutes for slot in slots] == [5, 20, 5]
        assert sum(slot.width_percent for slot in slots) == pytest.approx(100)

    def test_layout_response_totals(self):
        itinerary = _itinerary(("walk", 0), ("transit", 0))
        response = get_timeline_layout(itinerary)

        assert response.total_duration_minutes == 1
        assert response.total_width_percent <= 100 + 1e-9
        assert all(slot.width_percent > 0 for slot in response.slots)


class TestSummaries:
    def test_labels(self):
        assert [option_label(i) for i in (0, 1, 2, 25, 26, 27)] == ["A", "B", "C", "Z", "AA", "AB"]

    def test_summaries_prefer_planner_estimate(self):
        first = _itinerary(("walk", 5), ("transit", 20))
        second = Itinerary(
            legs=[WalkLeg(origin=A, destination=B, duration_minutes=7)],
            estimated_duration_minutes=9,
        )

        summaries = summarize_itineraries([first, second])

        assert [s.label for s in summaries] == ["A", "B"]
        assert summaries[0].total_duration_minutes == 25
        assert summaries[1].total_duration_minutes == 9
        assert len(summaries[0].timeline) == 2
