"""Transit itinerary geometry and timeline layout."""

__version__ = "0.1.0"
