"""Error types raised by the geometry core."""


class EmptyCatalogError(ValueError):
    """Nearest-facility lookup was called with no facilities."""


class RouteUnavailableError(Exception):
    """The road-routing service could not produce a usable route."""


class StopSequenceUnavailableError(Exception):
    """No per-trip stop sequence could be obtained for a transit leg."""
