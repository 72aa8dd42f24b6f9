import argparse
import logging
from datetime import UTC, datetime

from pydantic import BaseModel

from transit_geometry.app import mcp


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str


@mcp.tool()
def health() -> HealthResponse:
    """Check if the transit geometry server is running and healthy.

    Returns the server status, version, and current timestamp.
    """
    from transit_geometry import __version__

    return HealthResponse(
        status="ok",
        version=__version__,
        timestamp=datetime.now(UTC).isoformat(),
    )


def _register_tools() -> None:
    # importing the tool modules registers them on `mcp`
    from transit_geometry.tools import geometry_tools, stop_tools, timeline_tools  # noqa: F401


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="transit-geometry",
        description="Transit itinerary geometry MCP server",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    args = parser.parse_args()

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    _register_tools()
    mcp.run()


if __name__ == "__main__":
    main()
