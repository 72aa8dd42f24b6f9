"""MCP application instance.

This module exists to avoid circular import issues when running with `python -m`.
All tool modules should import `mcp` from here, not from server.py.
"""

from mcp.server.fastmcp import FastMCP

mcp = FastMCP(
    "Transit Geometry",
    instructions="Road-accurate geometry and timeline layout for transit itineraries",
)
