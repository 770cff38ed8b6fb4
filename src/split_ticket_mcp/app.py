"""MCP application instance.

This module exists to avoid circular import issues when running with `python -m`.
All tool modules should import `mcp` from here, not from server.py.
"""

from mcp.server.fastmcp import FastMCP

# Initialize the MCP server
mcp = FastMCP(
    "Split Ticket",
    instructions=(
        "Deutsche Bahn split-ticket search - finds journeys and checks whether "
        "two separate tickets via an intermediate station are cheaper"
    ),
)
