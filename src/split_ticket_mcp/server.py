import argparse
import asyncio
import logging
from datetime import UTC, datetime

from pydantic import BaseModel

from split_ticket_mcp.app import mcp
from split_ticket_mcp.tools import search_tools  # noqa: F401  (registers tools)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str


@mcp.tool()
def health() -> HealthResponse:
    """Check if the split-ticket MCP server is running and healthy.

    Returns the server status, version, and current timestamp.
    """
    from split_ticket_mcp import __version__

    return HealthResponse(
        status="ok",
        version=__version__,
        timestamp=datetime.now(UTC).isoformat(),
    )


async def run_search(origin: str, destination: str, departure: str | None) -> None:
    """Run a single search and print the split options."""
    response = await search_tools.search_split_tickets(
        origin=origin,
        destination=destination,
        departure=departure,
    )
    if not response.success:
        print(f"Search failed ({response.error_code.value}): {response.error}")
        return

    result = response.result
    print(f"\n{result.origin.name} -> {result.destination.name}")
    for item in result.results:
        first_departure = item.journey.first_departure
        when = f"{first_departure:%Y-%m-%d %H:%M}" if first_departure is not None else "n/a"
        direct = f"{item.direct_price:.2f}" if item.direct_price is not None else "n/a"
        print(f"\n  Departure {when}  direct fare: {direct}")
        if not item.split_options:
            print("    no priced split found")
        for option in item.split_options:
            marker = "*" if option.is_cheaper else " "
            print(
                f"   {marker} via {option.split_station.name}: "
                f"{option.price1:.2f} + {option.price2:.2f} = {option.total_price:.2f} "
                f"(savings {option.savings:.2f})"
            )


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="split-ticket-mcp",
        description="Split Ticket MCP Server",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    subparsers = parser.add_subparsers(dest="command")

    # search command
    search_parser = subparsers.add_parser(
        "search",
        help="Search split tickets once and print the result",
    )
    search_parser.add_argument("origin", help="Origin station name")
    search_parser.add_argument("destination", help="Destination station name")
    search_parser.add_argument(
        "--departure",
        default=None,
        help="Departure date/time in ISO 8601 format (default: now)",
    )

    args = parser.parse_args()

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.command == "search":
        asyncio.run(run_search(args.origin, args.destination, args.departure))
    else:
        # Default: run MCP server
        mcp.run()


if __name__ == "__main__":
    main()
