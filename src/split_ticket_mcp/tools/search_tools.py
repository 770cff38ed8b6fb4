"""MCP tools for split-ticket search and station autocomplete."""

import logging

from split_ticket_mcp.app import mcp
from split_ticket_mcp.errors import InvalidInputError, NotFoundError
from split_ticket_mcp.models.responses import (
    ErrorCode,
    SearchResult,
    SearchSplitTicketsResponse,
    SearchStationsResponse,
)
from split_ticket_mcp.services import search_service

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def _failure(error: Exception) -> SearchSplitTicketsResponse:
    """Map an exception to a failed response without leaking internals."""
    if isinstance(error, InvalidInputError):
        return SearchSplitTicketsResponse(
            success=False, error=str(error), error_code=ErrorCode.INVALID_INPUT
        )
    if isinstance(error, NotFoundError):
        return SearchSplitTicketsResponse(
            success=False, error=str(error), error_code=ErrorCode.NOT_FOUND
        )
    logger.error("Search error", exc_info=error)
    return SearchSplitTicketsResponse(
        success=False, error=INTERNAL_ERROR_MESSAGE, error_code=ErrorCode.INTERNAL_ERROR
    )


@mcp.tool()
async def search_split_tickets(
    origin: str | None = None,
    destination: str | None = None,
    departure: str | None = None,
    origin_id: str | None = None,
    destination_id: str | None = None,
) -> SearchSplitTicketsResponse:
    """Search Deutsche Bahn journeys and check split-ticket savings.

    For each of the next direct journeys, up to three split stations are
    priced (transfer stations first, then sampled intermediate stops). A split
    means buying origin -> split station and split station -> destination as
    two separate tickets.

    Examples:
        search_split_tickets(origin="Berlin Hbf", destination="München Hbf")
        search_split_tickets(origin_id="8011160", destination_id="8000261",
                             departure="2025-03-01T08:00")

    Args:
        origin: Origin station name (looked up unless origin_id is given)
        destination: Destination station name (looked up unless destination_id is given)
        departure: Departure date/time in ISO 8601 format (default: now)
        origin_id: Provider station ID of the origin, e.g. from search_stations
        destination_id: Provider station ID of the destination

    Returns:
        SearchSplitTicketsResponse with journeys in departure order, each with
        split options sorted by savings (best first).
    """
    try:
        result = await search_service.search(
            origin=origin,
            destination=destination,
            departure=departure,
            origin_id=origin_id,
            destination_id=destination_id,
        )
    except Exception as e:
        return _failure(e)

    return SearchSplitTicketsResponse(result=result, count=len(result.results), success=True)


@mcp.tool()
async def load_more_split_tickets(previous: SearchResult) -> SearchSplitTicketsResponse:
    """Load the journeys departing after those of a previous search.

    The next search starts one minute after the first departure of the last
    journey in `previous`. New journeys are appended after the previous ones.

    Args:
        previous: The `result` of an earlier search_split_tickets or
                  load_more_split_tickets call.

    Returns:
        SearchSplitTicketsResponse whose result holds the previous journeys
        followed by the newly found ones.
    """
    try:
        page = await search_service.load_more(previous)
    except Exception as e:
        return _failure(e)

    combined = search_service.append_results(previous, page)
    return SearchSplitTicketsResponse(result=combined, count=len(combined.results), success=True)


@mcp.tool()
async def search_stations(query: str, limit: int = 5) -> SearchStationsResponse:
    """Autocomplete Deutsche Bahn stations and stops by name.

    Examples:
        search_stations("Berlin Hbf")
        search_stations("Frankf", limit=3)

    Args:
        query: Station name or part of it (at least 2 characters).
        limit: Maximum number of stations (1-10, default 5).

    Returns:
        SearchStationsResponse with matching stations, best match first.
    """
    # Clamp limit
    if limit < 1:
        limit = 1
    elif limit > 10:
        limit = 10

    try:
        stations = await search_service.search_stations(query=query, limit=limit)
    except InvalidInputError as e:
        return SearchStationsResponse(
            stations=[],
            count=0,
            success=False,
            error=str(e),
            error_code=ErrorCode.INVALID_INPUT,
        )
    except Exception as e:
        logger.error("Locations error", exc_info=e)
        return SearchStationsResponse(
            stations=[],
            count=0,
            success=False,
            error=INTERNAL_ERROR_MESSAGE,
            error_code=ErrorCode.INTERNAL_ERROR,
        )

    return SearchStationsResponse(stations=stations, count=len(stations))
