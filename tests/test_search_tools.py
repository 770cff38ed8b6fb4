"""Tests for the split-ticket MCP tools."""

from unittest.mock import AsyncMock, patch

import pytest
from fakes import at, simple_journey, station

from split_ticket_mcp.errors import InvalidInputError, NotFoundError, ProviderError
from split_ticket_mcp.models.provider import Location, LocationKind
from split_ticket_mcp.models.responses import ErrorCode, JourneyResult, SearchResult
from split_ticket_mcp.tools.search_tools import (
    load_more_split_tickets,
    search_split_tickets,
    search_stations,
)


def _create_search_result(*departure_hours: int) -> SearchResult:
    """Create a search result with one unsplit journey per departure hour."""
    return SearchResult(
        origin=station("BER", "Berlin Hbf"),
        destination=station("MUC", "München Hbf"),
        departure=at(departure_hours[0]) if departure_hours else at(9),
        results=[
            JourneyResult(
                journey=simple_journey("BER", "MUC", 150, at(hour)),
                direct_price=150,
                split_options=[],
            )
            for hour in departure_hours
        ],
    )


@pytest.mark.asyncio
async def test_search_split_tickets_returns_result():
    """search_split_tickets should wrap the service result."""
    with patch(
        "split_ticket_mcp.tools.search_tools.search_service.search",
        new=AsyncMock(return_value=_create_search_result(10, 11)),
    ) as mock_search:
        response = await search_split_tickets(origin="Berlin", destination="München")

    assert response.success is True
    assert response.count == 2
    assert response.error_code is None
    call_kwargs = mock_search.call_args.kwargs
    assert call_kwargs["origin"] == "Berlin"
    assert call_kwargs["destination"] == "München"
    assert call_kwargs["departure"] is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("error", "expected_code", "expected_message"),
    [
        (InvalidInputError("Missing from/to parameters"), ErrorCode.INVALID_INPUT, "Missing from/to parameters"),
        (NotFoundError("Station not found: X"), ErrorCode.NOT_FOUND, "Station not found: X"),
        (ProviderError("Journey search failed for A -> B"), ErrorCode.INTERNAL_ERROR, "Internal server error"),
        (ValueError("boom"), ErrorCode.INTERNAL_ERROR, "Internal server error"),
    ],
)
async def test_search_split_tickets_maps_errors(error, expected_code, expected_message):
    """Errors map to distinguishable codes without leaking internals."""
    with patch(
        "split_ticket_mcp.tools.search_tools.search_service.search",
        new=AsyncMock(side_effect=error),
    ):
        response = await search_split_tickets(origin="X", destination="Y")

    assert response.success is False
    assert response.result is None
    assert response.error_code == expected_code
    assert response.error == expected_message


@pytest.mark.asyncio
async def test_search_split_tickets_rejects_missing_input_without_provider():
    """Missing endpoints are rejected before any HTTP client is created."""
    with patch("httpx.AsyncClient") as mock_client_class:
        response = await search_split_tickets(origin="Berlin")

    assert response.error_code == ErrorCode.INVALID_INPUT
    mock_client_class.assert_not_called()


@pytest.mark.asyncio
async def test_load_more_appends_new_page():
    """load_more_split_tickets should append the next page to the previous one."""
    previous = _create_search_result(10, 11)
    page = _create_search_result(12)

    with patch(
        "split_ticket_mcp.tools.search_tools.search_service.load_more",
        new=AsyncMock(return_value=page),
    ) as mock_load_more:
        response = await load_more_split_tickets(previous)

    mock_load_more.assert_called_once_with(previous)
    assert response.success is True
    assert response.count == 3
    departures = [r.journey.first_departure for r in response.result.results]
    assert departures == [at(10), at(11), at(12)]


@pytest.mark.asyncio
async def test_load_more_without_results_is_invalid():
    """An empty previous result cannot be continued."""
    response = await load_more_split_tickets(_create_search_result())

    assert response.success is False
    assert response.error_code == ErrorCode.INVALID_INPUT


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("limit", "expected"),
    [
        (0, 1),
        (50, 10),
        (5, 5),
    ],
)
async def test_search_stations_clamps_limit(limit: int, expected: int):
    """search_stations should clamp limit to 1-10."""
    with patch(
        "split_ticket_mcp.tools.search_tools.search_service.search_stations",
        new=AsyncMock(return_value=[]),
    ) as mock_service:
        await search_stations("Berlin", limit=limit)

    assert mock_service.call_args.kwargs["limit"] == expected


@pytest.mark.asyncio
async def test_search_stations_returns_stations():
    stations = [Location(id="8011160", name="Berlin Hbf", kind=LocationKind.STATION)]

    with patch(
        "split_ticket_mcp.tools.search_tools.search_service.search_stations",
        new=AsyncMock(return_value=stations),
    ):
        response = await search_stations("Berlin")

    assert response.success is True
    assert response.count == 1
    assert response.stations[0].name == "Berlin Hbf"


@pytest.mark.asyncio
async def test_search_stations_short_query():
    response = await search_stations("B")

    assert response.success is False
    assert response.error_code == ErrorCode.INVALID_INPUT
    assert response.count == 0


@pytest.mark.asyncio
async def test_search_stations_provider_failure():
    with patch(
        "split_ticket_mcp.tools.search_tools.search_service.search_stations",
        new=AsyncMock(side_effect=ProviderError("Location search failed")),
    ):
        response = await search_stations("Berlin")

    assert response.success is False
    assert response.error_code == ErrorCode.INTERNAL_ERROR
    assert response.error == "Internal server error"
