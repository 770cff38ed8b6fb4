import logging
from datetime import datetime

import httpx
from pydantic import TypeAdapter

from split_ticket_mcp.data.config import ProviderConfig
from split_ticket_mcp.models.provider import Journey, Location

logger = logging.getLogger(__name__)

_locations_adapter = TypeAdapter(list[Location])
_journeys_adapter = TypeAdapter(list[Journey])


class TransportRestClient:
    """Async HTTP client for a transport.rest style journey API.

    Implements the JourneyProvider protocol.

    Usage:
        async with TransportRestClient(config) as client:
            stations = await client.search_locations("Berlin Hbf", limit=1)
    """

    def __init__(self, config: ProviderConfig):
        """Initialize the client.

        Args:
            config: Provider configuration with base URL, timeout and user agent.
        """
        self._config = config
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "TransportRestClient":
        """Enter async context - create HTTP client."""
        headers = {"User-Agent": self._config.user_agent}
        self._client = httpx.AsyncClient(
            base_url=self._config.base_url,
            headers=headers,
            timeout=self._config.timeout_seconds,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context - close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def search_locations(self, query: str, limit: int) -> list[Location]:
        """Search stations, stops and addresses matching free text.

        Locations the provider returns without an ID cannot be used for
        journey searches and are dropped.

        Returns:
            Matching locations, best match first.

        Raises:
            RuntimeError: If client not initialized.
            httpx.HTTPError: If the HTTP request fails.
        """
        data = await self._get(
            "/locations",
            {"query": query, "results": limit, "stops": "true", "addresses": "true", "poi": "false"},
        )
        locations = _locations_adapter.validate_python(data)
        return [location for location in locations if location.id]

    async def search_journeys(
        self,
        origin_id: str,
        destination_id: str,
        departure: datetime,
        limit: int,
        include_stopovers: bool = False,
    ) -> list[Journey]:
        """Search journeys departing at or after `departure`.

        Returns:
            Journeys in provider order (ascending by departure).

        Raises:
            RuntimeError: If client not initialized.
            httpx.HTTPError: If the HTTP request fails.
        """
        params = {
            "from": origin_id,
            "to": destination_id,
            "departure": departure.isoformat(),
            "results": limit,
            "stopovers": "true" if include_stopovers else "false",
        }
        data = await self._get("/journeys", params)
        return _journeys_adapter.validate_python(data.get("journeys") or [])

    async def _get(self, path: str, params: dict):
        if not self._client:
            raise RuntimeError("Client not initialized - use 'async with'")

        logger.debug(f"GET {path} {params}")
        response = await self._client.get(path, params=params)
        response.raise_for_status()
        return response.json()
