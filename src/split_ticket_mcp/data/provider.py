"""Journey provider port used by the split optimizer."""

from datetime import datetime
from typing import Protocol

from split_ticket_mcp.models.provider import Journey, Location


class JourneyProvider(Protocol):
    """Location lookup and journey search offered by a timetable provider."""

    async def search_locations(self, query: str, limit: int) -> list[Location]:
        """Return the best matches for free-text input, best first."""
        ...

    async def search_journeys(
        self,
        origin_id: str,
        destination_id: str,
        departure: datetime,
        limit: int,
        include_stopovers: bool = False,
    ) -> list[Journey]:
        """Return up to `limit` journeys departing at or after `departure`."""
        ...
