"""Split-ticket search across a window of direct journeys.

Resolves origin and destination, fetches a small batch of direct journeys and
prices split options for each of them concurrently. Also provides the
"load more" continuation and station autocomplete.

Failures of the calls every result depends on (location resolution, direct
journey search) are raised as ProviderError; failures while pricing
individual split candidates are absorbed by the split pricer.
"""

import asyncio
import logging
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from split_ticket_mcp.data.cache import LookupCache
from split_ticket_mcp.data.config import ProviderConfig, get_provider_config
from split_ticket_mcp.data.provider import JourneyProvider
from split_ticket_mcp.data.transport_client import TransportRestClient
from split_ticket_mcp.errors import InvalidInputError, NotFoundError, ProviderError
from split_ticket_mcp.models.provider import Location, LocationKind
from split_ticket_mcp.models.responses import SearchResult
from split_ticket_mcp.services.split_pricer import aggregate_journey

logger = logging.getLogger(__name__)

MIN_STATION_QUERY_LENGTH = 2

# Module-level state (lazy-initialized)
_location_cache: LookupCache[list[Location]] | None = None
_config: ProviderConfig | None = None


def _get_config() -> ProviderConfig:
    """Get or create the provider config singleton."""
    global _config
    if _config is None:
        _config = get_provider_config()
    return _config


def _get_location_cache() -> LookupCache[list[Location]]:
    """Get or create the location lookup cache singleton."""
    global _location_cache
    if _location_cache is None:
        config = _get_config()
        _location_cache = LookupCache[list[Location]](ttl=config.location_cache_ttl_seconds)
    return _location_cache


def _parse_departure(departure: str | datetime | None) -> datetime:
    """Turn user input into an aware datetime (default: now).

    Naive values are interpreted in the configured timezone.
    """
    tz = ZoneInfo(_get_config().timezone)
    if departure is None or departure == "":
        return datetime.now(tz)

    if isinstance(departure, str):
        try:
            departure = datetime.fromisoformat(departure)
        except ValueError:
            raise InvalidInputError(f"Invalid departure date: {departure!r}") from None

    if departure.tzinfo is None:
        departure = departure.replace(tzinfo=tz)
    return departure


async def _lookup_locations(
    provider: JourneyProvider,
    query: str,
    limit: int,
    cache: LookupCache[list[Location]] | None,
) -> list[Location]:
    """Location search, cached when a cache is given.

    Empty results are not cached so a transient miss is retried next time.
    """
    key = (query.strip().casefold(), limit)

    if cache is not None:
        cached = cache.get(key)
        if cached is not None:
            logger.debug(f"Location cache hit for {query!r}")
            return cached

    try:
        locations = await provider.search_locations(query, limit=limit)
    except Exception as e:
        raise ProviderError(f"Location search failed for {query!r}") from e

    if cache is not None and locations:
        cache.set(key, locations)
    return locations


async def _resolve_location(
    provider: JourneyProvider,
    name: str | None,
    location_id: str | None,
    cache: LookupCache[list[Location]] | None,
) -> Location:
    """Resolve a side of the search to a location.

    A supplied ID is trusted as-is; otherwise the best name match is used.
    """
    if location_id:
        return Location(id=location_id, name=name or location_id)

    matches = await _lookup_locations(provider, name, limit=1, cache=cache)
    if not matches:
        raise NotFoundError(f"Station not found: {name}")
    return matches[0]


async def _search(
    provider: JourneyProvider,
    origin: str | None,
    destination: str | None,
    departure: datetime,
    origin_id: str | None,
    destination_id: str | None,
    cache: LookupCache[list[Location]] | None,
) -> SearchResult:
    config = _get_config()

    from_location = await _resolve_location(provider, origin, origin_id, cache)
    to_location = await _resolve_location(provider, destination, destination_id, cache)

    try:
        journeys = await provider.search_journeys(
            from_location.id,
            to_location.id,
            departure=departure,
            limit=config.journey_batch_size,
            include_stopovers=True,
        )
    except Exception as e:
        raise ProviderError(
            f"Journey search failed for {from_location.name} -> {to_location.name}"
        ) from e

    logger.info(
        f"Found {len(journeys)} journeys {from_location.name} -> {to_location.name} "
        f"from {departure.isoformat()}"
    )
    if not journeys:
        raise NotFoundError("No journey found")

    results = await asyncio.gather(
        *(
            aggregate_journey(
                provider,
                from_location.id,
                to_location.id,
                journey,
                max_candidates=config.max_candidates,
            )
            for journey in journeys
        )
    )

    return SearchResult(
        origin=from_location,
        destination=to_location,
        departure=departure,
        results=list(results),
    )


async def search(
    origin: str | None = None,
    destination: str | None = None,
    departure: str | datetime | None = None,
    origin_id: str | None = None,
    destination_id: str | None = None,
    provider: JourneyProvider | None = None,
) -> SearchResult:
    """Find direct journeys and their split-ticket options.

    Args:
        origin: Origin station name (ignored for lookup when origin_id is given)
        destination: Destination station name
        departure: ISO 8601 date/time or datetime (default: now)
        origin_id: Pre-resolved provider ID of the origin
        destination_id: Pre-resolved provider ID of the destination
        provider: Journey provider to use (default: REST client from config)

    Returns:
        SearchResult with one JourneyResult per direct journey, in provider order.

    Raises:
        InvalidInputError: Origin or destination missing, or bad departure.
        NotFoundError: A station could not be resolved or no journey exists.
        ProviderError: A mandatory provider call failed.
    """
    if not (origin or origin_id) or not (destination or destination_id):
        raise InvalidInputError("Missing from/to parameters")

    departure_time = _parse_departure(departure)

    if provider is not None:
        # injected providers bypass the shared cache, which holds REST results
        return await _search(
            provider, origin, destination, departure_time, origin_id, destination_id, None
        )

    # one client (and connection pool) shared by every call of this search
    async with TransportRestClient(_get_config()) as client:
        return await _search(
            client,
            origin,
            destination,
            departure_time,
            origin_id,
            destination_id,
            _get_location_cache(),
        )


def next_departure(prior: SearchResult) -> datetime:
    """Start of the search window following `prior`.

    Raises:
        InvalidInputError: If `prior` holds no journeys.
    """
    if not prior.results:
        raise InvalidInputError("Nothing to continue from: previous search has no results")

    last_departure = prior.results[-1].journey.first_departure
    if last_departure is None:
        raise InvalidInputError("Last journey has no departure time")
    return last_departure + timedelta(seconds=_get_config().load_more_offset_seconds)


async def load_more(
    prior: SearchResult,
    provider: JourneyProvider | None = None,
) -> SearchResult:
    """Search the window right after the last journey of a previous search.

    Origin and destination IDs of `prior` are reused without another lookup.

    Returns:
        A new SearchResult holding only the next page of journeys.
    """
    return await search(
        origin=prior.origin.name,
        destination=prior.destination.name,
        departure=next_departure(prior),
        origin_id=prior.origin.id,
        destination_id=prior.destination.id,
        provider=provider,
    )


def append_results(prior: SearchResult, page: SearchResult) -> SearchResult:
    """Concatenate a continuation page after a previous result."""
    return prior.model_copy(update={"results": prior.results + page.results})


async def search_stations(
    query: str,
    limit: int = 5,
    provider: JourneyProvider | None = None,
) -> list[Location]:
    """Autocomplete stations and stops for free text.

    Raises:
        InvalidInputError: If the query is shorter than two characters.
        ProviderError: If the provider's location search fails.
    """
    query = (query or "").strip()
    if len(query) < MIN_STATION_QUERY_LENGTH:
        raise InvalidInputError("Query must be at least 2 characters")

    if provider is None:
        async with TransportRestClient(_get_config()) as client:
            locations = await _lookup_locations(
                client, query, limit, cache=_get_location_cache()
            )
    else:
        locations = await _lookup_locations(provider, query, limit, cache=None)

    return [
        location
        for location in locations
        if location.kind in (LocationKind.STATION, LocationKind.STOP)
    ]


def reset_service() -> None:
    """Reset the service state completely.

    Clears the location cache and resets config. Useful for testing.
    """
    global _location_cache, _config
    _location_cache = None
    _config = None
    if hasattr(get_provider_config, "cache_clear"):
        get_provider_config.cache_clear()
