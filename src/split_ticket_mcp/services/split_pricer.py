"""Pricing of split tickets for a single direct journey.

Every candidate is priced independently; a candidate that cannot be priced
(missing fare, provider error) is dropped without affecting the others.
"""

import asyncio
import logging
from datetime import datetime

from split_ticket_mcp.data.provider import JourneyProvider
from split_ticket_mcp.models.provider import Journey, Stopover
from split_ticket_mcp.models.responses import JourneyResult, SplitOption
from split_ticket_mcp.services.candidates import (
    MAX_CANDIDATES,
    SplitCandidate,
    flatten_stopovers,
    select_candidates,
)
from split_ticket_mcp.services.connection import resolve_connection_departure

logger = logging.getLogger(__name__)


async def _best_journey(
    provider: JourneyProvider,
    origin_id: str,
    destination_id: str,
    departure: datetime,
) -> Journey | None:
    journeys = await provider.search_journeys(
        origin_id, destination_id, departure=departure, limit=1
    )
    return journeys[0] if journeys else None


async def price_split(
    provider: JourneyProvider,
    origin_id: str,
    destination_id: str,
    candidate: SplitCandidate,
    journey: Journey,
    all_stops: list[Stopover],
    direct_price: float | None,
) -> SplitOption | None:
    """Price origin -> candidate and candidate -> destination as separate tickets.

    The second search depends on the first one's result, so the two calls run
    one after the other.

    Returns:
        SplitOption, or None if either ticket has no price or the provider fails.
    """
    station = candidate.station
    try:
        leg1 = await _best_journey(provider, origin_id, station.id, journey.first_departure)
        price1 = leg1.price_amount if leg1 else None
        if price1 is None:
            logger.debug(f"No fare to split station {station.name}")
            return None

        connection = resolve_connection_departure(candidate, journey, all_stops, leg1)
        leg2 = await _best_journey(provider, station.id, destination_id, connection)
        price2 = leg2.price_amount if leg2 else None
        if price2 is None:
            logger.debug(f"No fare from split station {station.name}")
            return None
    except Exception as e:
        logger.warning(f"Failed to price split at {station.name}: {e}")
        return None

    total_price = price1 + price2
    return SplitOption(
        split_station=station,
        is_transfer=candidate.is_transfer,
        price1=price1,
        price2=price2,
        total_price=total_price,
        savings=direct_price - total_price if direct_price is not None else 0.0,
        leg1=leg1,
        leg2=leg2,
        is_cheaper=total_price < direct_price if direct_price is not None else False,
    )


async def aggregate_journey(
    provider: JourneyProvider,
    origin_id: str,
    destination_id: str,
    journey: Journey,
    max_candidates: int = MAX_CANDIDATES,
) -> JourneyResult:
    """Price all split candidates of a direct journey concurrently.

    Returns:
        JourneyResult with split options sorted by savings, best first. Options
        with equal savings keep their candidate order.
    """
    direct_price = journey.price_amount
    candidates = select_candidates(journey, max_candidates=max_candidates)
    all_stops = flatten_stopovers(journey)

    outcomes = await asyncio.gather(
        *(
            price_split(
                provider,
                origin_id,
                destination_id,
                candidate,
                journey,
                all_stops,
                direct_price,
            )
            for candidate in candidates
        )
    )

    split_options = [option for option in outcomes if option is not None]
    split_options.sort(key=lambda option: option.savings, reverse=True)

    return JourneyResult(
        journey=journey,
        direct_price=direct_price,
        split_options=split_options,
    )
