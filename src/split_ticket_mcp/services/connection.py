"""Departure time used to search the second ticket of a split."""

import logging
from datetime import UTC, datetime

from split_ticket_mcp.models.provider import Journey, Stopover
from split_ticket_mcp.services.candidates import SplitCandidate

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(UTC)


def resolve_connection_departure(
    candidate: SplitCandidate,
    journey: Journey,
    all_stops: list[Stopover],
    first_ticket: Journey,
) -> datetime:
    """Determine when the second ticket's journey search should start.

    At a transfer station this is the departure of the direct journey's next
    leg; at an intermediate stop it is the stop's own departure. When the
    direct journey lacks that information the time is approximated and a
    warning is logged, since it points at inconsistent provider data.

    Args:
        candidate: Split station being priced.
        journey: The direct journey the candidate was taken from.
        all_stops: Flattened stopovers of `journey`.
        first_ticket: Journey found for origin -> split station.

    Returns:
        Earliest departure for the split station -> destination search.
    """
    station_id = candidate.station.id

    if candidate.is_transfer:
        for leg in journey.legs:
            if leg.origin.id == station_id and leg.departure_time is not None:
                return leg.departure_time

        fallback = first_ticket.legs[-1].arrival_time
        logger.warning(
            f"No onward leg from transfer {candidate.station.name} ({station_id}); "
            f"using arrival of first ticket"
        )
        return fallback if fallback is not None else _now()

    for stopover in all_stops:
        if stopover.stop.id != station_id:
            continue
        departure = stopover.departure or stopover.planned_departure
        if departure is not None:
            return departure
        break

    logger.warning(
        f"No departure time at stop {candidate.station.name} ({station_id}); "
        f"searching from now"
    )
    return _now()
