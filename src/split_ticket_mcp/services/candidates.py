"""Selection of split stations for a direct journey.

Transfer stations come first: the traveller already changes trains there, so
splitting costs nothing extra. Remaining slots are filled by sampling the
intermediate stops at an even stride, skipping the first and last stop.
"""

from dataclasses import dataclass

from split_ticket_mcp.models.provider import Journey, Location, Stopover

# Maximum number of split stations priced per journey
MAX_CANDIDATES = 3

# Intermediate stops are sampled in roughly this many slices
STOP_SAMPLING_SLICES = 4


@dataclass(frozen=True)
class SplitCandidate:
    """A station at which the journey could be split into two tickets."""

    station: Location
    is_transfer: bool


def flatten_stopovers(journey: Journey) -> list[Stopover]:
    """All stopovers of all legs, in travel order."""
    all_stops: list[Stopover] = []
    for leg in journey.legs:
        all_stops.extend(leg.stopovers)
    return all_stops


def select_candidates(
    journey: Journey,
    max_candidates: int = MAX_CANDIDATES,
) -> list[SplitCandidate]:
    """Pick up to `max_candidates` distinct split stations for a journey.

    Args:
        journey: Direct journey with at least one leg.
        max_candidates: Upper bound on returned candidates.

    Returns:
        Transfer candidates (in leg order) followed by sampled intermediate stops.
    """
    candidates: list[SplitCandidate] = []
    seen: set[str] = set()

    for leg in journey.legs[:-1]:
        if len(candidates) >= max_candidates:
            break
        station = leg.destination
        if station.id is None or station.id in seen:
            continue
        candidates.append(SplitCandidate(station=station, is_transfer=True))
        seen.add(station.id)

    if len(candidates) >= max_candidates:
        return candidates

    all_stops = flatten_stopovers(journey)
    if not all_stops:
        return candidates

    step = max(1, len(all_stops) // STOP_SAMPLING_SLICES)
    for i in range(step, len(all_stops) - 1, step):
        if len(candidates) >= max_candidates:
            break
        station = all_stops[i].stop
        if station.id is None or station.id in seen:
            continue
        candidates.append(SplitCandidate(station=station, is_transfer=False))
        seen.add(station.id)

    return candidates
