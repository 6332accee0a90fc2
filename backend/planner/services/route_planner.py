"""Plan a round trip: geocode the addresses, fetch the matrix, optimise, assemble."""
import logging

from asgiref.sync import sync_to_async
from django.conf import settings

from planner.exceptions import InvalidRequestError
from planner.services.itinerary import Itinerary, Location, assemble_itinerary
from planner.services.ors import geocode, get_matrix
from planner.services.tour import optimise_tour

logger = logging.getLogger(__name__)


def _normalise(address) -> str:
    return str(address).strip().upper()


def unique_addresses(depot: str, stops: list) -> list[str]:
    """
    Return ``[depot, *stops]`` with repeats removed.

    Stops matching the depot or an earlier stop (trimmed, case-insensitive)
    are dropped, as are empty entries. The first occurrence keeps its
    original spelling.
    """
    seen = {_normalise(depot)}
    unique = []
    for stop in stops:
        if not stop:
            continue
        key = _normalise(stop)
        if key not in seen:
            seen.add(key)
            unique.append(stop)
    return [depot, *unique]


async def resolve_locations(addresses: list[str]) -> list[Location]:
    """Geocode *addresses* one at a time, in order."""
    locations = []
    for address in addresses:
        lon, lat = await geocode(address)
        locations.append(Location(identifier=address, lon=lon, lat=lat))
    return locations


async def plan_round_trip(depot: str, stops: list) -> Itinerary:
    """
    Build the quickest depot → stops → depot itinerary.

    Any geocoding or matrix failure aborts the whole plan.
    """
    if not depot or not str(depot).strip():
        raise InvalidRequestError("A start address is required")
    if not stops:
        raise InvalidRequestError("At least one stop is required")

    addresses = unique_addresses(depot, stops)
    logger.info(
        "Planning round trip from %r through %d unique stop(s)",
        depot,
        len(addresses) - 1,
    )

    locations = await resolve_locations(addresses)
    distances, durations = await get_matrix([(loc.lon, loc.lat) for loc in locations])

    tour, method = await sync_to_async(optimise_tour, thread_sensitive=False)(
        durations, settings.EXACT_SEARCH_MAX_STOPS
    )
    logger.info("Optimised %d location(s) with %s search", len(locations), method)

    return assemble_itinerary(
        tour,
        [loc.identifier for loc in locations],
        distances,
        durations,
        maps_base_url=settings.MAPS_DIRECTIONS_URL,
        method=method,
    )
